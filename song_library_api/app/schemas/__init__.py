"""
Pydantic schema definitions for API payloads.

Schemas are separated from the database layer to decouple API
representation from persistence.
"""

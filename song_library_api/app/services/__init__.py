"""
Service layer abstraction.

Each service encapsulates business logic for a domain.  API handlers
call services and translate their results into HTTP responses; they
never talk to the database directly.
"""

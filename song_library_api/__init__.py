"""Song Library API: a FastAPI CRUD service for songs stored in SQLite."""

__all__ = []

"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service can start without any configuration; in a deployment you
should override these via environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: os.getenv("PROJECT_NAME", "Song Library API"))
    api_version: str = field(default_factory=lambda: os.getenv("API_VERSION", "1.0.0"))
    debug: bool = field(default_factory=lambda: _env_flag("DEBUG", "false"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    # Optional path of a log file.  When unset only console logging is
    # configured.
    log_file: Optional[str] = field(default_factory=lambda: os.getenv("LOG_FILE") or None)

    # Path to the SQLite database file.  A relative path is resolved
    # against the package root by the ``db`` module.
    database_url: str = field(default_factory=lambda: os.getenv("DATABASE_URL", "songs.db"))

    # Seconds a connection waits on a locked database before SQLite
    # reports ``database is locked``.  Services call sqlite3 from async
    # handlers, so a wait this long also stalls the event loop.
    database_timeout: float = field(default_factory=lambda: float(os.getenv("DATABASE_TIMEOUT", "5.0")))

    # Insert the sample song catalogue when the schema is first created.
    seed_database: bool = field(default_factory=lambda: _env_flag("SEED_DATABASE", "true"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should therefore be set before importing this module.
settings = Settings()

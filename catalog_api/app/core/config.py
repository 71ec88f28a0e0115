"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts without any configuration; in a production deployment you
should at least point ``DATABASE_URL`` at a persistent location.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Catalog API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    # Versioned routes are mounted under this prefix, e.g. ``/v1/users``.
    api_prefix: str = os.getenv("API_PREFIX", "/v1")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite database file.  Relative paths are resolved
    # against the project root by the ``db`` module.  ``:memory:`` is not
    # supported because every store call opens its own connection.
    database_url: str = os.getenv("DATABASE_URL", "catalog.db")
    # Seconds a connection waits on a locked database before failing.
    db_timeout_seconds: float = float(os.getenv("DB_TIMEOUT_SECONDS", "5"))

    default_page_size: int = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
    max_page_size: int = int(os.getenv("MAX_PAGE_SIZE", "100"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at instantiation time, environment variables should
# be set before importing this module.
settings = Settings()

"""
Configuration settings for the Bank Products Backend
"""

import os
import re
import logging

logger = logging.getLogger(__name__)

# Environment configuration
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "postgres").lower()  # postgres or memory
DATABASE_URL = os.getenv("DATABASE_URL")
DATABASE_SCHEMA = os.getenv("DATABASE_SCHEMA", "karate")
PORT = int(os.getenv("PORT", 8080))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Connection pool sizing
DB_POOL_MIN_SIZE = int(os.getenv("DB_POOL_MIN_SIZE", 2))
DB_POOL_MAX_SIZE = int(os.getenv("DB_POOL_MAX_SIZE", 10))
DB_COMMAND_TIMEOUT = float(os.getenv("DB_COMMAND_TIMEOUT", 60))

# CORS settings
ALLOWED_ORIGINS = [origin.strip() for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",") if origin.strip()]

SUPPORTED_BACKENDS = ("postgres", "memory")

_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]{0,62}$")


def is_valid_identifier(name: str) -> bool:
    """Check that a schema or table name is a plain SQL identifier"""
    return bool(name) and _IDENTIFIER_PATTERN.match(name) is not None


def validate_settings(
    backend: str = None,
    database_url: str = None,
    schema: str = None
):
    """
    Validate storage configuration.

    Runs at application startup rather than import time so the app module can
    be imported without a database configured.

    Raises:
        ValueError: if the configuration cannot produce a working store
    """
    backend = backend if backend is not None else STORAGE_BACKEND
    database_url = database_url if database_url is not None else DATABASE_URL
    schema = schema if schema is not None else DATABASE_SCHEMA

    if backend not in SUPPORTED_BACKENDS:
        raise ValueError(
            f"Unsupported STORAGE_BACKEND '{backend}', expected one of: {', '.join(SUPPORTED_BACKENDS)}"
        )
    if backend == "postgres":
        if not database_url:
            raise ValueError("DATABASE_URL environment variable is required for the postgres backend")
        if not is_valid_identifier(schema):
            raise ValueError(f"DATABASE_SCHEMA '{schema}' is not a valid identifier")

    logger.info(f"Storage backend: {backend}")

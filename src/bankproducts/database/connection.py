"""
Database connection, pool management and schema bootstrap
"""

import asyncio
import logging

import asyncpg

from bankproducts.config.settings import (
    DB_POOL_MIN_SIZE, DB_POOL_MAX_SIZE, DB_COMMAND_TIMEOUT, is_valid_identifier
)
from bankproducts.database.store import StorageUnavailableError

logger = logging.getLogger(__name__)

TABLE_NAME = "bank_product"

# Errors that mean the database cannot serve the request at all. Other
# PostgresError subclasses (bad data, constraint violations) are not outages.
STORAGE_ERRORS = (
    asyncpg.InterfaceError,
    asyncpg.PostgresConnectionError,
    asyncpg.InsufficientResourcesError,
    asyncpg.OperatorInterventionError,
    OSError,
    asyncio.TimeoutError,
)


def qualified_table(schema: str) -> str:
    """Return the quoted ``schema.table`` name for the bank product table"""
    if not is_valid_identifier(schema):
        raise ValueError(f"Invalid schema name: {schema!r}")
    return f'"{schema}"."{TABLE_NAME}"'


def schema_ddl(schema: str) -> str:
    return f"""
        CREATE SCHEMA IF NOT EXISTS "{schema}";

        CREATE TABLE IF NOT EXISTS {qualified_table(schema)} (
            id BIGINT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
            title TEXT
        );
    """


async def init_database(database_url: str, schema: str) -> asyncpg.Pool:
    """Create the connection pool and make sure the bank product table exists"""
    try:
        db_pool = await asyncpg.create_pool(
            database_url,
            min_size=DB_POOL_MIN_SIZE,
            max_size=DB_POOL_MAX_SIZE,
            command_timeout=DB_COMMAND_TIMEOUT,
            statement_cache_size=0  # pgbouncer compatibility
        )
    except STORAGE_ERRORS as e:
        raise StorageUnavailableError(f"Could not connect to database: {e}") from e

    try:
        async with db_pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
            await conn.execute(schema_ddl(schema))
    except STORAGE_ERRORS as e:
        await db_pool.close()
        raise StorageUnavailableError(f"Database bootstrap failed: {e}") from e
    except asyncpg.PostgresError:
        await db_pool.close()
        raise

    logger.info(f"Database initialized successfully (schema: {schema})")
    return db_pool


async def close_database(db_pool: asyncpg.Pool):
    """Close database connection pool"""
    if db_pool:
        await db_pool.close()
    logger.info("Database connections closed")

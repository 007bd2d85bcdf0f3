"""
Storage gateway for bank products
"""

from bankproducts.config import settings
from bankproducts.database.connection import init_database
from bankproducts.database.memory_store import InMemoryBankProductStore
from bankproducts.database.postgres_store import PostgresBankProductStore
from bankproducts.database.store import BankProductStore, StorageUnavailableError

__all__ = [
    "BankProductStore",
    "InMemoryBankProductStore",
    "PostgresBankProductStore",
    "StorageUnavailableError",
    "create_store",
]


async def create_store(
    backend: str = None,
    database_url: str = None,
    schema: str = None
) -> BankProductStore:
    """Build the store selected by configuration (explicit arguments win)"""
    backend = backend or settings.STORAGE_BACKEND
    database_url = database_url or settings.DATABASE_URL
    schema = schema or settings.DATABASE_SCHEMA

    settings.validate_settings(backend=backend, database_url=database_url, schema=schema)

    if backend == "memory":
        return InMemoryBankProductStore()

    db_pool = await init_database(database_url, schema)
    return PostgresBankProductStore(db_pool, schema=schema)

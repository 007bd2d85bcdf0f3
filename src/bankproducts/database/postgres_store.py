"""
PostgreSQL-backed bank product store
"""

import logging
from contextlib import asynccontextmanager
from typing import List, Optional

import asyncpg

from bankproducts.database.connection import STORAGE_ERRORS, close_database, qualified_table
from bankproducts.database.store import BankProductStore, StorageUnavailableError
from bankproducts.models.bank_product import BankProduct

logger = logging.getLogger(__name__)


def _to_product(row) -> Optional[BankProduct]:
    if row is None:
        return None
    return BankProduct(id=row["id"], title=row["title"])


class PostgresBankProductStore(BankProductStore):
    """Bank product store on top of an asyncpg pool"""

    backend_name = "postgres"

    def __init__(self, pool: asyncpg.Pool, schema: str = "karate", owns_pool: bool = True):
        self.pool = pool
        self.schema = schema
        self.table = qualified_table(schema)
        self.owns_pool = owns_pool

    @asynccontextmanager
    async def _connection(self):
        try:
            async with self.pool.acquire() as conn:
                yield conn
        except STORAGE_ERRORS as e:
            logger.error(f"Database operation failed on {self.table}: {e}")
            raise StorageUnavailableError(f"Database operation failed: {e}") from e

    async def insert(self, product: BankProduct) -> BankProduct:
        async with self._connection() as conn:
            row = await conn.fetchrow(
                f"INSERT INTO {self.table} (title) VALUES ($1) RETURNING id, title",
                product.title
            )
        return _to_product(row)

    async def find_by_id(self, product_id: int) -> Optional[BankProduct]:
        async with self._connection() as conn:
            row = await conn.fetchrow(
                f"SELECT id, title FROM {self.table} WHERE id = $1",
                product_id
            )
        return _to_product(row)

    async def find_all(self) -> List[BankProduct]:
        async with self._connection() as conn:
            rows = await conn.fetch(f"SELECT id, title FROM {self.table} ORDER BY id")
        return [_to_product(row) for row in rows]

    async def replace(self, product: BankProduct) -> Optional[BankProduct]:
        async with self._connection() as conn:
            row = await conn.fetchrow(
                f"UPDATE {self.table} SET title = $2 WHERE id = $1 RETURNING id, title",
                product.id,
                product.title
            )
        return _to_product(row)

    async def delete_by_id(self, product_id: int) -> None:
        async with self._connection() as conn:
            await conn.execute(f"DELETE FROM {self.table} WHERE id = $1", product_id)

    async def delete_all(self) -> None:
        async with self._connection() as conn:
            await conn.execute(f"DELETE FROM {self.table}")

    async def exists_by_id(self, product_id: int) -> bool:
        async with self._connection() as conn:
            return await conn.fetchval(
                f"SELECT EXISTS(SELECT 1 FROM {self.table} WHERE id = $1)",
                product_id
            )

    async def count(self) -> int:
        async with self._connection() as conn:
            return await conn.fetchval(f"SELECT count(*) FROM {self.table}")

    async def close(self) -> None:
        if self.owns_pool:
            await close_database(self.pool)

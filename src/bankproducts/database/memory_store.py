"""
In-process bank product store, used for local runs and tests
"""

import itertools
import logging
from typing import Dict, List, Optional

from bankproducts.database.store import BankProductStore
from bankproducts.models.bank_product import BankProduct

logger = logging.getLogger(__name__)


class InMemoryBankProductStore(BankProductStore):
    """Dictionary-backed store; ids are issued from a counter starting at 1"""

    backend_name = "memory"

    def __init__(self):
        self._records: Dict[int, BankProduct] = {}
        self._ids = itertools.count(1)
        logger.info("In-memory bank product store initialized")

    async def insert(self, product: BankProduct) -> BankProduct:
        stored = BankProduct(id=next(self._ids), title=product.title)
        self._records[stored.id] = stored
        return stored.model_copy()

    async def find_by_id(self, product_id: int) -> Optional[BankProduct]:
        stored = self._records.get(product_id)
        return stored.model_copy() if stored is not None else None

    async def find_all(self) -> List[BankProduct]:
        # dicts keep insertion order, which matches id order here
        return [record.model_copy() for record in self._records.values()]

    async def replace(self, product: BankProduct) -> Optional[BankProduct]:
        if product.id not in self._records:
            return None
        stored = BankProduct(id=product.id, title=product.title)
        self._records[product.id] = stored
        return stored.model_copy()

    async def delete_by_id(self, product_id: int) -> None:
        self._records.pop(product_id, None)

    async def delete_all(self) -> None:
        self._records.clear()

    async def exists_by_id(self, product_id: int) -> bool:
        return product_id in self._records

    async def count(self) -> int:
        return len(self._records)

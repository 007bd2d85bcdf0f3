"""
Storage gateway contract for bank products
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from bankproducts.models.bank_product import BankProduct


class StorageUnavailableError(RuntimeError):
    """Raised when the underlying storage cannot be reached or fails"""


class BankProductStore(ABC):
    """
    Durable persistence for bank product records.

    Lookups return ``None`` for missing ids; only infrastructure failures
    raise (as ``StorageUnavailableError``).
    """

    backend_name = "unknown"

    @abstractmethod
    async def insert(self, product: BankProduct) -> BankProduct:
        """Persist a new record and return it with its assigned id"""

    @abstractmethod
    async def find_by_id(self, product_id: int) -> Optional[BankProduct]:
        """Return the record for ``product_id`` or None"""

    @abstractmethod
    async def find_all(self) -> List[BankProduct]:
        """Return every record ordered by id"""

    @abstractmethod
    async def replace(self, product: BankProduct) -> Optional[BankProduct]:
        """Overwrite the stored record with the same id, None if it is gone"""

    @abstractmethod
    async def delete_by_id(self, product_id: int) -> None:
        """Remove a record; missing ids are ignored"""

    @abstractmethod
    async def delete_all(self) -> None:
        """Remove every record"""

    @abstractmethod
    async def exists_by_id(self, product_id: int) -> bool:
        ...

    @abstractmethod
    async def count(self) -> int:
        ...

    async def close(self) -> None:
        """Release any resources held by the store"""

"""
Bank products service - business logic for bank product management
"""

import logging
from typing import List, Optional

from fastapi import Request

from bankproducts.database.store import BankProductStore
from bankproducts.models.bank_product import (
    BankProduct, BankProductCreateRequest, BankProductUpdateRequest, apply_update
)

logger = logging.getLogger(__name__)


class BankProductsService:
    """Service for bank product CRUD operations"""

    def __init__(self, store: BankProductStore):
        self.store = store

    async def create(self, request: BankProductCreateRequest) -> BankProduct:
        """
        Create a new bank product

        Args:
            request: Incoming product data; any id it carries is discarded

        Returns:
            The persisted product with its store-assigned id
        """
        created = await self.store.insert(BankProduct(title=request.title))
        logger.info(f"Created bank product {created.id}")
        return created

    async def get_by_id(self, product_id: int) -> Optional[BankProduct]:
        """Get a bank product by its ID, or None if it does not exist"""
        return await self.store.find_by_id(product_id)

    async def get_all(self) -> List[BankProduct]:
        return await self.store.find_all()

    async def update(self, product_id: int, request: BankProductUpdateRequest) -> Optional[BankProduct]:
        """
        Replace the title of an existing bank product

        Args:
            product_id: ID of the product to update
            request: New product data; only the title is used

        Returns:
            The updated product, or None if no product has that ID
        """
        existing = await self.store.find_by_id(product_id)
        if existing is None:
            logger.info(f"Bank product {product_id} not found for update")
            return None

        updated = await self.store.replace(apply_update(existing, request))
        if updated is None:
            logger.warning(f"Bank product {product_id} disappeared during update")
            return None

        logger.info(f"Updated bank product {product_id}")
        return updated

    async def delete(self, product_id: int) -> bool:
        """
        Delete a bank product

        Returns:
            True if the product existed and was deleted, False otherwise
        """
        existing = await self.store.find_by_id(product_id)
        if existing is None:
            logger.info(f"Bank product {product_id} not found for delete")
            return False

        await self.store.delete_by_id(product_id)
        logger.info(f"Deleted bank product {product_id}")
        return True


def get_bank_products_service(request: Request) -> BankProductsService:
    """FastAPI dependency returning the service created at application startup"""
    return request.app.state.bank_products_service

"""
Bank product API routes
All storage access goes through the bank products service.
"""

import logging
from typing import Annotated, List
from fastapi import APIRouter, Depends, Path, Response, status

from bankproducts.models.bank_product import (
    BankProductCreateRequest, BankProductUpdateRequest, BankProductResponse
)
from bankproducts.services.bank_products_service import BankProductsService, get_bank_products_service

router = APIRouter()
logger = logging.getLogger(__name__)

# Product ids are BIGINT in storage
MIN_PRODUCT_ID = -(2 ** 63)
MAX_PRODUCT_ID = 2 ** 63 - 1

ProductId = Annotated[int, Path(ge=MIN_PRODUCT_ID, le=MAX_PRODUCT_ID, description="Bank product ID")]


def product_location(product_id: int) -> str:
    return f"/bankproducts/{product_id}"


@router.post("", response_model=BankProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    request: BankProductCreateRequest,
    response: Response,
    service: BankProductsService = Depends(get_bank_products_service)
):
    """Create a new bank product"""
    created = await service.create(request)
    response.headers["Location"] = product_location(created.id)
    return BankProductResponse(id=created.id, title=created.title)


@router.get("/{product_id}", response_model=BankProductResponse)
async def get_product(
    product_id: ProductId,
    service: BankProductsService = Depends(get_bank_products_service)
):
    """Get bank product by ID"""
    product = await service.get_by_id(product_id)
    if product is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    return BankProductResponse(id=product.id, title=product.title)


@router.get("", response_model=List[BankProductResponse])
async def list_products(
    service: BankProductsService = Depends(get_bank_products_service)
):
    """List all bank products"""
    products = await service.get_all()
    return [BankProductResponse(id=p.id, title=p.title) for p in products]


@router.put("/{product_id}", response_model=BankProductResponse)
async def update_product(
    request: BankProductUpdateRequest,
    product_id: ProductId,
    service: BankProductsService = Depends(get_bank_products_service)
):
    """Replace the title of a bank product"""
    updated = await service.update(product_id, request)
    if updated is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    return BankProductResponse(id=updated.id, title=updated.title)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: ProductId,
    service: BankProductsService = Depends(get_bank_products_service)
):
    """Delete a bank product"""
    deleted = await service.delete(product_id)
    if not deleted:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    return Response(status_code=status.HTTP_204_NO_CONTENT)

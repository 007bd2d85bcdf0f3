"""
Route tests with the bank products service mocked out
Checks the status code and body mapping only.
"""

from unittest.mock import AsyncMock

import httpx
import pytest

from bankproducts.app import create_app
from bankproducts.database import InMemoryBankProductStore
from bankproducts.models.bank_product import (
    BankProduct, BankProductCreateRequest, BankProductUpdateRequest
)
from bankproducts.services.bank_products_service import BankProductsService, get_bank_products_service


@pytest.fixture
def service():
    return AsyncMock(spec=BankProductsService)


@pytest.fixture
async def mocked_client(service):
    app = create_app(store=InMemoryBankProductStore())
    app.dependency_overrides[get_bank_products_service] = lambda: service

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client


async def test_create_product(mocked_client, service):
    service.create.return_value = BankProduct(id=1, title="Test Product")

    response = await mocked_client.post("/bankproducts", json={"title": "Test Product"})

    assert response.status_code == 201
    assert response.json() == {"id": 1, "title": "Test Product"}
    assert response.headers["Location"] == "/bankproducts/1"
    service.create.assert_awaited_once_with(BankProductCreateRequest(title="Test Product"))


async def test_get_product_by_id(mocked_client, service):
    service.get_by_id.return_value = BankProduct(id=1, title="Test Product")

    response = await mocked_client.get("/bankproducts/1")

    assert response.status_code == 200
    assert response.json()["title"] == "Test Product"
    service.get_by_id.assert_awaited_once_with(1)


async def test_get_product_by_id_not_found(mocked_client, service):
    service.get_by_id.return_value = None

    response = await mocked_client.get("/bankproducts/1")

    assert response.status_code == 404


async def test_get_all_products(mocked_client, service):
    service.get_all.return_value = [BankProduct(id=1, title="A"), BankProduct(id=2, title="B")]

    response = await mocked_client.get("/bankproducts")

    assert response.status_code == 200
    assert response.json() == [{"id": 1, "title": "A"}, {"id": 2, "title": "B"}]


async def test_update_product(mocked_client, service):
    service.update.return_value = BankProduct(id=1, title="Updated")

    response = await mocked_client.put("/bankproducts/1", json={"title": "Updated"})

    assert response.status_code == 200
    assert response.json() == {"id": 1, "title": "Updated"}
    service.update.assert_awaited_once_with(1, BankProductUpdateRequest(title="Updated"))


async def test_update_product_not_found(mocked_client, service):
    service.update.return_value = None

    response = await mocked_client.put("/bankproducts/1", json={"title": "Updated"})

    assert response.status_code == 404


async def test_delete_product(mocked_client, service):
    service.delete.return_value = True

    response = await mocked_client.delete("/bankproducts/1")

    assert response.status_code == 204
    service.delete.assert_awaited_once_with(1)


async def test_delete_product_not_found(mocked_client, service):
    service.delete.return_value = False

    response = await mocked_client.delete("/bankproducts/1")

    assert response.status_code == 404


async def test_malformed_id_never_reaches_service(mocked_client, service):
    response = await mocked_client.get("/bankproducts/not-a-number")

    assert response.status_code == 400
    service.get_by_id.assert_not_awaited()

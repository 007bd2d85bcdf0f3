"""
Pytest configuration and shared fixtures for the bank products test suite
"""

import os
from typing import AsyncGenerator, Callable

import httpx
import pytest
from faker import Faker

from bankproducts.app import create_app
from bankproducts.database import InMemoryBankProductStore

# Tavern scenarios need a live server; only collect them when one is configured
if not os.getenv("TEST_API_BASE_URL"):
    collect_ignore_glob = ["api/*.tavern.yaml"]


@pytest.fixture
def memory_store() -> InMemoryBankProductStore:
    return InMemoryBankProductStore()


@pytest.fixture
def app(memory_store):
    """Application wired to a fresh in-memory store"""
    return create_app(store=memory_store)


@pytest.fixture
async def client(app) -> AsyncGenerator[httpx.AsyncClient, None]:
    """In-process HTTP client for the application"""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client


@pytest.fixture
def product_title() -> Callable[[], str]:
    """Factory for realistic, clearly-marked product titles"""
    fake = Faker()

    def make_title() -> str:
        return f"TEST {fake.company()} {fake.random_element(['Savings', 'Deposit', 'Credit Card', 'Mortgage'])}"

    return make_title


# === MARKERS ===

def pytest_collection_modifyitems(config, items):
    """Add markers based on test location and names"""
    for item in items:
        path = str(item.fspath)

        if f"{os.sep}integration{os.sep}" in path:
            item.add_marker(pytest.mark.integration)
        if path.endswith(".tavern.yaml"):
            item.add_marker(pytest.mark.api)

        name = item.name.lower()
        if any(word in name for word in ["create", "get", "list", "update", "delete", "crud"]):
            item.add_marker(pytest.mark.crud)
        if any(word in name for word in ["health", "lifecycle", "scenario"]):
            item.add_marker(pytest.mark.smoke)

"""
Bank Products Backend API Server
Core functionality: CRUD over bank products backed by PostgreSQL
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bankproducts import __version__
from bankproducts.config.settings import ALLOWED_ORIGINS
from bankproducts.database import BankProductStore, create_store
from bankproducts.api.routes import bank_products, health
from bankproducts.services.bank_products_service import BankProductsService
from bankproducts.utils.error_handling import setup_error_handling

logger = logging.getLogger(__name__)


def _attach_store(app: FastAPI, store: BankProductStore):
    app.state.bank_product_store = store
    app.state.bank_products_service = BankProductsService(store)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the store from configuration unless one was supplied to create_app"""
    owns_store = getattr(app.state, "bank_product_store", None) is None
    if owns_store:
        _attach_store(app, await create_store())

    yield

    if owns_store:
        await app.state.bank_product_store.close()


def create_app(store: Optional[BankProductStore] = None) -> FastAPI:
    """
    Create the FastAPI application

    Args:
        store: Storage gateway to serve from. When omitted the store is built
            from environment configuration during application startup.
    """
    app = FastAPI(
        title="Bank Products Backend",
        description="CRUD API for bank products",
        version=__version__,
        lifespan=lifespan
    )

    if store is not None:
        _attach_store(app, store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    setup_error_handling(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(bank_products.router, prefix="/bankproducts", tags=["Bank Products"])

    return app


# FastAPI app instance is exported for use by uvicorn
# Server startup is handled by main.py at the project root
app = create_app()

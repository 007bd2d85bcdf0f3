"""
Health check API route
"""

from datetime import datetime, timezone
from fastapi import APIRouter, Request, HTTPException

from bankproducts.database.store import StorageUnavailableError

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """
    Health check - reports storage connectivity

    Answers 503 when the store cannot be reached so orchestrators can
    restart or drain the instance.
    """
    store = request.app.state.bank_product_store

    try:
        product_count = await store.count()
    except StorageUnavailableError as e:
        raise HTTPException(status_code=503, detail=f"Health check failed: {str(e)}")

    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "storage": store.backend_name,
        "bank_products": product_count
    }

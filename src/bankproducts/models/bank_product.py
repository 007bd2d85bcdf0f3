"""
Bank product Pydantic models
"""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, field_validator


class BankProduct(BaseModel):
    """A persisted (or about to be persisted) bank product record"""
    id: Optional[int] = None
    title: Optional[str] = None


class BankProductPayload(BaseModel):
    """
    Request body shared by create and update.

    Scalar JSON titles (numbers, booleans) bind as their text form; objects
    and arrays are still rejected.
    """
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    # id is accepted for wire compatibility but never used
    id: Optional[int] = None
    title: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def boolean_title_as_text(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return "true" if value else "false"
        return value


class BankProductCreateRequest(BankProductPayload):
    pass


class BankProductUpdateRequest(BankProductPayload):
    pass


class BankProductResponse(BaseModel):
    id: int
    title: Optional[str] = None


def apply_update(existing: BankProduct, changes: BankProductUpdateRequest) -> BankProduct:
    """
    Merge an update request onto an existing record.

    Works on a copy of ``existing``; only ``title`` is taken from ``changes``
    and the id always comes from the existing record.
    """
    merged = existing.model_copy()
    merged.title = changes.title
    return merged

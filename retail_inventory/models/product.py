from beanie import Document, Indexed
from pydantic import Field
from typing import Annotated
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Product(Document):
    # id: assigned by MongoDB on insert (ObjectId), never reused

    # --- Identification ---
    name: str = Field(...)
    code: Annotated[str, Indexed(unique=True)]  # Stock Code, unique across the catalogue

    # --- Stock ---
    quantity: int = Field(..., ge=0)
    low_stock_threshold: int = Field(default=10)  # Alert Trigger Level

    # --- Financials ---
    price: float = Field(..., gt=0)  # Selling Price

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "products"

from beanie import PydanticObjectId
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from datetime import datetime

# Largest count a request may carry (32-bit signed integer)
MAX_COUNT = 2**31 - 1

# --- 1. PRODUCT FIELDS (shared by create + update) ---
# Used by: POST /products, PUT /products/{id}
class ProductBase(BaseModel):
    name: str = Field(..., description="Product name. Must not be blank.")
    code: str = Field(..., description="Unique stock code. Must not be blank.")
    quantity: int = Field(..., ge=0, le=MAX_COUNT, description="Units on hand. Zero or positive.")
    price: float = Field(..., gt=0, description="Selling price. Must be positive.")
    low_stock_threshold: int = Field(default=10, ge=-MAX_COUNT - 1, le=MAX_COUNT)

    @field_validator("name", "code")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

class ProductCreate(ProductBase):
    pass

# Updates are wholesale: every field is required again
class ProductUpdate(ProductBase):
    pass

# --- 2. OUTPUT ---
class ProductResponse(BaseModel):
    id: PydanticObjectId
    name: str
    code: str
    quantity: int
    price: float
    low_stock_threshold: int
    created_at: datetime
    updated_at: datetime

    @computed_field
    @property
    def low_stock(self) -> bool:
        return self.quantity < self.low_stock_threshold

    model_config = ConfigDict(from_attributes=True)

# --- 3. STOCK ADJUSTMENT ---
# Used by: PATCH /products/{id}/increase-stock and /decrease-stock
class StockAdjustment(BaseModel):
    quantity: int = Field(..., gt=0, le=MAX_COUNT, description="Amount to add or remove. Must be positive.")

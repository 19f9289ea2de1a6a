from typing import List, Optional

from beanie import PydanticObjectId
from pymongo.errors import DuplicateKeyError

from retail_inventory.core.logging import get_logger
from retail_inventory.models.product import Product, utcnow
from retail_inventory.repositories.product_store import ProductStore
from retail_inventory.schemas.product import ProductCreate, ProductUpdate
from retail_inventory.services.results import (
    DuplicateCode,
    InsufficientStock,
    NotFound,
    Ok,
    Result,
)

logger = get_logger(__name__)


class InventoryService:
    """Inventory rules on top of a :class:`ProductStore`.

    Operations return a result variant (``Ok`` or one of the failures in
    :mod:`retail_inventory.services.results`) instead of raising. Stock
    amounts are assumed positive; the request schemas check that.
    """

    def __init__(self, store: ProductStore):
        self.store = store

    # ==========================================
    # QUERIES
    # ==========================================

    async def list(self) -> List[Product]:
        return await self.store.find_all()

    async def get(self, product_id: PydanticObjectId) -> Result[Product]:
        product = await self.store.get(product_id)
        if product is None:
            return NotFound(product_id)
        return Ok(product)

    async def get_by_code(self, code: str) -> Result[Product]:
        product = await self.store.get_by_code(code)
        if product is None:
            return NotFound(code)
        return Ok(product)

    async def search(self, text: str) -> List[Product]:
        return await self.store.search_by_name(text)

    async def list_low_stock(self) -> List[Product]:
        return await self.store.find_low_stock()

    # ==========================================
    # MUTATIONS
    # ==========================================

    async def create(self, data: ProductCreate) -> Result[Product]:
        if await self.store.exists_by_code(data.code):
            logger.warning("product_create_rejected", reason="duplicate_code", code=data.code)
            return DuplicateCode(data.code)

        try:
            product = await self.store.insert(Product(**data.model_dump()))
        except DuplicateKeyError:
            # Another request inserted the same code between check and insert
            logger.warning("product_create_rejected", reason="duplicate_code", code=data.code)
            return DuplicateCode(data.code)

        logger.info("product_created", product_id=str(product.id), code=product.code)
        return Ok(product)

    async def update(self, product_id: PydanticObjectId, data: ProductUpdate) -> Result[Product]:
        product = await self.store.get(product_id)
        if product is None:
            return NotFound(product_id)

        product.name = data.name
        product.code = data.code
        product.price = data.price
        product.quantity = data.quantity
        product.low_stock_threshold = data.low_stock_threshold
        product.updated_at = utcnow()

        # Code uniqueness is not checked up front here; only the unique
        # index stops a collision with another product.
        try:
            product = await self.store.save(product)
        except DuplicateKeyError:
            logger.warning(
                "product_update_rejected",
                reason="duplicate_code",
                product_id=str(product_id),
                code=data.code,
            )
            return DuplicateCode(data.code)

        logger.info("product_updated", product_id=str(product.id), code=product.code)
        return Ok(product)

    async def delete(self, product_id: PydanticObjectId) -> Result[None]:
        if not await self.store.exists(product_id):
            return NotFound(product_id)

        await self.store.delete(product_id)
        logger.info("product_deleted", product_id=str(product_id))
        return Ok(None)

    async def increase_stock(self, product_id: PydanticObjectId, amount: int) -> Result[Product]:
        product = await self.store.increment_quantity(product_id, amount)
        if product is None:
            return NotFound(product_id)

        logger.info("stock_increased", product_id=str(product_id), amount=amount, quantity=product.quantity)
        return Ok(product)

    async def decrease_stock(self, product_id: PydanticObjectId, amount: int) -> Result[Product]:
        # Guarded decrement: only applies while quantity >= amount
        product = await self.store.increment_quantity(product_id, -amount, minimum=amount)
        if product is not None:
            logger.info("stock_decreased", product_id=str(product_id), amount=amount, quantity=product.quantity)
            return Ok(product)

        current: Optional[Product] = await self.store.get(product_id)
        if current is None:
            return NotFound(product_id)

        logger.warning(
            "stock_decrease_rejected",
            product_id=str(product_id),
            available=current.quantity,
            requested=amount,
        )
        return InsufficientStock(available=current.quantity, requested=amount)

import re
from typing import List, Optional

from beanie import PydanticObjectId, UpdateResponse
from beanie.operators import Inc, Set

from retail_inventory.models.product import Product, utcnow


class ProductStore:
    """Persistence for :class:`Product` documents.

    Thin wrapper over the Beanie document API. The unique index on
    ``code`` is enforced by MongoDB, so ``insert`` and ``save`` may raise
    ``pymongo.errors.DuplicateKeyError``.
    """

    async def insert(self, product: Product) -> Product:
        return await product.insert()

    async def get(self, product_id: PydanticObjectId) -> Optional[Product]:
        return await Product.get(product_id)

    async def get_by_code(self, code: str) -> Optional[Product]:
        return await Product.find_one(Product.code == code)

    async def find_all(self) -> List[Product]:
        return await Product.find_all().to_list()

    async def search_by_name(self, text: str) -> List[Product]:
        # Literal, case-insensitive substring match; "" matches everything
        return await Product.find(
            {"name": {"$regex": re.escape(text), "$options": "i"}}
        ).to_list()

    async def find_low_stock(self) -> List[Product]:
        return await Product.find(
            {"$expr": {"$lt": ["$quantity", "$low_stock_threshold"]}}
        ).to_list()

    async def exists(self, product_id: PydanticObjectId) -> bool:
        return await Product.find(Product.id == product_id).count() > 0

    async def exists_by_code(self, code: str) -> bool:
        return await Product.find(Product.code == code).count() > 0

    async def save(self, product: Product) -> Product:
        """Write the editable fields of an existing product back in place."""
        await Product.find_one(Product.id == product.id).update(
            Set({
                Product.name: product.name,
                Product.code: product.code,
                Product.price: product.price,
                Product.quantity: product.quantity,
                Product.low_stock_threshold: product.low_stock_threshold,
                Product.updated_at: product.updated_at,
            })
        )
        return product

    async def increment_quantity(
        self,
        product_id: PydanticObjectId,
        delta: int,
        minimum: Optional[int] = None,
    ) -> Optional[Product]:
        """Atomically add ``delta`` to the quantity and return the new document.

        With ``minimum`` set, the update only applies while the current
        quantity is at least ``minimum``. Returns ``None`` when no document
        matched (missing id, or the guard failed).
        """
        query = Product.find_one(Product.id == product_id)
        if minimum is not None:
            query = Product.find_one(Product.id == product_id, Product.quantity >= minimum)

        return await query.update(
            Inc({Product.quantity: delta}),
            Set({Product.updated_at: utcnow()}),
            response_type=UpdateResponse.NEW_DOCUMENT,
        )

    async def delete(self, product_id: PydanticObjectId) -> bool:
        result = await Product.find_one(Product.id == product_id).delete()
        return bool(result and result.deleted_count)

    async def delete_all(self) -> int:
        result = await Product.delete_all()
        return result.deleted_count if result else 0

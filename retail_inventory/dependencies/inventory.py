from fastapi import Depends

from retail_inventory.repositories.product_store import ProductStore
from retail_inventory.services.inventory import InventoryService


def get_product_store() -> ProductStore:
    return ProductStore()


# Routers receive the service through Depends(); tests can override either provider
def get_inventory_service(store: ProductStore = Depends(get_product_store)) -> InventoryService:
    return InventoryService(store)

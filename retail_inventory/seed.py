import argparse
import asyncio
from typing import Iterable, List

from retail_inventory.core.config import settings
from retail_inventory.core.database import init_db
from retail_inventory.core.logging import configure_logging
from retail_inventory.repositories.product_store import ProductStore
from retail_inventory.schemas.product import ProductCreate
from retail_inventory.services.inventory import InventoryService
from retail_inventory.services.results import Ok

SAMPLE_PRODUCTS = [
    ProductCreate(name="Widget", code="W1", quantity=5, price=2.5),
    ProductCreate(name="Gadget", code="G1", quantity=40, price=12.0),
    ProductCreate(name="Sprocket", code="S1", quantity=12, price=0.75, low_stock_threshold=20),
    ProductCreate(name="Gizmo", code="GZ1", quantity=0, price=19.99),
]


async def seed_products(service: InventoryService, products: Iterable[ProductCreate] = SAMPLE_PRODUCTS) -> List[str]:
    """Create each product whose code is not taken yet; returns the created codes."""
    created = []
    for data in products:
        result = await service.create(data)
        if isinstance(result, Ok):
            created.append(result.value.code)
        else:
            print(f"Skipped {data.code}: {result.message}")
    return created


async def seed_data(reset: bool = False):
    print(f"Connecting to DB: {settings.DATABASE_NAME}...")
    await init_db()

    store = ProductStore()
    if reset:
        deleted = await store.delete_all()
        print(f"Deleted {deleted} existing products.")

    created = await seed_products(InventoryService(store))
    print(f"SUCCESS! Created {len(created)} products: {', '.join(created) or '-'}")


def parse_arguments():
    parser = argparse.ArgumentParser(description="Seed the inventory database with sample products")
    parser.add_argument("--reset", action="store_true",
                        help="Delete ALL products before seeding")
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_arguments()
    configure_logging(settings)
    asyncio.run(seed_data(reset=args.reset))

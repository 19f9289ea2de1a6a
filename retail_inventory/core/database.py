from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient
from beanie import init_beanie
from retail_inventory.core.config import settings
from retail_inventory.core.logging import get_logger
from retail_inventory.models.product import Product

logger = get_logger(__name__)


async def init_db(client: Optional[AsyncIOMotorClient] = None, database_name: Optional[str] = None):
    """Connect to MongoDB and initialize Beanie.

    A ready-made client (e.g. an in-memory one in tests) can be passed in;
    otherwise one is created from ``settings.MONGODB_URL``.
    """
    if client is None:
        client = AsyncIOMotorClient(settings.MONGODB_URL)
    database_name = database_name or settings.DATABASE_NAME

    # Builds the unique index on Product.code if it is missing
    await init_beanie(
        database=client[database_name],
        document_models=[Product]
    )

    logger.info("beanie_initialized", database=database_name)
    return client

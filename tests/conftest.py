import pytest
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from retail_inventory.core.database import init_db
from retail_inventory.main import app
from retail_inventory.repositories.product_store import ProductStore
from retail_inventory.schemas.product import ProductCreate
from retail_inventory.services.inventory import InventoryService


@pytest.fixture()
async def db():
    """Fresh in-memory database with Beanie bound to it, one per test."""
    client = AsyncMongoMockClient()
    await init_db(client=client, database_name="retail_inventory_test")
    yield client


@pytest.fixture()
def store(db):
    return ProductStore()


@pytest.fixture()
def service(store):
    return InventoryService(store)


@pytest.fixture()
async def client(db):
    # ASGITransport skips the lifespan, so no real MongoDB connection is made
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


@pytest.fixture()
def make_product(service):
    """Create a product through the service and return the stored document."""

    async def _make(name="Widget", code="W1", quantity=5, price=2.5, **extra):
        result = await service.create(
            ProductCreate(name=name, code=code, quantity=quantity, price=price, **extra)
        )
        return result.value

    return _make

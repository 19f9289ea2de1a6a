"""HTTP surface of the products router."""

import pytest
from beanie import PydanticObjectId

from retail_inventory.core.config import settings

WIDGET = {"name": "Widget", "code": "W1", "quantity": 5, "price": 2.5}


async def create(client, **overrides):
    response = await client.post("/products", json={**WIDGET, **overrides})
    assert response.status_code == 200, response.text
    return response.json()


class TestSystemEndpoints:
    async def test_root(self, client):
        response = await client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "Online"

    async def test_health(self, client):
        response = await client.get("/health")
        assert response.json() == {"status": "ok"}


class TestCreateProduct:
    async def test_create_returns_product_with_defaults(self, client):
        data = await create(client)

        assert data["id"]
        assert data["name"] == "Widget"
        assert data["code"] == "W1"
        assert data["quantity"] == 5
        assert data["price"] == 2.5
        assert data["low_stock_threshold"] == 10
        assert data["low_stock"] is True

    async def test_duplicate_code(self, client):
        await create(client)

        response = await client.post("/products", json={**WIDGET, "name": "Another"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Product with code W1 already exists"

    @pytest.mark.parametrize(
        "overrides, field",
        [
            ({"name": ""}, "name"),
            ({"name": "   "}, "name"),
            ({"code": ""}, "code"),
            ({"quantity": -1}, "quantity"),
            ({"price": 0}, "price"),
            ({"price": -3.5}, "price"),
            ({"quantity": 10**20}, "quantity"),
            ({"quantity": 2**31}, "quantity"),
            ({"low_stock_threshold": 10**20}, "low_stock_threshold"),
        ],
    )
    async def test_invalid_fields(self, client, overrides, field):
        response = await client.post("/products", json={**WIDGET, **overrides})

        assert response.status_code == 400
        body = response.json()
        assert body["detail"] == "Validation failed"
        assert field in body["errors"]

    async def test_threshold_has_no_lower_limit(self, client):
        data = await create(client, low_stock_threshold=-1)

        assert data["low_stock_threshold"] == -1
        assert data["low_stock"] is False

    async def test_missing_fields_are_reported_per_field(self, client):
        response = await client.post("/products", json={"name": "Widget"})

        assert response.status_code == 400
        assert set(response.json()["errors"]) == {"code", "quantity", "price"}


class TestReadProducts:
    async def test_list(self, client):
        await create(client)
        await create(client, name="Gadget", code="G1", quantity=40)

        response = await client.get("/products")

        assert response.status_code == 200
        assert {p["code"] for p in response.json()} == {"W1", "G1"}

    async def test_get_by_id(self, client):
        created = await create(client)

        response = await client.get(f"/products/{created['id']}")

        assert response.status_code == 200
        assert response.json()["code"] == "W1"

    async def test_get_missing_is_404(self, client):
        response = await client.get(f"/products/{PydanticObjectId()}")
        assert response.status_code == 404

    async def test_malformed_id_is_400(self, client):
        response = await client.get("/products/not-an-id")
        assert response.status_code == 400
        assert "product_id" in response.json()["errors"]

    async def test_search(self, client):
        await create(client)
        await create(client, name="Gadget", code="G1")
        await create(client, name="WIDGET XL", code="W2")

        response = await client.get("/products/search", params={"query": "wid"})

        assert response.status_code == 200
        assert {p["code"] for p in response.json()} == {"W1", "W2"}

    async def test_low_stock(self, client):
        await create(client, code="LOW", quantity=3)
        await create(client, code="EDGE", quantity=10)
        await create(client, code="OK", quantity=50)

        response = await client.get("/products/low-stock")

        assert response.status_code == 200
        assert [p["code"] for p in response.json()] == ["LOW"]


class TestUpdateProduct:
    async def test_update(self, client):
        created = await create(client)

        response = await client.put(
            f"/products/{created['id']}",
            json={"name": "Widget", "code": "W1", "quantity": 50, "price": 3.0, "low_stock_threshold": 5},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["quantity"] == 50
        assert data["price"] == 3.0
        assert data["low_stock"] is False

    async def test_update_requires_every_field(self, client):
        created = await create(client)

        response = await client.put(f"/products/{created['id']}", json={"quantity": 50})

        assert response.status_code == 400

    async def test_update_to_taken_code_is_400(self, client):
        await create(client, name="Widget", code="A1")
        second = await create(client, name="Gadget", code="B1")

        response = await client.put(
            f"/products/{second['id']}",
            json={"name": "Gadget", "code": "A1", "quantity": 5, "price": 2.5},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Product with code A1 already exists"
        assert (await client.get(f"/products/{second['id']}")).json()["code"] == "B1"

    async def test_update_missing_is_400(self, client):
        response = await client.put(f"/products/{PydanticObjectId()}", json=WIDGET)

        assert response.status_code == 400
        assert response.json()["detail"].startswith("Product not found with id")

    async def test_update_missing_is_404_when_strict(self, client, monkeypatch):
        monkeypatch.setattr(settings, "STRICT_NOT_FOUND", True)

        response = await client.put(f"/products/{PydanticObjectId()}", json=WIDGET)

        assert response.status_code == 404


class TestDeleteProduct:
    async def test_delete(self, client):
        created = await create(client)

        response = await client.delete(f"/products/{created['id']}")

        assert response.status_code == 204
        assert response.content == b""
        assert (await client.get(f"/products/{created['id']}")).status_code == 404

    async def test_delete_missing_is_400(self, client):
        response = await client.delete(f"/products/{PydanticObjectId()}")
        assert response.status_code == 400


class TestStockEndpoints:
    async def test_increase_stock(self, client):
        created = await create(client)

        response = await client.patch(f"/products/{created['id']}/increase-stock", json={"quantity": 10})

        assert response.status_code == 200
        assert response.json()["quantity"] == 15
        assert response.json()["low_stock"] is False

    async def test_decrease_stock(self, client):
        created = await create(client, quantity=15)

        response = await client.patch(f"/products/{created['id']}/decrease-stock", json={"quantity": 6})

        assert response.status_code == 200
        assert response.json()["quantity"] == 9

    async def test_insufficient_stock(self, client):
        created = await create(client, quantity=15)

        response = await client.patch(f"/products/{created['id']}/decrease-stock", json={"quantity": 20})

        assert response.status_code == 400
        assert response.json()["detail"] == "Insufficient stock. Available: 15, Requested: 20"
        assert (await client.get(f"/products/{created['id']}")).json()["quantity"] == 15

    @pytest.mark.parametrize("action", ["increase-stock", "decrease-stock"])
    @pytest.mark.parametrize("body", [{"quantity": 0}, {"quantity": -2}, {}, {"quantity": 10**20}])
    async def test_non_positive_or_missing_quantity(self, client, action, body):
        created = await create(client)

        response = await client.patch(f"/products/{created['id']}/{action}", json=body)

        assert response.status_code == 400
        assert "quantity" in response.json()["errors"]

    @pytest.mark.parametrize("action", ["increase-stock", "decrease-stock"])
    async def test_missing_product(self, client, action):
        response = await client.patch(f"/products/{PydanticObjectId()}/{action}", json={"quantity": 1})
        assert response.status_code == 400

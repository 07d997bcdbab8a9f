"""Product Routes - CRUD behaviour through the HTTP surface.

Invariants:
    - Valid create echoes name/price and defaults availability to true (201)
    - Unknown ids → 404 on get, update, patch, delete
    - Non-integer ids → 400 before the handler runs
    - PATCH flips availability; applying it twice restores the original value
    - PUT requires name, price and availability
"""

import pytest
from unittest.mock import AsyncMock

from products_api.api.routes.products import get_product_repository
from products_api.main import app
from products_api.models.product import Product


# ─── List ────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_list_returns_empty_array_without_products(client):
    res = await client.get("/api/products/")
    assert res.status_code == 200
    assert res.json() == []


@pytest.mark.asyncio
async def test_list_returns_all_products_ordered_by_id(client, seed_products):
    monitor, keyboard = seed_products
    res = await client.get("/api/products/")
    assert res.status_code == 200
    assert res.json() == [
        {"id": monitor.id, "name": "Monitor", "price": 300, "availability": True},
        {"id": keyboard.id, "name": "Keyboard", "price": 49.5, "availability": False},
    ]


@pytest.mark.asyncio
async def test_list_accepts_path_without_trailing_slash(client, seed_products):
    res = await client.get("/api/products")
    assert res.status_code == 200
    assert len(res.json()) == 2


# ─── Get by id ───────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_get_returns_product(client, seed_products):
    monitor, _ = seed_products
    res = await client.get(f"/api/products/{monitor.id}")
    assert res.status_code == 200
    assert res.json() == {
        "id": monitor.id, "name": "Monitor", "price": 300, "availability": True,
    }


@pytest.mark.asyncio
async def test_get_nonexistent_product_returns_404(client):
    res = await client.get("/api/products/9999")
    assert res.status_code == 404
    error = res.json()["error"]
    assert error["code"] == "RESOURCE_NOT_FOUND"
    assert error["message"] == "Product '9999' not found"


@pytest.mark.asyncio
async def test_get_non_integer_id_returns_400(client):
    res = await client.get("/api/products/abc")
    assert res.status_code == 400
    assert res.json() == {
        "errors": [{
            "type": "field",
            "value": "abc",
            "msg": "Invalid value",
            "param": "id",
            "location": "params",
        }],
    }


@pytest.mark.asyncio
async def test_non_integer_id_never_reaches_the_store(client):
    repo = AsyncMock()
    app.dependency_overrides[get_product_repository] = lambda: repo

    for method in ("get", "patch", "delete"):
        res = await client.request(method.upper(), "/api/products/1.5")
        assert res.status_code == 400
    res = await client.put(
        "/api/products/x",
        json={"name": "Monitor", "price": 300, "availability": True},
    )
    assert res.status_code == 400

    repo.get.assert_not_awaited()
    repo.toggle_availability.assert_not_awaited()
    repo.delete.assert_not_awaited()
    repo.update.assert_not_awaited()


# ─── Create ──────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_create_returns_201_with_assigned_id(client):
    res = await client.post("/api/products", json={"name": "Monitor", "price": 300})
    assert res.status_code == 201
    body = res.json()
    assert isinstance(body["id"], int)
    assert body["name"] == "Monitor"
    assert body["price"] == 300
    assert body["availability"] is True


@pytest.mark.asyncio
async def test_create_persists_product(client):
    res = await client.post("/api/products/", json={"name": "Mouse", "price": 25.9})
    product_id = res.json()["id"]

    res = await client.get(f"/api/products/{product_id}")
    assert res.status_code == 200
    assert res.json()["price"] == 25.9


@pytest.mark.asyncio
async def test_create_ignores_client_availability_and_id(client):
    res = await client.post(
        "/api/products/",
        json={"id": 77, "name": "Monitor", "price": 300, "availability": False},
    )
    assert res.status_code == 201
    assert res.json()["availability"] is True
    assert res.json()["id"] != 77


@pytest.mark.asyncio
async def test_create_accepts_numeric_string_price(client):
    res = await client.post("/api/products/", json={"name": "Monitor", "price": "300"})
    assert res.status_code == 201
    assert res.json()["price"] == 300


@pytest.mark.asyncio
async def test_create_with_zero_price_returns_400(client):
    res = await client.post("/api/products/", json={"name": "Monitor", "price": 0})
    assert res.status_code == 400
    errors = res.json()["errors"]
    assert [e["param"] for e in errors] == ["price"]
    assert errors[0]["value"] == 0


@pytest.mark.asyncio
async def test_create_with_negative_price_returns_400(client):
    res = await client.post("/api/products/", json={"name": "Monitor", "price": -10})
    assert res.status_code == 400
    assert {e["param"] for e in res.json()["errors"]} == {"price"}


@pytest.mark.asyncio
async def test_create_with_non_numeric_price_returns_400(client):
    res = await client.post("/api/products/", json={"name": "Monitor", "price": "abc"})
    assert res.status_code == 400
    errors = res.json()["errors"]
    assert {e["param"] for e in errors} == {"price"}
    assert [e["msg"] for e in errors] == ["Invalid value", "Invalid value"]


@pytest.mark.asyncio
async def test_create_with_empty_body_reports_every_field(client):
    res = await client.post("/api/products/", json={})
    assert res.status_code == 400
    errors = res.json()["errors"]
    assert [(e["param"], e["msg"]) for e in errors] == [
        ("name", "Product name must be text"),
        ("name", "Product name is required"),
        ("price", "Invalid value"),
        ("price", "Product price is required"),
        ("price", "Invalid value"),
    ]
    assert all("value" not in e for e in errors)
    assert all(e["location"] == "body" for e in errors)


@pytest.mark.asyncio
async def test_create_with_empty_name_returns_400(client):
    res = await client.post("/api/products/", json={"name": "", "price": 10})
    assert res.status_code == 400
    assert res.json()["errors"] == [{
        "type": "field",
        "value": "",
        "msg": "Product name is required",
        "param": "name",
        "location": "body",
    }]


@pytest.mark.asyncio
async def test_create_with_malformed_json_returns_400(client):
    res = await client.post(
        "/api/products/",
        content=b'{"name": "Monitor", "price":',
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["errors"][0]["msg"] == "Malformed JSON body"


@pytest.mark.asyncio
async def test_create_with_non_object_body_returns_400(client):
    res = await client.post("/api/products/", json=["Monitor", 300])
    assert res.status_code == 400
    assert {e["param"] for e in res.json()["errors"]} == {"name", "price"}


# ─── Update ──────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_update_replaces_all_fields(client, seed_products):
    monitor, _ = seed_products
    res = await client.put(
        f"/api/products/{monitor.id}",
        json={"name": "Curved monitor", "price": 350, "availability": False},
    )
    assert res.status_code == 200
    assert res.json() == {
        "id": monitor.id, "name": "Curved monitor",
        "price": 350, "availability": False,
    }


@pytest.mark.asyncio
async def test_update_without_availability_returns_400(client, seed_products):
    monitor, _ = seed_products
    res = await client.put(
        f"/api/products/{monitor.id}", json={"name": "Monitor", "price": 300},
    )
    assert res.status_code == 400
    assert res.json()["errors"] == [{
        "type": "field",
        "msg": "Invalid availability value",
        "param": "availability",
        "location": "body",
    }]


@pytest.mark.asyncio
async def test_update_without_name_returns_400(client, seed_products):
    monitor, _ = seed_products
    res = await client.put(
        f"/api/products/{monitor.id}", json={"price": 300, "availability": True},
    )
    assert res.status_code == 400
    assert {e["param"] for e in res.json()["errors"]} == {"name"}


@pytest.mark.asyncio
async def test_update_without_price_returns_400(client, seed_products):
    monitor, _ = seed_products
    res = await client.put(
        f"/api/products/{monitor.id}", json={"name": "Monitor", "availability": True},
    )
    assert res.status_code == 400
    assert {e["param"] for e in res.json()["errors"]} == {"price"}


@pytest.mark.asyncio
async def test_update_with_invalid_availability_returns_400(client, seed_products):
    monitor, _ = seed_products
    res = await client.put(
        f"/api/products/{monitor.id}",
        json={"name": "Monitor", "price": 300, "availability": "maybe"},
    )
    assert res.status_code == 400
    assert res.json()["errors"][0]["param"] == "availability"


@pytest.mark.asyncio
async def test_update_reports_id_and_body_errors_together(client):
    res = await client.put("/api/products/abc", json={"name": "Monitor"})
    assert res.status_code == 400
    params = [e["param"] for e in res.json()["errors"]]
    assert params[0] == "id"
    assert "price" in params and "availability" in params


@pytest.mark.asyncio
async def test_update_nonexistent_product_returns_404(client):
    res = await client.put(
        "/api/products/9999",
        json={"name": "Monitor", "price": 300, "availability": True},
    )
    assert res.status_code == 404


# ─── Patch availability ──────────────────────────────────────────

@pytest.mark.asyncio
async def test_patch_makes_unavailable_product_available(client, test_db):
    product = Product(name="Monitor", price=300, availability=False)
    test_db.add(product)
    await test_db.commit()

    res = await client.patch(f"/api/products/{product.id}")
    assert res.status_code == 200
    assert res.json()["availability"] is True


@pytest.mark.asyncio
async def test_patch_twice_restores_original_availability(client, seed_products):
    monitor, _ = seed_products
    first = await client.patch(f"/api/products/{monitor.id}")
    second = await client.patch(f"/api/products/{monitor.id}")
    assert first.json()["availability"] is False
    assert second.json()["availability"] is True


@pytest.mark.asyncio
async def test_patch_leaves_other_fields_untouched(client, seed_products):
    _, keyboard = seed_products
    res = await client.patch(f"/api/products/{keyboard.id}")
    body = res.json()
    assert (body["name"], body["price"]) == ("Keyboard", 49.5)


@pytest.mark.asyncio
async def test_patch_nonexistent_product_returns_404(client):
    res = await client.patch("/api/products/9999")
    assert res.status_code == 404


# ─── Delete ──────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_delete_returns_confirmation(client, seed_products):
    monitor, _ = seed_products
    res = await client.delete(f"/api/products/{monitor.id}")
    assert res.status_code == 200
    assert res.json() == {"message": "Product deleted"}


@pytest.mark.asyncio
async def test_deleted_product_is_gone(client, seed_products):
    monitor, keyboard = seed_products
    await client.delete(f"/api/products/{monitor.id}")

    assert (await client.get(f"/api/products/{monitor.id}")).status_code == 404
    remaining = (await client.get("/api/products/")).json()
    assert [p["id"] for p in remaining] == [keyboard.id]


@pytest.mark.asyncio
async def test_delete_nonexistent_product_returns_404(client):
    res = await client.delete("/api/products/9999")
    assert res.status_code == 404


# ─── Input limits ────────────────────────────────────────────────

OUT_OF_RANGE_ID = "99999999999999999999"


@pytest.mark.asyncio
async def test_get_out_of_range_id_returns_404(client, seed_products):
    assert (await client.get(f"/api/products/{OUT_OF_RANGE_ID}")).status_code == 404
    assert (await client.get(f"/api/products/-{OUT_OF_RANGE_ID}")).status_code == 404


@pytest.mark.asyncio
async def test_update_out_of_range_id_returns_404(client, seed_products):
    res = await client.put(
        f"/api/products/{OUT_OF_RANGE_ID}",
        json={"name": "Monitor", "price": 300, "availability": True},
    )
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


@pytest.mark.asyncio
async def test_patch_out_of_range_id_returns_404(client, seed_products):
    res = await client.patch(f"/api/products/{OUT_OF_RANGE_ID}")
    assert res.status_code == 404


@pytest.mark.asyncio
async def test_delete_out_of_range_id_returns_404(client, seed_products):
    res = await client.delete(f"/api/products/{OUT_OF_RANGE_ID}")
    assert res.status_code == 404
    assert len((await client.get("/api/products/")).json()) == 2


@pytest.mark.asyncio
async def test_create_with_price_beyond_float_range_returns_400(client):
    res = await client.post(
        "/api/products/", json={"name": "Monitor", "price": 10 ** 400},
    )
    assert res.status_code == 400
    assert {e["param"] for e in res.json()["errors"]} == {"price"}


@pytest.mark.asyncio
async def test_create_with_overflowing_price_string_returns_400(client):
    res = await client.post(
        "/api/products/", json={"name": "Monitor", "price": "1" * 400},
    )
    assert res.status_code == 400
    assert (await client.get("/api/products/")).json() == []


@pytest.mark.asyncio
async def test_create_with_name_over_limit_returns_400(client):
    res = await client.post(
        "/api/products/", json={"name": "x" * 101, "price": 10},
    )
    assert res.status_code == 400
    assert [(e["param"], e["msg"]) for e in res.json()["errors"]] == [
        ("name", "Product name must be at most 100 characters"),
    ]


@pytest.mark.asyncio
async def test_create_accepts_name_at_limit(client):
    res = await client.post(
        "/api/products/", json={"name": "x" * 100, "price": 10},
    )
    assert res.status_code == 201


@pytest.mark.asyncio
async def test_update_stores_coerced_values(client, seed_products):
    monitor, _ = seed_products
    res = await client.put(
        f"/api/products/{monitor.id}",
        json={"name": "Monitor", "price": "320.5", "availability": "false"},
    )
    assert res.status_code == 200
    assert res.json()["price"] == 320.5
    assert res.json()["availability"] is False

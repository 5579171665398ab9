from decimal import Decimal

import pytest

pytestmark = pytest.mark.anyio


@pytest.fixture
def products(make_product):
    return [make_product(name=name) for name in ("Charger", "Headphones", "Case")]


async def create_item(api, product_id, **extra):
    resp = await api.post("/api/inventory", json={"productId": product_id, **extra})
    assert resp.status_code == 201, resp.text
    return resp.json()


async def test_create_item_reports_stock_status(api, products):
    item = await create_item(api, products[0].id, currentStock=2, minStock=3, reorderPoint=4, costPerUnit="10.50")

    assert item["productName"] == "Charger"
    assert item["stockStatus"] == "low"
    assert item["needsReorder"] is True
    assert Decimal(item["costPerUnit"]) == Decimal("10.50")
    assert item["lastRestocked"] is None


async def test_one_item_per_product(api, products):
    await create_item(api, products[0].id)
    resp = await api.post("/api/inventory", json={"productId": products[0].id})
    assert resp.status_code == 409
    assert (await api.post("/api/inventory", json={"productId": 999})).status_code == 404


async def test_stock_levels_must_be_consistent(api, products):
    resp = await api.post("/api/inventory", json={"productId": products[0].id, "minStock": 20, "maxStock": 10})
    assert resp.status_code == 400

    item = await create_item(api, products[0].id, maxStock=10)
    resp = await api.put(f"/api/inventory/{item['id']}", json={"reorderPoint": 11})
    assert resp.status_code == 400
    assert (await api.get(f"/api/inventory/{item['id']}")).json()["reorderPoint"] == 0


async def test_filters_and_search(api, products):
    await create_item(api, products[0].id, currentStock=10, minStock=2, supplier="Acme")
    await create_item(api, products[1].id, currentStock=1, minStock=2)
    await create_item(api, products[2].id, currentStock=0, minStock=2)

    def names(resp):
        return [i["productName"] for i in resp.json()]

    assert names(await api.get("/api/inventory", params={"stock": "low"})) == ["Headphones", "Case"]
    assert names(await api.get("/api/inventory", params={"stock": "out"})) == ["Case"]
    assert names(await api.get("/api/inventory", params={"stock": "normal"})) == ["Charger"]
    assert names(await api.get("/api/inventory", params={"q": "head"})) == ["Headphones"]
    assert names(await api.get("/api/inventory", params={"q": "acme"})) == ["Charger"]


async def test_restock_adds_quantity_and_stamps_date(api, products):
    item = await create_item(api, products[0].id, currentStock=0, minStock=2)

    resp = await api.post(f"/api/inventory/{item['id']}/restock", json={"quantity": 5})

    restocked = resp.json()
    assert restocked["currentStock"] == 5
    assert restocked["stockStatus"] == "normal"
    assert restocked["lastRestocked"] is not None
    assert (await api.post(f"/api/inventory/{item['id']}/restock", json={"quantity": 0})).status_code == 422


async def test_update_clears_optional_text(api, products):
    item = await create_item(api, products[0].id, supplier="Acme", location="A1")

    resp = await api.put(f"/api/inventory/{item['id']}", json={"supplier": None, "currentStock": 7})

    assert resp.json()["supplier"] is None
    assert resp.json()["location"] == "A1"
    assert resp.json()["currentStock"] == 7


async def test_summary(api, products):
    await create_item(api, products[0].id, currentStock=10, minStock=2, costPerUnit="2.50")
    await create_item(api, products[1].id, currentStock=1, minStock=2, costPerUnit="10.00")
    await create_item(api, products[2].id, currentStock=0, minStock=2, costPerUnit="99.00")

    summary = (await api.get("/api/inventory/summary")).json()

    assert summary["totalItems"] == 3
    assert summary["lowStock"] == 2
    assert summary["outOfStock"] == 1
    assert Decimal(summary["totalValue"]) == Decimal("35.00")


async def test_delete_item(api, products):
    item = await create_item(api, products[0].id)
    assert (await api.delete(f"/api/inventory/{item['id']}")).json() == {"ok": True}
    assert (await api.get(f"/api/inventory/{item['id']}")).status_code == 404

from decimal import Decimal

import pytest

pytestmark = pytest.mark.anyio

A = "https://cdn.example.com/a.jpg"
B = "https://cdn.example.com/b.jpg"
C = "https://cdn.example.com/c.jpg"


async def create_category(api, name="Smartphones", **extra):
    resp = await api.post("/api/categories", json={"name": name, **extra})
    assert resp.status_code == 201, resp.text
    return resp.json()


async def create_product(api, category_id, name="iPhone 15", price="100.00", **extra):
    body = {"name": name, "description": "Apple phone", "price": price, "categoryId": category_id, **extra}
    resp = await api.post("/api/products", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


async def test_health(api):
    resp = await api.get("/")
    assert resp.json() == {"status": "ok"}


# ---------- Categories ----------

async def test_category_slug_is_derived_from_name(api):
    cat = await create_category(api, "Smart Watches & Bands")
    assert cat["slug"] == "smart-watches--bands"
    assert cat["displayOrder"] == 0


async def test_duplicate_category_slug_conflicts(api):
    await create_category(api, "Tablets")
    resp = await api.post("/api/categories", json={"name": "Tablets"})
    assert resp.status_code == 409


async def test_categories_are_listed_by_display_order(api):
    await create_category(api, "Tablets", displayOrder=2)
    await create_category(api, "Phones", displayOrder=1)
    resp = await api.get("/api/categories")
    assert [c["name"] for c in resp.json()] == ["Phones", "Tablets"]


async def test_update_category(api):
    cat = await create_category(api, "Phones")
    resp = await api.put(f"/api/categories/{cat['id']}", json={"icon": "smartphone"})
    assert resp.status_code == 200
    assert resp.json()["icon"] == "smartphone"
    assert resp.json()["slug"] == "phones"


async def test_category_with_products_cannot_be_deleted(api):
    cat = await create_category(api)
    await create_product(api, cat["id"])

    resp = await api.delete(f"/api/categories/{cat['id']}")

    assert resp.status_code == 409
    assert "existing products" in resp.json()["detail"]
    assert (await api.get(f"/api/categories/{cat['id']}")).status_code == 200


async def test_empty_category_is_deleted(api):
    cat = await create_category(api)
    resp = await api.delete(f"/api/categories/{cat['id']}")
    assert resp.json() == {"ok": True}
    assert (await api.get(f"/api/categories/{cat['id']}")).status_code == 404


# ---------- Products ----------

async def test_create_product_sets_base_price(api):
    cat = await create_category(api)
    product = await create_product(api, cat["id"], price="8999.00")

    assert Decimal(product["price"]) == Decimal("8999.00")
    assert Decimal(product["basePrice"]) == Decimal("8999.00")
    assert product["isAvailable"] is True
    assert product["images"] == []
    assert product["attributes"] == []


async def test_create_product_with_unknown_category_is_rejected(api):
    resp = await api.post(
        "/api/products",
        json={"name": "x", "description": "y", "price": "1.00", "categoryId": 99},
    )
    assert resp.status_code == 400


async def test_create_product_validates_required_fields(api):
    cat = await create_category(api)
    resp = await api.post("/api/products", json={"name": "", "description": "y", "price": "1", "categoryId": cat["id"]})
    assert resp.status_code == 422


async def test_product_listing_filters(api):
    cat = await create_category(api)
    other = await create_category(api, "Tablets")
    await create_product(api, cat["id"], name="iPhone 15", isFeatured=True)
    await create_product(api, cat["id"], name="Old phone", isAvailable=False)
    await create_product(api, other["id"], name="iPad Air")

    names = lambda resp: sorted(p["name"] for p in resp.json())  # noqa: E731

    assert names(await api.get("/api/products")) == ["iPad Air", "iPhone 15"]
    assert names(await api.get("/api/products", params={"admin": "true"})) == ["Old phone", "iPad Air", "iPhone 15"]
    assert names(await api.get("/api/products", params={"categoryId": other["id"]})) == ["iPad Air"]
    assert names(await api.get("/api/products", params={"featured": "true"})) == ["iPhone 15"]
    assert names(await api.get("/api/products", params={"q": "ipad"})) == ["iPad Air"]


async def test_update_product_moves_base_price(api):
    cat = await create_category(api)
    product = await create_product(api, cat["id"])

    resp = await api.put(f"/api/products/{product['id']}", json={"price": "120.00", "isFeatured": True})

    body = resp.json()
    assert Decimal(body["price"]) == Decimal("120.00")
    assert Decimal(body["basePrice"]) == Decimal("120.00")
    assert body["isFeatured"] is True
    assert body["name"] == "iPhone 15"


async def test_unknown_product_is_404(api):
    assert (await api.get("/api/products/123")).status_code == 404
    assert (await api.put("/api/products/123", json={"name": "x"})).status_code == 404
    assert (await api.delete("/api/products/123")).status_code == 404


async def test_delete_product(api):
    cat = await create_category(api)
    product = await create_product(api, cat["id"])
    await api.post(f"/api/products/{product['id']}/images", json={"imageUrl": A})

    assert (await api.delete(f"/api/products/{product['id']}")).json() == {"ok": True}
    assert (await api.get(f"/api/products/{product['id']}")).status_code == 404


# ---------- Images ----------

async def test_first_image_becomes_main_and_primary(api):
    cat = await create_category(api)
    product = await create_product(api, cat["id"])
    pid = product["id"]

    first = (await api.post(f"/api/products/{pid}/images", json={"imageUrl": A})).json()
    second = (await api.post(f"/api/products/{pid}/images", json={"imageUrl": B})).json()

    assert first["isMain"] is True
    assert second["isMain"] is False
    assert [first["displayOrder"], second["displayOrder"]] == [0, 1]
    assert (await api.get(f"/api/products/{pid}")).json()["imageUrl"] == A


async def test_image_display_order_is_assigned_by_the_server(api):
    cat = await create_category(api)
    pid = (await create_product(api, cat["id"]))["id"]

    for url in (A, B):
        resp = await api.post(f"/api/products/{pid}/images", json={"imageUrl": url, "displayOrder": 5})
        assert resp.status_code == 201

    images = (await api.get(f"/api/products/{pid}/images")).json()
    assert [img["displayOrder"] for img in images] == [0, 1]


async def test_missing_alt_text_falls_back_to_product_name(api):
    cat = await create_category(api)
    product = await create_product(api, cat["id"])
    pid = product["id"]

    first = (await api.post(f"/api/products/{pid}/images", json={"imageUrl": A})).json()
    second = (await api.post(f"/api/products/{pid}/images", json={"imageUrl": B, "altText": "Back view"})).json()

    assert first["altText"] == "iPhone 15 - image 1"
    assert second["altText"] == "Back view"


async def test_duplicate_image_is_rejected(api):
    cat = await create_category(api)
    product = await create_product(api, cat["id"])
    await api.post(f"/api/products/{product['id']}/images", json={"imageUrl": A})

    resp = await api.post(f"/api/products/{product['id']}/images", json={"imageUrl": A})

    assert resp.status_code == 409
    assert len((await api.get(f"/api/products/{product['id']}/images")).json()) == 1


async def test_set_main_image_updates_primary_image(api):
    cat = await create_category(api)
    pid = (await create_product(api, cat["id"]))["id"]
    await api.post(f"/api/products/{pid}/images", json={"imageUrl": A})
    b = (await api.post(f"/api/products/{pid}/images", json={"imageUrl": B})).json()

    resp = await api.put(f"/api/products/{pid}/main-image/{b['id']}")

    assert resp.json()["isMain"] is True
    images = (await api.get(f"/api/products/{pid}/images")).json()
    assert [img["isMain"] for img in images] == [False, True]
    assert (await api.get(f"/api/products/{pid}")).json()["imageUrl"] == B


async def test_set_main_image_of_another_product_is_404(api):
    cat = await create_category(api)
    p1 = (await create_product(api, cat["id"]))["id"]
    p2 = (await create_product(api, cat["id"], name="Galaxy"))["id"]
    img = (await api.post(f"/api/products/{p1}/images", json={"imageUrl": A})).json()

    assert (await api.put(f"/api/products/{p2}/main-image/{img['id']}")).status_code == 404


async def test_deleting_main_image_promotes_first_and_renumbers(api):
    cat = await create_category(api)
    pid = (await create_product(api, cat["id"]))["id"]
    a = (await api.post(f"/api/products/{pid}/images", json={"imageUrl": A})).json()
    await api.post(f"/api/products/{pid}/images", json={"imageUrl": B})
    await api.post(f"/api/products/{pid}/images", json={"imageUrl": C})

    await api.delete(f"/api/products/{pid}/images/{a['id']}")

    images = (await api.get(f"/api/products/{pid}/images")).json()
    assert [(img["imageUrl"], img["displayOrder"], img["isMain"]) for img in images] == [
        (B, 0, True),
        (C, 1, False),
    ]
    assert (await api.get(f"/api/products/{pid}")).json()["imageUrl"] == B


async def test_clear_images(api):
    cat = await create_category(api)
    pid = (await create_product(api, cat["id"]))["id"]
    await api.post(f"/api/products/{pid}/images", json={"imageUrl": A})
    await api.post(f"/api/products/{pid}/images", json={"imageUrl": B})

    resp = await api.delete(f"/api/products/{pid}/images")

    assert resp.json() == {"ok": True, "deleted": 2}
    assert (await api.get(f"/api/products/{pid}/images")).json() == []


# ---------- Attributes & prices ----------

async def test_attributes_and_price_recalculation(api):
    cat = await create_category(api)
    pid = (await create_product(api, cat["id"], price="100.00"))["id"]
    for name, value, modifier in [("Storage", "256GB", "10.00"), ("Case", "Slim", "-5.00")]:
        resp = await api.post(
            "/api/product-attributes",
            json={"productId": pid, "attributeName": name, "attributeValue": value, "priceModifier": modifier},
        )
        assert resp.status_code == 201

    resp = await api.post(f"/api/products/{pid}/recalculate-price")

    assert resp.status_code == 200
    assert resp.json() == {"totalPrice": 105.0, "formattedPrice": "R$ 105.00"}
    product = (await api.get(f"/api/products/{pid}")).json()
    assert Decimal(product["price"]) == Decimal("105.00")
    assert len(product["attributes"]) == 2


async def test_attribute_listing_and_deletion(api):
    cat = await create_category(api)
    pid = (await create_product(api, cat["id"]))["id"]
    other = (await create_product(api, cat["id"], name="Galaxy"))["id"]
    created = []
    for product_id in (pid, pid, other):
        resp = await api.post(
            "/api/product-attributes",
            json={"productId": product_id, "attributeName": "Color", "attributeValue": "Black"},
        )
        created.append(resp.json())

    listed = (await api.get("/api/product-attributes", params={"productId": pid})).json()
    assert len(listed) == 2
    assert Decimal(listed[0]["priceModifier"]) == Decimal("0")
    assert listed[0]["isActive"] is True

    await api.delete(f"/api/product-attributes/{created[0]['id']}")
    assert len((await api.get(f"/api/products/{pid}/attributes")).json()) == 1

    resp = await api.delete(f"/api/products/{pid}/attributes")
    assert resp.json() == {"ok": True, "deleted": 1}
    assert (await api.get(f"/api/products/{pid}/attributes")).json() == []
    assert len((await api.get(f"/api/products/{other}/attributes")).json()) == 1


async def test_attribute_for_unknown_product_is_404(api):
    resp = await api.post(
        "/api/product-attributes",
        json={"productId": 77, "attributeName": "Color", "attributeValue": "Black"},
    )
    assert resp.status_code == 404


async def test_recalculate_unknown_product_is_404(api):
    resp = await api.post("/api/products/404/recalculate-price")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Product 404 not found"


async def test_recalculate_all_prices_reports_partial_failure(api, db):
    from app.models.product import Product

    cat = await create_category(api)
    ids = [(await create_product(api, cat["id"], name=f"Phone {i}"))["id"] for i in range(3)]
    broken = db.get(Product, ids[1])
    broken.base_price = None
    db.commit()

    resp = await api.post("/api/products/recalculate-all-prices")

    assert resp.status_code == 200
    body = resp.json()
    assert body["updated"] == 2
    assert body["failed"] == 1
    assert body["failures"][0]["productId"] == ids[1]

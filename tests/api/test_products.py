"""Public catalogue endpoints"""

import uuid

async def test_list_products(client, products):
    response = await client.get("/api/v1/products")

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 3
    assert body["page"] == 1
    assert body["pages"] == 1
    assert {item["name"] for item in body["items"]} == {"Linen Shirt", "Stoneware Mug", "Desk Lamp"}

async def test_list_products_filters(client, products):
    response = await client.get("/api/v1/products", params={"category": "kitchen"})
    assert [item["name"] for item in response.json()["items"]] == ["Stoneware Mug"]

    response = await client.get("/api/v1/products", params={"featured": "true"})
    assert [item["name"] for item in response.json()["items"]] == ["Linen Shirt"]

    response = await client.get("/api/v1/products", params={"q": "lamp"})
    assert [item["name"] for item in response.json()["items"]] == ["Desk Lamp"]

async def test_list_products_pagination(client, products):
    response = await client.get("/api/v1/products", params={"skip": 2, "limit": 2})

    body = response.json()
    assert body["total"] == 3
    assert body["page"] == 2
    assert body["pages"] == 2
    assert len(body["items"]) == 1

async def test_get_product(client, products):
    response = await client.get(f"/api/v1/products/{products['shirt']}")

    assert response.status_code == 200
    body = response.json()
    assert body["price"] == 29.99
    assert body["images"][0]["url"] == "https://img.example.com/shirt.png"

async def test_get_unknown_product(client, products):
    response = await client.get(f"/api/v1/products/{uuid.uuid4()}")

    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Product not found"

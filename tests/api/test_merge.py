"""Guest cart merge endpoint"""

import uuid

def merge_line(product_id, quantity, price):
    return {"productId": product_id, "quantity": quantity, "priceAtAddition": price}

async def test_merge_empty_is_noop(client, auth_headers):
    response = await client.post("/api/v1/cart/merge", json={"items": []}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"message": "No items to merge", "items_merged": 0}

async def test_merge_into_empty_cart_keeps_guest_price(client, auth_headers, products):
    response = await client.post(
        "/api/v1/cart/merge",
        json={"items": [merge_line(products["shirt"], 2, 25.0)]},
        headers=auth_headers
    )

    assert response.status_code == 200
    assert response.json()["items_merged"] == 1

    cart = (await client.get("/api/v1/cart", headers=auth_headers)).json()
    assert len(cart) == 1
    assert cart[0]["quantity"] == 2
    assert cart[0]["price_at_addition"] == 25.0

async def test_merge_sums_with_existing_lines(client, auth_headers, products):
    await client.post("/api/v1/cart", json={"productId": products["shirt"], "quantity": 1}, headers=auth_headers)

    await client.post(
        "/api/v1/cart/merge",
        json={"items": [merge_line(products["shirt"], 2, 29.99), merge_line(products["lamp"], 1, 45.0)]},
        headers=auth_headers
    )

    cart = {line["product_id"]: line for line in (await client.get("/api/v1/cart", headers=auth_headers)).json()}
    assert cart[products["shirt"]]["quantity"] == 3
    assert cart[products["lamp"]]["quantity"] == 1

async def test_merge_collapses_duplicates(client, auth_headers, products):
    await client.post(
        "/api/v1/cart/merge",
        json={"items": [merge_line(products["mug"], 1, 12.5), merge_line(products["mug"], 2, 12.5)]},
        headers=auth_headers
    )

    cart = (await client.get("/api/v1/cart", headers=auth_headers)).json()
    assert len(cart) == 1
    assert cart[0]["quantity"] == 3

async def test_merge_skips_unknown_products(client, auth_headers, products):
    response = await client.post(
        "/api/v1/cart/merge",
        json={"items": [merge_line(str(uuid.uuid4()), 1, 9.99), merge_line(products["lamp"], 1, 45.0)]},
        headers=auth_headers
    )

    assert response.json()["items_merged"] == 1
    cart = (await client.get("/api/v1/cart", headers=auth_headers)).json()
    assert [line["product_id"] for line in cart] == [products["lamp"]]

async def test_merge_rejects_non_positive_quantity(client, auth_headers, products):
    response = await client.post(
        "/api/v1/cart/merge",
        json={"items": [merge_line(products["lamp"], 1, 45.0), merge_line(products["mug"], 0, 12.5)]},
        headers=auth_headers
    )

    assert response.status_code == 400
    assert (await client.get("/api/v1/cart", headers=auth_headers)).json() == []

async def test_merge_rejects_malformed_lines(client, auth_headers):
    response = await client.post(
        "/api/v1/cart/merge",
        json={"items": [{"productId": "not-a-uuid", "quantity": 1}]},
        headers=auth_headers
    )
    assert response.status_code == 422

async def test_merge_twice_adds_twice(client, auth_headers, products):
    payload = {"items": [merge_line(products["mug"], 2, 12.5)]}
    await client.post("/api/v1/cart/merge", json=payload, headers=auth_headers)
    await client.post("/api/v1/cart/merge", json=payload, headers=auth_headers)

    cart = (await client.get("/api/v1/cart", headers=auth_headers)).json()
    assert cart[0]["quantity"] == 4

"""Moving a guest cart into the server cart after sign-in"""

from storefront.client.cart import CartMode
from storefront.client.errors import NetworkError

from .conftest import make_product

async def fill_guest_cart(cart):
    await cart.initialize(False)
    await cart.add_item(make_product("p1", 10.0), 2)
    await cart.add_item(make_product("p2", 2.5), 1)

async def test_merge_noop_when_guest_cart_empty(cart, api):
    await cart.initialize(False)

    await cart.merge_guest_cart_with_server()

    assert api.calls == []
    assert cart.mode == CartMode.GUEST

async def test_merge_noop_when_not_guest(cart, api):
    await cart.initialize(True)
    api.calls.clear()

    await cart.merge_guest_cart_with_server()

    assert api.calls == []

async def test_merge_success(cart, api, storage):
    await fill_guest_cart(cart)

    await cart.merge_guest_cart_with_server()

    merge_call = api.calls[0]
    assert merge_call[0] == "merge_cart"
    submitted = [item.model_dump(by_alias=True) for item in merge_call[1]]
    assert submitted == [
        {"productId": "p1", "quantity": 2, "priceAtAddition": 10.0},
        {"productId": "p2", "quantity": 1, "priceAtAddition": 2.5},
    ]

    assert cart.mode == CartMode.AUTHENTICATED
    assert [(item.product_id, item.quantity) for item in cart.items] == [("p1", 2), ("p2", 1)]
    assert storage.get_item("testCart") is None
    assert cart.error is None

async def test_merge_adds_to_existing_server_lines(cart, api):
    await api.add_to_cart("p1", 1)
    await fill_guest_cart(cart)

    await cart.merge_guest_cart_with_server()

    quantities = {item.product_id: item.quantity for item in cart.items}
    assert quantities == {"p1": 3, "p2": 1}

async def test_merge_failure_keeps_guest_cart(cart, api, storage):
    await fill_guest_cart(cart)
    stored = storage.get_item("testCart")
    api.fail_with = NetworkError("Failed to merge guest cart with server")

    await cart.merge_guest_cart_with_server()

    assert cart.mode == CartMode.GUEST
    assert cart.error == "Failed to merge guest cart with server"
    assert [(item.product_id, item.quantity) for item in cart.items] == [("p1", 2), ("p2", 1)]
    assert storage.get_item("testCart") == stored
    assert cart.is_loading is False

async def test_merge_retry_after_failure_submits_again(cart, api):
    await fill_guest_cart(cart)
    api.fail_with = NetworkError("offline")
    await cart.merge_guest_cart_with_server()

    await cart.merge_guest_cart_with_server()

    assert api.call_names().count("merge_cart") == 2
    assert cart.mode == CartMode.AUTHENTICATED

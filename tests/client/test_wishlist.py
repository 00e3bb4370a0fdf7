"""Wishlist store"""

from storefront.client.errors import NetworkError
from storefront.client.session import AuthStatus

async def sign_in(api):
    await api.auth.sign_in("token-123")

async def test_add_requires_authentication(wishlist, api):
    await api.auth.set_status(AuthStatus.UNAUTHENTICATED)

    await wishlist.add("p1")

    assert wishlist.error == "Please log in to add items to your wishlist."
    assert wishlist.items == []
    assert api.calls == []

async def test_add_and_query(wishlist, api):
    await sign_in(api)

    await wishlist.add("p1")

    assert wishlist.is_in_wishlist("p1")
    assert not wishlist.is_in_wishlist("p2")
    assert api.call_names() == ["add_wishlist_item"]

async def test_add_already_present_locally_sends_nothing(wishlist, api):
    await sign_in(api)
    await wishlist.add("p1")
    api.calls.clear()

    await wishlist.add("p1")

    assert api.calls == []
    assert len(wishlist.items) == 1

async def test_conflict_refetches(wishlist, api):
    await sign_in(api)
    await api.add_wishlist_item("p2")
    api.calls.clear()

    await wishlist.add("p2")

    assert api.call_names() == ["add_wishlist_item", "get_wishlist"]
    assert wishlist.is_in_wishlist("p2")
    assert wishlist.error == "Product already in wishlist"

async def test_fetch(wishlist, api):
    await api.add_wishlist_item("p1")
    await api.add_wishlist_item("p3")

    await wishlist.fetch()

    assert [item.product_id for item in wishlist.items] == ["p1", "p3"]
    assert wishlist.is_loading is False

async def test_remove(wishlist, api):
    await sign_in(api)
    await wishlist.add("p1")

    await wishlist.remove("p1")

    assert wishlist.items == []
    assert wishlist.error is None

async def test_failed_remove_keeps_item(wishlist, api):
    await sign_in(api)
    await wishlist.add("p1")
    api.fail_with = NetworkError("offline")

    await wishlist.remove("p1")

    assert wishlist.is_in_wishlist("p1")
    assert wishlist.error == "offline"

async def test_clear_local(wishlist, api):
    await sign_in(api)
    await wishlist.add("p1")

    wishlist.clear_local()

    assert wishlist.items == []

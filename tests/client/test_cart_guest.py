"""Guest cart behaviour: local storage only, no API calls"""

import json

from storefront.client.cart import CartMode, CartStore
from storefront.client.storage import FileStorage, MemoryStorage

from .conftest import make_product

async def guest_cart(cart):
    await cart.initialize(False)
    return cart

async def test_initialize_guest_starts_empty(cart, api):
    await cart.initialize(False)

    assert cart.mode == CartMode.GUEST
    assert cart.items == []
    assert cart.is_loading is False
    assert api.calls == []

async def test_add_new_and_existing(cart, api):
    await guest_cart(cart)
    shirt = make_product("p1", 10.0)

    await cart.add_item(shirt, 2)
    await cart.add_item(shirt, 3)
    await cart.add_item(make_product("p2", 2.5))

    assert [(item.product_id, item.quantity) for item in cart.items] == [("p1", 5), ("p2", 1)]
    assert cart.items[0].price_at_addition == 10.0
    assert cart.get_item_count() == 6
    assert cart.get_total() == 52.5
    assert api.calls == []

async def test_add_rejects_non_positive_quantity(cart):
    await guest_cart(cart)

    await cart.add_item(make_product("p1"), 0)

    assert cart.items == []
    assert cart.error

async def test_update_quantity(cart):
    await guest_cart(cart)
    await cart.add_item(make_product("p1"), 1)

    await cart.update_quantity("p1", 7)

    assert cart.items[0].quantity == 7

async def test_update_to_zero_removes(cart):
    await guest_cart(cart)
    await cart.add_item(make_product("p1"), 1)
    await cart.add_item(make_product("p2"), 1)

    await cart.update_quantity("p1", 0)

    assert [item.product_id for item in cart.items] == ["p2"]

async def test_remove_missing_is_noop(cart):
    await guest_cart(cart)
    await cart.add_item(make_product("p1"), 1)

    await cart.remove_item("nope")

    assert len(cart.items) == 1
    assert cart.error is None

async def test_clear(cart, storage):
    await guest_cart(cart)
    await cart.add_item(make_product("p1"), 1)

    await cart.clear()

    assert cart.items == []
    assert json.loads(storage.get_item("testCart")) == []

async def test_every_mutation_is_persisted(cart, api, storage):
    await guest_cart(cart)
    await cart.add_item(make_product("p1", 4.0), 2)

    reloaded = CartStore(api, storage, storage_key="testCart")
    await reloaded.initialize(False)

    assert [(item.product_id, item.quantity) for item in reloaded.items] == [("p1", 2)]
    assert reloaded.get_total() == 8.0

async def test_corrupt_storage_loads_empty(api, storage):
    storage.set_item("testCart", "{this is not json")
    cart = CartStore(api, storage, storage_key="testCart")

    await cart.initialize(False)

    assert cart.mode == CartMode.GUEST
    assert cart.items == []

async def test_wrong_shape_in_storage_loads_empty(api, storage):
    storage.set_item("testCart", json.dumps([{"unexpected": True}]))
    cart = CartStore(api, storage, storage_key="testCart")

    await cart.initialize(False)

    assert cart.items == []

async def test_quota_exceeded_keeps_in_memory_state(api):
    storage = MemoryStorage(quota_bytes=50)
    cart = CartStore(api, storage, storage_key="testCart")
    await cart.initialize(False)

    await cart.add_item(make_product("p1"), 1)

    assert len(cart.items) == 1
    assert storage.get_item("testCart") is None

async def test_total_falls_back_to_product_price(cart, storage):
    stored = [{
        "id": "p1",
        "product_id": "p1",
        "product": {"id": "p1", "name": "Old line", "price": 3.0},
        "quantity": 2
    }]
    storage.set_item("testCart", json.dumps(stored))

    await cart.initialize(False)

    assert cart.get_total() == 6.0

async def test_zero_quantity_matches_remove(api):
    results = []
    for operation in ("update", "remove"):
        store = CartStore(api, MemoryStorage(), storage_key="testCart")
        await store.initialize(False)
        await store.add_item(make_product("p1"), 2)
        await store.add_item(make_product("p2"), 1)

        if operation == "update":
            await store.update_quantity("p1", 0)
        else:
            await store.remove_item("p1")
        results.append([item.model_dump() for item in store.items])

    assert results[0] == results[1]
    assert [item["product_id"] for item in results[0]] == ["p2"]

async def test_corrupt_file_storage_is_overwritten_by_next_save(api, tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("{garbage")
    cart = CartStore(api, FileStorage(str(path)), storage_key="testCart")
    await cart.initialize(False)

    await cart.add_item(make_product("p1"), 1)

    reloaded = CartStore(api, FileStorage(str(path)), storage_key="testCart")
    await reloaded.initialize(False)
    assert [item.product_id for item in reloaded.items] == ["p1"]

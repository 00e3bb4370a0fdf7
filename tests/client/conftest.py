"""Client fixtures: an in-memory stand-in for the REST API"""

from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest

from storefront.client.cart import CartStore
from storefront.client.errors import ConflictError, NotFoundError, RemoteError, UnauthorizedError
from storefront.client.models import CartItem, ProductSnapshot, WishlistItem
from storefront.client.session import AuthSession
from storefront.client.storage import MemoryStorage
from storefront.client.wishlist import WishlistStore

def make_product(product_id: str, price: float = 10.0, name: Optional[str] = None) -> ProductSnapshot:
    return ProductSnapshot(id=product_id, name=name or f"Product {product_id}", price=price)

class FakeAPI:
    """
    Records calls and serves a server-side cart and wishlist from memory

    Set ``fail_with`` to an exception to make the next call raise it.
    """

    def __init__(self, auth: Optional[AuthSession] = None):
        self.auth = auth or AuthSession()
        self.products: Dict[str, ProductSnapshot] = {}
        self.cart: Dict[str, CartItem] = {}
        self.wishlist: List[WishlistItem] = []
        self.calls: List[tuple] = []
        self.fail_with: Optional[RemoteError] = None
        self.token = "token-123"

    def _call(self, name, *args):
        self.calls.append((name,) + args)
        if self.fail_with is not None:
            error, self.fail_with = self.fail_with, None
            raise error

    def add_product(self, product: ProductSnapshot) -> ProductSnapshot:
        self.products[product.id] = product
        return product

    async def get_cart(self):
        self._call("get_cart")
        return [line.model_copy() for line in self.cart.values()]

    async def add_to_cart(self, product_id, quantity):
        self._call("add_to_cart", product_id, quantity)
        product = self.products[product_id]
        line = self.cart.get(product_id)
        if line is None:
            self.cart[product_id] = CartItem(
                id=product_id, product_id=product_id, product=product,
                quantity=quantity, price_at_addition=product.price
            )
        else:
            line.quantity += quantity

    async def update_cart_item(self, product_id, quantity):
        self._call("update_cart_item", product_id, quantity)
        if product_id not in self.cart:
            raise NotFoundError("Item not found in cart", 404)
        self.cart[product_id].quantity = quantity

    async def remove_cart_item(self, product_id):
        self._call("remove_cart_item", product_id)
        if product_id not in self.cart:
            raise NotFoundError("Item not found in cart", 404)
        del self.cart[product_id]

    async def clear_cart(self):
        self._call("clear_cart")
        self.cart.clear()

    async def merge_cart(self, items):
        self._call("merge_cart", items)
        for item in items:
            line = self.cart.get(item.product_id)
            if line is None:
                self.cart[item.product_id] = CartItem(
                    id=item.product_id, product_id=item.product_id,
                    product=self.products[item.product_id],
                    quantity=item.quantity, price_at_addition=item.price_at_addition
                )
            else:
                line.quantity += item.quantity

    async def get_wishlist(self):
        self._call("get_wishlist")
        return list(self.wishlist)

    async def add_wishlist_item(self, product_id):
        self._call("add_wishlist_item", product_id)
        if any(item.product_id == product_id for item in self.wishlist):
            raise ConflictError("Product already in wishlist", 409)
        item = WishlistItem(
            id=f"w-{product_id}", wishlist_id="w", product_id=product_id,
            product=self.products[product_id], added_at=datetime.now(timezone.utc)
        )
        self.wishlist.append(item)
        return item

    async def remove_wishlist_item(self, product_id):
        self._call("remove_wishlist_item", product_id)
        if not any(item.product_id == product_id for item in self.wishlist):
            raise NotFoundError("Item not found in wishlist", 404)
        self.wishlist = [item for item in self.wishlist if item.product_id != product_id]

    async def login(self, email, password):
        self._call("login", email)
        if password != "secret123":
            raise UnauthorizedError("Invalid email or password", 401)
        return self.token

    async def register(self, name, email, password):
        self._call("register", email)
        return self.token

    async def create_order(self, shipping_details, payment_method, payment_reference=None):
        self._call("create_order", payment_method)
        if not self.cart:
            raise RemoteError("Cart is empty", 400)
        total = sum(line.unit_price * line.quantity for line in self.cart.values())
        self.cart.clear()
        return {"id": "order-1", "status": "pending", "total_amount": total}

    async def aclose(self):
        pass

    def call_names(self):
        return [call[0] for call in self.calls]

@pytest.fixture
def api():
    fake = FakeAPI()
    fake.add_product(make_product("p1", 10.0))
    fake.add_product(make_product("p2", 2.5))
    fake.add_product(make_product("p3", 99.0))
    return fake

@pytest.fixture
def storage():
    return MemoryStorage()

@pytest.fixture
def cart(api, storage):
    return CartStore(api, storage, storage_key="testCart")

@pytest.fixture
def wishlist(api):
    return WishlistStore(api, api.auth)

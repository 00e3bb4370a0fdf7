"""
Cart store

Holds the client's cart and keeps it consistent in either of two modes: guest
(lines persisted to local storage) or authenticated (lines owned by the API).
Each mode is a ``CartBackend``; the store picks one from its current mode.
"""

from abc import ABC, abstractmethod
from typing import Awaitable, List, Optional
from pydantic import TypeAdapter, ValidationError
import enum
import logging

from .api import StorefrontAPI
from .config import client_settings
from .errors import RemoteError, UnauthorizedError
from .models import CartItem, CartItemForMerge, ProductSnapshot
from .storage import LocalStorage, StorageError

logger = logging.getLogger(__name__)

_cart_items = TypeAdapter(List[CartItem])

class CartMode(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    GUEST = "guest"
    AUTHENTICATED = "authenticated"

class CartBackend(ABC):
    """Operations every cart mode supports

    Each mutation receives the current lines and returns the new lines.
    Failures are raised as ``RemoteError``.
    """

    @abstractmethod
    async def load(self) -> List[CartItem]:
        ...

    @abstractmethod
    async def add(self, items: List[CartItem], product: ProductSnapshot, quantity: int) -> List[CartItem]:
        ...

    @abstractmethod
    async def set_quantity(self, items: List[CartItem], product_id: str, quantity: int) -> List[CartItem]:
        ...

    @abstractmethod
    async def remove(self, items: List[CartItem], product_id: str) -> List[CartItem]:
        ...

    @abstractmethod
    async def clear(self, items: List[CartItem]) -> List[CartItem]:
        ...

class GuestCartBackend(CartBackend):
    """Cart kept in local storage under a single key"""

    def __init__(self, storage: LocalStorage, key: str):
        self.storage = storage
        self.key = key

    def read(self) -> List[CartItem]:
        """Stored lines; unreadable storage counts as an empty cart"""
        try:
            raw = self.storage.get_item(self.key)
        except StorageError as e:
            logger.error(f"Could not load guest cart from storage: {e}")
            return []

        if not raw:
            return []

        try:
            return _cart_items.validate_json(raw)
        except ValidationError as e:
            logger.error(f"Could not load guest cart from storage: {e.error_count()} invalid fields")
            return []

    def write(self, items: List[CartItem]) -> None:
        try:
            self.storage.set_item(self.key, _cart_items.dump_json(items).decode("utf-8"))
        except StorageError as e:
            logger.error(f"Could not save guest cart to storage: {e}")

    def discard(self) -> None:
        try:
            self.storage.remove_item(self.key)
        except StorageError as e:
            logger.error(f"Could not clear guest cart from storage: {e}")

    async def load(self) -> List[CartItem]:
        return self.read()

    async def add(self, items, product, quantity):
        if any(item.product_id == product.id for item in items):
            updated = [
                item.model_copy(update={"quantity": item.quantity + quantity})
                if item.product_id == product.id else item
                for item in items
            ]
        else:
            updated = items + [CartItem(
                id=product.id,
                product_id=product.id,
                product=product,
                quantity=quantity,
                price_at_addition=product.price
            )]
        self.write(updated)
        return updated

    async def set_quantity(self, items, product_id, quantity):
        if quantity <= 0:
            updated = [item for item in items if item.product_id != product_id]
        else:
            updated = [
                item.model_copy(update={"quantity": quantity})
                if item.product_id == product_id else item
                for item in items
            ]
        self.write(updated)
        return updated

    async def remove(self, items, product_id):
        updated = [item for item in items if item.product_id != product_id]
        self.write(updated)
        return updated

    async def clear(self, items):
        self.write([])
        return []

class ServerCartBackend(CartBackend):
    """Cart owned by the API; every mutation re-fetches the whole cart"""

    def __init__(self, api: StorefrontAPI):
        self.api = api

    async def load(self) -> List[CartItem]:
        return await self.api.get_cart()

    async def add(self, items, product, quantity):
        await self.api.add_to_cart(product.id, quantity)
        return await self.load()

    async def set_quantity(self, items, product_id, quantity):
        if quantity <= 0:
            return await self.remove(items, product_id)
        await self.api.update_cart_item(product_id, quantity)
        return await self.load()

    async def remove(self, items, product_id):
        await self.api.remove_cart_item(product_id)
        return await self.load()

    async def clear(self, items):
        await self.api.clear_cart()
        return await self.load()

class CartStore:
    """
    Client cart state: ``items``, ``is_loading``, ``error`` and ``mode``

    Operations never raise on API failures. They record a message in
    ``error`` and leave ``items`` as they were, except a 401, which drops
    to the guest cart.
    """

    def __init__(self, api: StorefrontAPI, storage: LocalStorage, storage_key: Optional[str] = None):
        self.api = api
        self.items: List[CartItem] = []
        self.is_loading = False
        self.error: Optional[str] = None
        self.mode = CartMode.UNINITIALIZED

        self.guest = GuestCartBackend(storage, storage_key or client_settings.GUEST_CART_STORAGE_KEY)
        self.server = ServerCartBackend(api)

    @property
    def backend(self) -> CartBackend:
        # Until a mode is chosen, operations go to the server
        if self.mode == CartMode.GUEST:
            return self.guest
        return self.server

    def _use_guest_cart(self) -> None:
        self.items = self.guest.read()
        self.mode = CartMode.GUEST
        self.is_loading = False

    async def initialize(self, is_authenticated: bool) -> None:
        """Load the cart for the given auth state, replacing the in-memory lines"""
        self.is_loading = True
        self.error = None

        if not is_authenticated:
            self._use_guest_cart()
            return

        try:
            items = await self.server.load()
        except UnauthorizedError:
            logger.info("Server rejected cart fetch as unauthenticated, using guest cart")
            self._use_guest_cart()
            return
        except RemoteError as e:
            logger.error(f"Error initializing cart for authenticated user: {e.message}")
            self.error = e.message
            self.mode = CartMode.AUTHENTICATED
            self.is_loading = False
            return

        self.items = items
        self.mode = CartMode.AUTHENTICATED
        self.is_loading = False
        self.guest.discard()

    def activate_guest_cart(self) -> None:
        """Switch to guest mode and reload lines from local storage"""
        self._use_guest_cart()
        self.error = None

    async def _apply(self, operation: Awaitable[List[CartItem]], failure: str) -> None:
        self.is_loading = True
        self.error = None
        try:
            self.items = await operation
        except UnauthorizedError as e:
            # Session expired: keep working on the guest cart
            logger.info(f"{failure} {e.message}, switching to guest cart")
            self._use_guest_cart()
            self.error = e.message or failure
        except RemoteError as e:
            logger.error(f"{failure} {e.message}")
            self.error = e.message or failure
        finally:
            self.is_loading = False

    async def add_item(self, product: ProductSnapshot, quantity: int = 1) -> None:
        if quantity <= 0:
            self.error = "Quantity must be greater than zero."
            return
        await self._apply(self.backend.add(self.items, product, quantity), "Could not add item to cart.")

    async def update_quantity(self, product_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line"""
        await self._apply(
            self.backend.set_quantity(self.items, product_id, quantity),
            "Could not update item quantity."
        )

    async def remove_item(self, product_id: str) -> None:
        await self._apply(self.backend.remove(self.items, product_id), "Could not remove item from cart.")

    async def clear(self) -> None:
        await self._apply(self.backend.clear(self.items), "Could not clear cart.")

    async def merge_guest_cart_with_server(self) -> None:
        """
        Move the guest cart into the signed-in user's server cart

        Does nothing unless the store is in guest mode with at least one line.
        On success local storage is cleared and the merged server cart is
        loaded. On failure the guest cart stays as it was.
        """
        if self.mode != CartMode.GUEST or not self.items:
            return

        snapshot = [
            CartItemForMerge(
                product_id=item.product_id,
                quantity=item.quantity,
                price_at_addition=item.unit_price
            )
            for item in self.items
        ]

        self.is_loading = True
        self.error = None
        try:
            await self.api.merge_cart(snapshot)
        except RemoteError as e:
            logger.error(f"Error merging guest cart: {e.message}")
            self.error = e.message
            self.is_loading = False
            return

        logger.info(f"Merged {len(snapshot)} guest cart lines into server cart")
        self.guest.discard()
        self.mode = CartMode.AUTHENTICATED
        await self.initialize(True)

    def get_total(self) -> float:
        return sum(item.unit_price * item.quantity for item in self.items)

    def get_item_count(self) -> int:
        return sum(item.quantity for item in self.items)

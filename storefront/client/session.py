"""
Client session

Ties the auth state to the cart and wishlist stores: signing in merges or
loads the server cart and fetches the wishlist, signing out falls back to the
guest cart and drops the wishlist.
"""

from typing import Any, Awaitable, Callable, Dict, List, Optional
import enum
import logging

import httpx

from .api import StorefrontAPI
from .cart import CartMode, CartStore
from .config import client_settings
from .errors import RemoteError
from .storage import FileStorage, LocalStorage
from .wishlist import WishlistStore

logger = logging.getLogger(__name__)

class AuthStatus(str, enum.Enum):
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"
    LOADING = "loading"

AuthListener = Callable[[AuthStatus], Awaitable[None]]

class AuthSession:
    """Bearer token holder that notifies listeners when the auth status changes"""

    def __init__(self, token: Optional[str] = None):
        self.token = token
        self.status = AuthStatus.LOADING
        self._listeners: List[AuthListener] = []

    @property
    def is_authenticated(self) -> bool:
        return self.status == AuthStatus.AUTHENTICATED

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def set_status(self, status: AuthStatus) -> None:
        if status == self.status:
            return
        logger.debug(f"Auth status changed: {self.status.value} -> {status.value}")
        self.status = status
        for listener in list(self._listeners):
            await listener(status)

    async def sign_in(self, token: str) -> None:
        self.token = token
        await self.set_status(AuthStatus.AUTHENTICATED)

    async def sign_out(self) -> None:
        self.token = None
        await self.set_status(AuthStatus.UNAUTHENTICATED)

class StorefrontSession:
    """
    Client-side entry point

    Owns the API client, the auth session and the cart and wishlist stores.
    Call ``start()`` once to settle the initial auth status.

    Args:
        api: API client; built from settings when omitted
        storage: Guest cart storage; a ``FileStorage`` at the configured path
            when omitted
        auth: Auth session shared with ``api``
        base_url: API base URL used when building the API client
        transport: httpx transport used when building the API client
    """

    def __init__(
        self,
        api: Optional[StorefrontAPI] = None,
        storage: Optional[LocalStorage] = None,
        auth: Optional[AuthSession] = None,
        *,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        if auth is None:
            auth = api.auth if api is not None else AuthSession()
        self.auth = auth
        self.api = api or StorefrontAPI(auth, base_url=base_url, transport=transport)

        if storage is None:
            storage = FileStorage(
                client_settings.GUEST_STORAGE_PATH,
                quota_bytes=client_settings.GUEST_STORAGE_QUOTA_BYTES
            )
        self.storage = storage

        self.cart = CartStore(self.api, storage)
        self.wishlist = WishlistStore(self.api, auth)
        self.error: Optional[str] = None

        self._unsubscribe = auth.subscribe(self._on_auth_change)

    async def _on_auth_change(self, status: AuthStatus) -> None:
        if status == AuthStatus.AUTHENTICATED:
            if self.cart.mode == CartMode.UNINITIALIZED:
                # Signed in before any guest load: pick up stored lines so they get merged
                self.cart.activate_guest_cart()
            if self.cart.mode == CartMode.GUEST and self.cart.items:
                await self.cart.merge_guest_cart_with_server()
            else:
                await self.cart.initialize(True)
            await self.wishlist.fetch()
        elif status == AuthStatus.UNAUTHENTICATED:
            self.cart.activate_guest_cart()
            self.wishlist.clear_local()

    async def start(self, token: Optional[str] = None) -> None:
        """Settle the initial auth status from a stored token, if any"""
        if token is not None:
            self.auth.token = token

        if self.auth.token:
            await self.auth.set_status(AuthStatus.AUTHENTICATED)
        else:
            await self.auth.set_status(AuthStatus.UNAUTHENTICATED)

    async def login(self, email: str, password: str) -> bool:
        """
        Sign in with credentials

        Returns:
            True on success. On failure ``error`` holds the server's message
            and the session is unchanged.
        """
        self.error = None
        try:
            token = await self.api.login(email, password)
        except RemoteError as e:
            logger.warning(f"Login failed for {email}: {e.message}")
            self.error = e.message
            return False

        await self.auth.sign_in(token)
        return True

    async def register(self, name: str, email: str, password: str) -> bool:
        self.error = None
        try:
            token = await self.api.register(name, email, password)
        except RemoteError as e:
            logger.warning(f"Registration failed for {email}: {e.message}")
            self.error = e.message
            return False

        await self.auth.sign_in(token)
        return True

    async def logout(self) -> None:
        await self.auth.sign_out()

    async def checkout(
        self,
        shipping_details: Dict[str, str],
        payment_method: str,
        payment_reference: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Place an order for the current server cart

        The server empties the cart once the order exists, so the cart is
        reloaded afterwards rather than cleared.

        Returns:
            The created order, or None with ``error`` set
        """
        self.error = None
        if not self.auth.is_authenticated:
            self.error = "Please log in to place an order."
            return None

        try:
            order = await self.api.create_order(shipping_details, payment_method, payment_reference)
        except RemoteError as e:
            logger.error(f"Checkout failed: {e.message}")
            self.error = e.message
            return None

        logger.info(f"Order {order['id']} placed")
        await self.cart.initialize(True)
        return order

    async def close(self) -> None:
        self._unsubscribe()
        await self.api.aclose()

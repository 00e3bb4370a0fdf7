"""
HTTP client for the storefront API
"""

from typing import Any, Dict, List, Optional, TYPE_CHECKING
from pydantic import TypeAdapter, ValidationError
import httpx
import logging

from .config import client_settings
from .errors import RemoteError, NetworkError, error_from_response
from .models import CartItem, CartItemForMerge, ProductSnapshot, WishlistItem

if TYPE_CHECKING:
    from .session import AuthSession

logger = logging.getLogger(__name__)

_cart_items = TypeAdapter(List[CartItem])
_wishlist_items = TypeAdapter(List[WishlistItem])

class StorefrontAPI:
    """
    Thin async wrapper over the storefront REST API

    Every failure is raised as a ``RemoteError`` subclass. The bearer token is
    read from the auth session on each request.
    """

    def __init__(
        self,
        auth: "AuthSession",
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None
    ):
        self.auth = auth
        self._client = httpx.AsyncClient(
            base_url=base_url or client_settings.API_BASE_URL,
            transport=transport,
            timeout=timeout or client_settings.CLIENT_TIMEOUT
        )

    async def __aenter__(self) -> "StorefrontAPI":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self) -> Dict[str, str]:
        if self.auth.token:
            return {"Authorization": f"Bearer {self.auth.token}"}
        return {}

    async def _request(
        self,
        method: str,
        path: str,
        default_error: str,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None
    ) -> Any:
        try:
            response = await self._client.request(
                method,
                path,
                json=json,
                params=params,
                headers=self._headers()
            )
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise NetworkError(str(e) or default_error) from e

        if response.is_error:
            error = error_from_response(response, default_error)
            logger.debug(f"{method} {path} returned {response.status_code}: {error.message}")
            raise error

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise RemoteError("Invalid JSON in server response", response.status_code) from e

    @staticmethod
    def _parse(adapter_or_model, data: Any):
        try:
            if isinstance(adapter_or_model, TypeAdapter):
                return adapter_or_model.validate_python(data)
            return adapter_or_model.model_validate(data)
        except ValidationError as e:
            raise RemoteError(f"Unexpected response from server: {e.error_count()} invalid fields") from e

    # Cart

    async def get_cart(self) -> List[CartItem]:
        data = await self._request("GET", "/cart", "Failed to fetch cart from server")
        return self._parse(_cart_items, data or [])

    async def add_to_cart(self, product_id: str, quantity: int) -> None:
        await self._request(
            "POST", "/cart", "Failed to add item to cart",
            json={"productId": product_id, "quantity": quantity}
        )

    async def update_cart_item(self, product_id: str, quantity: int) -> None:
        await self._request(
            "PUT", f"/cart/items/{product_id}", "Failed to update item quantity",
            json={"quantity": quantity}
        )

    async def remove_cart_item(self, product_id: str) -> None:
        await self._request("DELETE", f"/cart/items/{product_id}", "Failed to remove item from cart")

    async def clear_cart(self) -> None:
        await self._request("DELETE", "/cart", "Failed to clear cart")

    async def merge_cart(self, items: List[CartItemForMerge]) -> None:
        await self._request(
            "POST", "/cart/merge", "Failed to merge guest cart with server",
            json={"items": [item.model_dump(by_alias=True) for item in items]}
        )

    # Wishlist

    async def get_wishlist(self) -> List[WishlistItem]:
        data = await self._request("GET", "/wishlist", "Failed to fetch wishlist")
        return self._parse(_wishlist_items, data or [])

    async def add_wishlist_item(self, product_id: str) -> WishlistItem:
        data = await self._request(
            "POST", "/wishlist/items", "Failed to add item to wishlist",
            json={"productId": product_id}
        )
        return self._parse(WishlistItem, data)

    async def remove_wishlist_item(self, product_id: str) -> None:
        await self._request("DELETE", f"/wishlist/items/{product_id}", "Failed to remove item from wishlist")

    # Auth

    async def login(self, email: str, password: str) -> str:
        """Exchange credentials for an access token"""
        data = await self._request(
            "POST", "/auth/login", "Login failed",
            json={"email": email, "password": password}
        )
        return data["tokens"]["access_token"]

    async def register(self, name: str, email: str, password: str) -> str:
        """Create an account and return its access token"""
        data = await self._request(
            "POST", "/auth/register", "Registration failed",
            json={"name": name, "email": email, "password": password}
        )
        return data["tokens"]["access_token"]

    # Catalogue

    async def list_products(self, **filters: Any) -> List[ProductSnapshot]:
        params = {key: value for key, value in filters.items() if value is not None}
        data = await self._request("GET", "/products", "Failed to fetch products", params=params)
        return [self._parse(ProductSnapshot, item) for item in data["items"]]

    async def get_product(self, product_id: str) -> ProductSnapshot:
        data = await self._request("GET", f"/products/{product_id}", "Failed to fetch product")
        return self._parse(ProductSnapshot, data)

    # Orders

    async def create_order(
        self,
        shipping_details: Dict[str, str],
        payment_method: str,
        payment_reference: Optional[str] = None
    ) -> Dict[str, Any]:
        return await self._request(
            "POST", "/orders", "Could not create order",
            json={
                "shipping_details": shipping_details,
                "payment_method": payment_method,
                "payment_reference": payment_reference
            }
        )

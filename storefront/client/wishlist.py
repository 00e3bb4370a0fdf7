"""
Wishlist store, authenticated users only
"""

from typing import List, Optional, TYPE_CHECKING
import logging

from .api import StorefrontAPI
from .errors import RemoteError, ConflictError
from .models import WishlistItem

if TYPE_CHECKING:
    from .session import AuthSession

logger = logging.getLogger(__name__)

class WishlistStore:
    """In-memory wishlist; nothing is persisted locally"""

    def __init__(self, api: StorefrontAPI, auth: "AuthSession"):
        self.api = api
        self.auth = auth
        self.items: List[WishlistItem] = []
        self.is_loading = False
        self.error: Optional[str] = None

    async def fetch(self) -> None:
        self.is_loading = True
        self.error = None
        try:
            self.items = await self.api.get_wishlist()
        except RemoteError as e:
            logger.error(f"Error fetching wishlist: {e.message}")
            self.error = e.message
        finally:
            self.is_loading = False

    async def add(self, product_id: str) -> None:
        if not self.auth.is_authenticated:
            self.error = "Please log in to add items to your wishlist."
            return

        if self.is_in_wishlist(product_id):
            return

        self.is_loading = True
        self.error = None
        try:
            item = await self.api.add_wishlist_item(product_id)
        except ConflictError as e:
            # Server already has it: reload to match
            await self.fetch()
            self.error = e.message or "Item already in wishlist."
            return
        except RemoteError as e:
            logger.error(f"Error adding to wishlist: {e.message}")
            self.error = e.message
            self.is_loading = False
            return

        self.items = self.items + [item]
        self.is_loading = False

    async def remove(self, product_id: str) -> None:
        self.is_loading = True
        self.error = None
        try:
            await self.api.remove_wishlist_item(product_id)
        except RemoteError as e:
            logger.error(f"Error removing from wishlist: {e.message}")
            self.error = e.message
            return
        finally:
            self.is_loading = False

        self.items = [item for item in self.items if item.product_id != product_id]

    def is_in_wishlist(self, product_id: str) -> bool:
        return any(item.product_id == product_id for item in self.items)

    def clear_local(self) -> None:
        self.items = []
        self.error = None
        self.is_loading = False

"""
Storefront client settings
Loaded separately from the API settings so the client needs no server secrets
"""

from pydantic_settings import BaseSettings
from functools import lru_cache

class ClientSettings(BaseSettings):
    """Settings for the cart and wishlist client"""

    API_BASE_URL: str = "http://localhost:8000/api/v1"
    CLIENT_TIMEOUT: float = 10.0

    # Guest cart persistence
    GUEST_CART_STORAGE_KEY: str = "storefrontGuestCart"
    GUEST_STORAGE_PATH: str = ".storefront/storage.json"
    GUEST_STORAGE_QUOTA_BYTES: int = 5 * 1024 * 1024  # 5MB, browser localStorage size

    class Config:
        env_prefix = "STOREFRONT_"
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

@lru_cache()
def get_client_settings() -> ClientSettings:
    return ClientSettings()

client_settings = get_client_settings()

"""Cart client selection.

STOREFRONT_CART_CLIENT picks the adapter the store talks to when none is
passed in: ``fake`` (in-memory, the default) or ``http`` (the commerce store
API at STOREFRONT_BACKEND_URL). set_client() overrides the choice.
"""

from storefront.client.port import CartClient
from storefront.config import StorefrontConfig

_current_client: CartClient | None = None


def get_client() -> CartClient:
    """Return the shared cart client, building it from config on first use."""
    global _current_client
    if _current_client is None:
        config = StorefrontConfig.from_env()
        if config.cart_client == "fake":
            from storefront.client.fake_adapter import FakeCartClient

            _current_client = FakeCartClient()
        elif config.cart_client == "http":
            from storefront.client.http_adapter import HttpCartClient

            _current_client = HttpCartClient(config=config)
        else:
            raise ValueError(f"Unknown cart client: {config.cart_client}")
    return _current_client


def set_client(client: CartClient) -> None:
    global _current_client
    _current_client = client


def reset_client() -> None:
    global _current_client
    _current_client = None

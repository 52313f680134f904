"""Storefront runtime configuration, read from the environment."""

import os
from dataclasses import dataclass

DEFAULT_BACKEND_URL = "http://localhost:8000"
DEFAULT_COUNTRY_CODE = "us"
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_CART_CLIENT = "fake"


@dataclass(frozen=True)
class StorefrontConfig:
    backend_url: str = DEFAULT_BACKEND_URL
    country_code: str = DEFAULT_COUNTRY_CODE
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    cart_client: str = DEFAULT_CART_CLIENT

    @classmethod
    def from_env(cls) -> "StorefrontConfig":
        return cls(
            backend_url=os.getenv("STOREFRONT_BACKEND_URL", DEFAULT_BACKEND_URL).rstrip("/"),
            country_code=os.getenv("STOREFRONT_COUNTRY_CODE", DEFAULT_COUNTRY_CODE).lower(),
            request_timeout=float(os.getenv("STOREFRONT_REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT))),
            cart_client=os.getenv("STOREFRONT_CART_CLIENT", DEFAULT_CART_CLIENT).lower(),
        )

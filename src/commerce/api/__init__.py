"""Commerce domain API package."""

from commerce.api.routes import cart_router, variant_router

__all__ = ["cart_router", "variant_router"]

"""Commerce store API application.

Serves the authoritative cart the storefront reconciles against. Commands
are processed synchronously per request inside the commerce domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

import re

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied.
from commerce.domain import commerce
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers
from storefront.utils.logging import bind_cart, clear_context, configure_logging

configure_logging()
commerce.init()

_CART_PATH = re.compile(r"^/store/carts/(?P<cart_id>[^/]+)")


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Commerce Store API",
    description="Authoritative carts, line items, and variant prices",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the commerce domain context and tag logs with the cart being served."""
    match = _CART_PATH.match(request.url.path)
    if match:
        bind_cart(match.group("cart_id"))
    try:
        if request.url.path.startswith("/store"):
            with commerce.domain_context():
                return await call_next(request)
        # No domain match, pass through (health check, docs, etc.)
        return await call_next(request)
    finally:
        clear_context()


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from commerce.api import cart_router, variant_router  # noqa: E402

app.include_router(cart_router)
app.include_router(variant_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "commerce": {"name": commerce.name},
            },
        }
    )

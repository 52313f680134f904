import pytest
from commerce.api import cart_router, variant_router
from fastapi import FastAPI, Request
from protean.integrations.fastapi import register_exception_handlers


@pytest.fixture()
def app(commerce_bed):
    from commerce.domain import commerce

    app = FastAPI()
    app.include_router(cart_router)
    app.include_router(variant_router)
    register_exception_handlers(app)

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        with commerce.domain_context():
            return await call_next(request)

    return app

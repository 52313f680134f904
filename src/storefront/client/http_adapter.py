"""HTTP cart client: talks to the commerce store API over httpx.

Routes (see commerce.api.routes):
    POST   /store/carts
    GET    /store/carts/{cart_id}
    POST   /store/carts/{cart_id}/line-items/bulk
    POST   /store/carts/{cart_id}/line-items/{line_id}
    DELETE /store/carts/{cart_id}/line-items/{line_id}

A client built without a cart id creates the shopper's cart on the first
bulk add, using the add's country code, and keeps that id afterwards.

Transport failures and non-2xx responses are raised as CartClientError.
"""

import httpx
import structlog

from storefront.cart.schemas import Cart
from storefront.client.port import CartClient, CartClientError, LineItemInput
from storefront.config import StorefrontConfig

logger = structlog.get_logger(__name__)


class HttpCartClient(CartClient):
    def __init__(
        self,
        cart_id: str | None = None,
        config: StorefrontConfig | None = None,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self.cart_id = cart_id
        self.config = config or StorefrontConfig.from_env()
        # A caller-supplied AsyncClient stays open; the caller closes it.
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(
            base_url=self.config.backend_url,
            timeout=self.config.request_timeout,
        )

    async def __aenter__(self) -> "HttpCartClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def add_to_cart_bulk(self, line_items: list[LineItemInput], country_code: str) -> None:
        if self.cart_id is None:
            await self._create_cart(country_code)

        await self._request(
            "POST",
            f"/store/carts/{self.cart_id}/line-items/bulk",
            json={
                "line_items": [
                    {"variant_id": line_item.variant_id, "quantity": line_item.quantity}
                    for line_item in line_items
                ],
                "country_code": country_code,
            },
        )

    async def update_line_item(self, line_id: str, quantity: int) -> None:
        await self._request(
            "POST",
            f"{self._cart_url()}/line-items/{line_id}",
            json={"quantity": quantity},
        )

    async def delete_line_item(self, line_id: str) -> None:
        await self._request("DELETE", f"{self._cart_url()}/line-items/{line_id}")

    async def retrieve_cart(self) -> Cart | None:
        if self.cart_id is None:
            return None
        try:
            response = await self._request("GET", f"/store/carts/{self.cart_id}")
        except CartClientError as exc:
            if exc.status_code == 404:
                return None
            raise
        return Cart.model_validate(response.json()["cart"])

    async def _create_cart(self, country_code: str) -> None:
        response = await self._request("POST", "/store/carts", json={"country_code": country_code})
        self.cart_id = response.json()["cart_id"]
        logger.info("Cart created", cart_id=self.cart_id, country_code=country_code)

    def _cart_url(self) -> str:
        if self.cart_id is None:
            raise CartClientError("No cart has been created yet")
        return f"/store/carts/{self.cart_id}"

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = await self._http.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Cart API rejected request",
                method=method,
                url=url,
                status_code=exc.response.status_code,
            )
            raise CartClientError(
                f"{method} {url} failed with {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("Cart API unreachable", method=method, url=url, error=str(exc))
            raise CartClientError(f"{method} {url} failed: {exc}") from exc
        return response

"""Configurable fake cart client for development and testing.

Simulates the commerce backend in memory: it keeps its own authoritative
cart, issues line item ids ``li_1``, ``li_2``, ... and prices new rows from
the variants it was given. It can be configured at runtime to reject
operations, and individual operations can be held in flight until released,
which makes racing confirmations reproducible in tests.
"""

import asyncio
from datetime import UTC, datetime

from storefront.cart.optimistic import calculate_cart_total
from storefront.cart.schemas import Cart, LineItem, ProductVariant
from storefront.client.port import CartClient, CartClientError, LineItemInput

OPERATIONS = ("add_to_cart_bulk", "update_line_item", "delete_line_item")


class FakeCartClient(CartClient):
    """In-memory stand-in for the remote cart API."""

    def __init__(self, cart_id: str = "cart_fake", variants: list[ProductVariant] | None = None) -> None:
        self.cart = Cart(id=cart_id)
        self.variants: dict[str, ProductVariant] = {variant.id: variant for variant in variants or []}
        self.failure_reason: str = "Backend rejected the request"
        self.failing: set[str] = set()
        self.calls: list[dict] = []
        self._holds: dict[str, asyncio.Event] = {}
        self._sequence = 0

    def configure(
        self,
        should_succeed: bool,
        failure_reason: str = "Backend rejected the request",
        operations: tuple[str, ...] = OPERATIONS,
    ) -> None:
        """Make ``operations`` succeed or fail from now on."""
        self.failure_reason = failure_reason
        if should_succeed:
            self.failing.difference_update(operations)
        else:
            self.failing.update(operations)

    def hold(self, operation: str) -> None:
        """Keep the next calls to ``operation`` in flight until :meth:`release`."""
        self._holds[operation] = asyncio.Event()

    def release(self, operation: str) -> None:
        self._holds.pop(operation).set()

    def calls_to(self, method: str) -> list[dict]:
        return [call for call in self.calls if call["method"] == method]

    def seed(self, cart: Cart) -> None:
        """Replace the authoritative cart."""
        self.cart = cart

    # -------------------------------------------------------------------
    # CartClient
    # -------------------------------------------------------------------
    async def add_to_cart_bulk(self, line_items: list[LineItemInput], country_code: str) -> None:
        self.calls.append(
            {
                "method": "add_to_cart_bulk",
                "line_items": list(line_items),
                "country_code": country_code,
            }
        )
        await self._settle("add_to_cart_bulk")

        items = list(self.cart.items)
        now = datetime.now(UTC).isoformat()
        for line_item in line_items:
            index = next((i for i, item in enumerate(items) if item.variant_id == line_item.variant_id), None)
            if index is not None:
                items[index] = items[index].with_quantity(items[index].quantity + line_item.quantity)
                continue

            variant = self.variants.get(line_item.variant_id)
            self._sequence += 1
            item = LineItem(
                id=f"li_{self._sequence}",
                cart_id=self.cart.id,
                title=variant.title if variant else "",
                variant_id=line_item.variant_id,
                product_id=variant.product.id if variant and variant.product else None,
                quantity=line_item.quantity,
                unit_price=variant.price_amount if variant else 0,
                created_at=now,
            )
            items.append(item.with_quantity(line_item.quantity))

        self._replace_items(items)

    async def update_line_item(self, line_id: str, quantity: int) -> None:
        self.calls.append({"method": "update_line_item", "line_id": line_id, "quantity": quantity})
        await self._settle("update_line_item")

        if self.cart.find_item(line_id) is None:
            raise CartClientError(f"Line item {line_id} not found", status_code=404)

        items = []
        for item in self.cart.items:
            if item.id != line_id:
                items.append(item)
            elif quantity > 0:
                items.append(item.with_quantity(quantity))
        self._replace_items(items)

    async def delete_line_item(self, line_id: str) -> None:
        self.calls.append({"method": "delete_line_item", "line_id": line_id})
        await self._settle("delete_line_item")

        if self.cart.find_item(line_id) is None:
            raise CartClientError(f"Line item {line_id} not found", status_code=404)

        self._replace_items([item for item in self.cart.items if item.id != line_id])

    async def retrieve_cart(self) -> Cart | None:
        return self.cart

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------
    async def _settle(self, operation: str) -> None:
        hold = self._holds.get(operation)
        if hold is not None:
            await hold.wait()
        if operation in self.failing:
            raise CartClientError(self.failure_reason, status_code=400)

    def _replace_items(self, items: list[LineItem]) -> None:
        self.cart = self.cart.model_copy(
            update={"items": tuple(items), "item_subtotal": calculate_cart_total(items)}
        )

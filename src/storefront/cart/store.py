"""Optimistic cart store: instant cart updates reconciled against the backend.

Every mutation runs in two phases:

1. Synchronously, before the first await: snapshot the working cart, derive
   the provisional cart with a pure reducer, and publish it.
2. Await the one remote call for the mutation. On success nothing else
   happens here; the next authoritative cart passed to ``refresh()``
   supersedes the provisional one. On failure the store restores the
   snapshot taken for *this* operation and raises an error toast.

Because each operation only ever restores its own snapshot, a failed call
does not undo optimistic changes made by operations that started earlier
and are still in flight. Remote failures never propagate to the caller.
"""

import copy

import structlog
from protean.exceptions import ValidationError

from storefront.cart import reducers
from storefront.cart.event_bus import CartEventBus, get_event_bus
from storefront.cart.optimistic import is_optimistic_item_id, sort_line_items
from storefront.cart.schemas import AddToCartEventPayload, Cart, LineItem
from storefront.cart.toasts import LogToaster, Toaster
from storefront.client import get_client
from storefront.client.port import CartClient, LineItemInput
from storefront.config import StorefrontConfig

logger = structlog.get_logger(__name__)

ADD_FAILED_MESSAGE = "Failed to add to cart"
DELETE_FAILED_MESSAGE = "Failed to delete item"
UPDATE_FAILED_MESSAGE = "Failed to update cart quantity"


class OptimisticCartStore:
    """Owns the working cart for one shopper session.

    Without an explicit ``client`` the store uses the shared client from
    ``storefront.client.get_client()``, selected by STOREFRONT_CART_CLIENT.
    """

    def __init__(
        self,
        cart: Cart | None,
        client: CartClient | None = None,
        toaster: Toaster | None = None,
        event_bus: CartEventBus | None = None,
        country_code: str | None = None,
    ) -> None:
        self._current = cart
        self.client = client or get_client()
        self.toaster = toaster or LogToaster()
        self.event_bus = event_bus or get_event_bus()
        self.country_code = country_code or StorefrontConfig.from_env().country_code
        self._is_open = False

    # -------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------
    @property
    def current(self) -> Cart | None:
        """The working cart, in the order rows were added."""
        return self._current

    @property
    def cart(self) -> Cart | None:
        """The working cart with rows in display order."""
        if self._current is None:
            return None
        return self._current.model_copy(update={"items": sort_line_items(self._current.items)})

    @property
    def line_items(self) -> tuple[LineItem, ...]:
        if self._current is None:
            return ()
        return sort_line_items(self._current.items)

    def refresh(self, cart: Cart | None) -> None:
        """Adopt a fresh authoritative cart, dropping any optimistic state."""
        self._current = cart
        logger.debug(
            "Cart refreshed from backend",
            cart_id=cart.id if cart else None,
            item_count=len(cart.items) if cart else 0,
        )

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def open(self) -> None:
        """Start receiving add-to-cart events from other components."""
        self.event_bus.register_cart_add_handler(self.add_to_cart)
        self._is_open = True

    def close(self) -> None:
        if self._is_open:
            self.event_bus.unregister_cart_add_handler(self.add_to_cart)
            self._is_open = False

    async def __aenter__(self) -> "OptimisticCartStore":
        self.open()
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.close()

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    async def add_to_cart(self, payload: AddToCartEventPayload) -> None:
        """Add variants in bulk, merging into rows that already hold them."""
        previous = self._snapshot()
        self._current = reducers.add_line_items(self._current, payload)

        line_items = [
            LineItemInput(variant_id=entry.product_variant.id, quantity=entry.quantity)
            for entry in payload.line_items
        ]
        try:
            await self.client.add_to_cart_bulk(line_items, self.country_code)
        except Exception:
            logger.warning(
                "Add to cart rejected, reverting",
                region_id=payload.region_id,
                variant_ids=[line_item.variant_id for line_item in line_items],
                exc_info=True,
            )
            self._revert(previous, ADD_FAILED_MESSAGE)

    async def delete_item(self, line_item_id: str) -> None:
        if self._current is None or self._current.find_item(line_item_id) is None:
            logger.debug("Delete skipped, line item not in cart", line_item_id=line_item_id)
            return

        previous = self._snapshot()
        self._current = reducers.delete_line_item(self._current, line_item_id)

        try:
            await self.client.delete_line_item(line_item_id)
        except Exception:
            logger.warning("Delete line item rejected, reverting", line_item_id=line_item_id, exc_info=True)
            self._revert(previous, DELETE_FAILED_MESSAGE)

    async def update_quantity(self, line_item_id: str, quantity: int) -> None:
        """Set a row's quantity; 0 removes the row.

        Rows still under an optimistic id have no backend counterpart yet, so
        only the local cart changes for them.
        """
        if quantity < 0:
            raise ValidationError({"quantity": ["Quantity cannot be negative"]})

        if self._current is None or self._current.find_item(line_item_id) is None:
            logger.debug("Update skipped, line item not in cart", line_item_id=line_item_id)
            return

        previous = self._snapshot()
        self._current = reducers.update_line_item_quantity(self._current, line_item_id, quantity)

        if is_optimistic_item_id(line_item_id):
            return

        try:
            await self.client.update_line_item(line_item_id, quantity)
        except Exception:
            logger.warning(
                "Update line item rejected, reverting",
                line_item_id=line_item_id,
                quantity=quantity,
                exc_info=True,
            )
            self._revert(previous, UPDATE_FAILED_MESSAGE)

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------
    def _snapshot(self) -> Cart | None:
        return copy.deepcopy(self._current)

    def _revert(self, previous: Cart | None, message: str) -> None:
        self._current = previous
        self.toaster.error(message)

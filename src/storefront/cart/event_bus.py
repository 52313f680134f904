"""Cart event bus: lets components outside the cart trigger an optimistic add.

A product listing, a quick-order form, or a reorder button can publish an
"add to cart" payload without holding a reference to the cart store. The bus
holds exactly one active handler: registering a new handler replaces the
previous one. Stores register on open and unregister on close, so the bus is
scoped to the lifetime of whichever store currently owns the cart.

Provides get_event_bus() / set_event_bus() / reset_event_bus() for the
process-wide default bus.
"""

from collections.abc import Awaitable, Callable

import structlog

from storefront.cart.schemas import AddToCartEventPayload

logger = structlog.get_logger(__name__)

CartAddHandler = Callable[[AddToCartEventPayload], Awaitable[None]]


class CartEventBus:
    """Single-handler registry for cross-component add-to-cart triggers."""

    def __init__(self) -> None:
        self._cart_add_handler: CartAddHandler | None = None

    @property
    def has_handler(self) -> bool:
        return self._cart_add_handler is not None

    def register_cart_add_handler(self, handler: CartAddHandler) -> None:
        if self._cart_add_handler is not None and self._cart_add_handler != handler:
            logger.debug("Replacing cart add handler")
        self._cart_add_handler = handler

    def unregister_cart_add_handler(self, handler: CartAddHandler) -> None:
        """Clear ``handler`` if it is still the active one.

        A store that closes after another store took over the bus must not
        remove the newer registration.
        """
        if self._cart_add_handler == handler:
            self._cart_add_handler = None

    async def emit_cart_add(self, payload: AddToCartEventPayload) -> bool:
        """Dispatch ``payload`` to the active handler.

        Returns False when no cart is listening.
        """
        handler = self._cart_add_handler
        if handler is None:
            logger.warning(
                "Add to cart emitted with no registered cart",
                region_id=payload.region_id,
                line_item_count=len(payload.line_items),
            )
            return False

        await handler(payload)
        return True


_current_bus: CartEventBus | None = None


def get_event_bus() -> CartEventBus:
    """Return the process-wide cart event bus, creating it on first use."""
    global _current_bus
    if _current_bus is None:
        _current_bus = CartEventBus()
    return _current_bus


def set_event_bus(bus: CartEventBus) -> None:
    global _current_bus
    _current_bus = bus


def reset_event_bus() -> None:
    global _current_bus
    _current_bus = None

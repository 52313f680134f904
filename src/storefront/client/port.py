"""Cart client port (abstract interface).

Defines the remote cart operations the optimistic store depends on. This
enables swapping between FakeCartClient (dev/test) and HttpCartClient
(production) without changing the store.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from storefront.cart.schemas import Cart


class CartClientError(Exception):
    """A remote cart call was rejected by the backend or never reached it."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class LineItemInput:
    """A variant and quantity sent to the backend in a bulk add."""

    variant_id: str
    quantity: int


class CartClient(ABC):
    """Abstract remote cart interface."""

    @abstractmethod
    async def add_to_cart_bulk(self, line_items: list[LineItemInput], country_code: str) -> None:
        """Add several variants to the cart in one call."""
        ...

    @abstractmethod
    async def update_line_item(self, line_id: str, quantity: int) -> None:
        """Set the quantity of a confirmed line item."""
        ...

    @abstractmethod
    async def delete_line_item(self, line_id: str) -> None:
        """Remove a confirmed line item."""
        ...

    @abstractmethod
    async def retrieve_cart(self) -> Cart | None:
        """Fetch the authoritative cart, or None when the session has none."""
        ...

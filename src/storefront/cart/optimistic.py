"""Optimistic line item ids, cart totals, and display ordering."""

from collections.abc import Iterable

from storefront.cart.schemas import LineItem

OPTIMISTIC_ITEM_ID_PREFIX = "__optimistic__"


def generate_optimistic_item_id(variant_id: str) -> str:
    """Provisional id for a row the backend has not confirmed yet.

    Deterministic per variant, so repeated adds of the same variant before
    confirmation land on the same row.
    """
    return f"{OPTIMISTIC_ITEM_ID_PREFIX}-{variant_id}"


def is_optimistic_item_id(line_item_id: str) -> bool:
    return line_item_id.startswith(OPTIMISTIC_ITEM_ID_PREFIX)


def calculate_cart_total(items: Iterable[LineItem]) -> float:
    return sum((item.unit_price * item.quantity for item in items), 0)


def sort_line_items(items: Iterable[LineItem]) -> tuple[LineItem, ...]:
    """Most recently created first; rows without a timestamp go last.

    Ties keep their current relative order.
    """
    return tuple(sorted(items, key=lambda item: item.created_at or "", reverse=True))

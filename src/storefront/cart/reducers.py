"""Pure cart transitions applied optimistically by the cart store.

Each reducer takes the working cart and returns a new one; inputs are never
mutated. The subtotal is recomputed from the resulting rows every time.
"""

from datetime import UTC, datetime

from storefront.cart.optimistic import calculate_cart_total, generate_optimistic_item_id
from storefront.cart.schemas import AddToCartEventPayload, Cart, LineItem, ProductVariant


def _with_items(cart: Cart, items: list[LineItem]) -> Cart:
    return cart.model_copy(
        update={
            "items": tuple(items),
            "item_subtotal": calculate_cart_total(items),
        }
    )


def build_optimistic_line_item(
    cart: Cart, variant: ProductVariant, quantity: int, created_at: str
) -> LineItem:
    """Synthesize a provisional row for ``variant`` priced from its calculated price."""
    price_amount = variant.price_amount
    product = variant.product

    item = LineItem(
        id=generate_optimistic_item_id(variant.id),
        cart_id=cart.id,
        title=variant.title,
        thumbnail=product.thumbnail if product else None,
        variant_id=variant.id,
        variant=variant,
        product_id=product.id if product else None,
        product=product,
        quantity=quantity,
        unit_price=price_amount,
        is_discountable=False,
        is_tax_inclusive=False,
        requires_shipping=True,
        created_at=created_at,
    )
    return item.with_quantity(quantity)


def add_line_items(cart: Cart | None, payload: AddToCartEventPayload, now: datetime | None = None) -> Cart:
    """Merge the payload's variants into ``cart``.

    Variants already in the cart have their quantity incremented in place;
    new variants are appended under an optimistic id. A missing cart is
    replaced by an empty provisional one.
    """
    if cart is None:
        cart = Cart(id="", region_id=payload.region_id)

    created_at = (now or datetime.now(UTC)).isoformat()
    items = list(cart.items)

    for entry in payload.line_items:
        variant = entry.product_variant
        index = next((i for i, item in enumerate(items) if item.variant_id == variant.id), None)

        if index is not None:
            existing = items[index]
            items[index] = existing.with_quantity(existing.quantity + entry.quantity)
            continue

        items.append(build_optimistic_line_item(cart, variant, entry.quantity, created_at))

    return _with_items(cart, items)


def delete_line_item(cart: Cart, line_item_id: str) -> Cart:
    return _with_items(cart, [item for item in cart.items if item.id != line_item_id])


def update_line_item_quantity(cart: Cart, line_item_id: str, quantity: int) -> Cart:
    """Replace the row's quantity; a quantity of 0 drops the row."""
    items = []
    for item in cart.items:
        if item.id != line_item_id:
            items.append(item)
        elif quantity > 0:
            items.append(item.with_quantity(quantity))

    return _with_items(cart, items)

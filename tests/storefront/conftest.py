import pytest
from storefront.cart.event_bus import CartEventBus, reset_event_bus
from storefront.cart.schemas import (
    AddToCartEventPayload,
    AddToCartLineItem,
    CalculatedPrice,
    Cart,
    LineItem,
    Product,
    ProductVariant,
)
from storefront.cart.store import OptimisticCartStore
from storefront.cart.toasts import MemoryToaster
from storefront.client import reset_client
from storefront.client.fake_adapter import FakeCartClient


def _make_variant(variant_id="v1", price=50.0, product_id="prod_01"):
    return ProductVariant(
        id=variant_id,
        title=f"Variant {variant_id}",
        product=Product(id=product_id, title="Copy paper", thumbnail=f"https://cdn.test/{product_id}.png"),
        calculated_price=CalculatedPrice(calculated_amount=price) if price is not None else None,
    )


def _make_payload(*entries, region_id="reg_01"):
    """Build an add-to-cart payload from (variant, quantity) pairs."""
    return AddToCartEventPayload(
        line_items=[AddToCartLineItem(product_variant=variant, quantity=quantity) for variant, quantity in entries],
        region_id=region_id,
    )


def _make_line_item(line_id, variant_id, quantity, unit_price, created_at=None):
    return LineItem(
        id=line_id,
        cart_id="cart_01",
        variant_id=variant_id,
        quantity=quantity,
        unit_price=unit_price,
        created_at=created_at,
    ).with_quantity(quantity)


def _make_cart(*items, cart_id="cart_01"):
    return Cart(
        id=cart_id,
        region_id="reg_01",
        items=tuple(items),
        item_subtotal=sum(item.unit_price * item.quantity for item in items),
    )


@pytest.fixture(autouse=True)
def _reset_factories():
    yield
    reset_client()
    reset_event_bus()


@pytest.fixture()
def toaster():
    return MemoryToaster()


@pytest.fixture()
def fake_client():
    return FakeCartClient(cart_id="cart_01", variants=[_make_variant("v1", 50.0), _make_variant("v2", 20.0)])


@pytest.fixture()
def event_bus():
    return CartEventBus()


@pytest.fixture()
def make_store(fake_client, toaster, event_bus):
    def _make(cart=None):
        return OptimisticCartStore(
            cart,
            client=fake_client,
            toaster=toaster,
            event_bus=event_bus,
            country_code="us",
        )

    return _make


@pytest.fixture()
def make_variant():
    return _make_variant


@pytest.fixture()
def make_payload():
    return _make_payload


@pytest.fixture()
def make_line_item():
    return _make_line_item


@pytest.fixture()
def make_cart():
    return _make_cart

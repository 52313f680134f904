"""Tests for the pure cart transitions behind optimistic updates."""

from datetime import UTC, datetime

import pytest
from storefront.cart import reducers
from storefront.cart.schemas import Cart


def _subtotal_matches(cart):
    return cart.item_subtotal == sum(item.unit_price * item.quantity for item in cart.items)


class TestAddLineItems:
    def test_new_variant_gets_optimistic_row(self, make_cart, make_payload, make_variant):
        cart = reducers.add_line_items(make_cart(), make_payload((make_variant("v1", 50.0), 2)))

        assert len(cart.items) == 1
        item = cart.items[0]
        assert item.id == "__optimistic__-v1"
        assert item.variant_id == "v1"
        assert item.quantity == 2
        assert item.unit_price == 50.0
        assert item.total == 100.0
        assert item.product_id == "prod_01"
        assert item.thumbnail == "https://cdn.test/prod_01.png"
        assert item.cart_id == "cart_01"
        assert cart.item_subtotal == 100.0

    def test_existing_variant_quantity_incremented(self, make_cart, make_line_item, make_payload, make_variant):
        cart = make_cart(make_line_item("li_1", "v1", 1, 50.0))
        cart = reducers.add_line_items(cart, make_payload((make_variant("v1", 50.0), 3)))

        assert len(cart.items) == 1
        assert cart.items[0].id == "li_1"
        assert cart.items[0].quantity == 4
        assert cart.item_subtotal == 200.0

    def test_repeated_adds_merge_onto_one_row(self, make_cart, make_payload, make_variant):
        variant = make_variant("v1", 10.0)
        cart = reducers.add_line_items(make_cart(), make_payload((variant, 2)))
        cart = reducers.add_line_items(cart, make_payload((variant, 3)))

        assert [item.id for item in cart.items] == ["__optimistic__-v1"]
        assert cart.items[0].quantity == 5

    def test_same_variant_twice_in_one_payload_merges(self, make_cart, make_payload, make_variant):
        variant = make_variant("v1", 10.0)
        cart = reducers.add_line_items(make_cart(), make_payload((variant, 1), (variant, 4)))

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 5

    def test_missing_price_falls_back_to_zero(self, make_cart, make_payload, make_variant):
        cart = reducers.add_line_items(make_cart(), make_payload((make_variant("v1", price=None), 2)))

        assert cart.items[0].unit_price == 0
        assert cart.item_subtotal == 0

    def test_no_cart_creates_provisional_cart(self, make_payload, make_variant):
        cart = reducers.add_line_items(None, make_payload((make_variant("v1", 5.0), 2), region_id="reg_eu"))

        assert cart.id == ""
        assert cart.region_id == "reg_eu"
        assert cart.item_subtotal == 10.0

    def test_new_rows_are_timestamped(self, make_cart, make_payload, make_variant):
        now = datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)
        cart = reducers.add_line_items(make_cart(), make_payload((make_variant("v1"), 1)), now=now)

        assert cart.items[0].created_at == now.isoformat()

    def test_input_cart_is_untouched(self, make_cart, make_line_item, make_payload, make_variant):
        original = make_cart(make_line_item("li_1", "v1", 1, 50.0))
        reducers.add_line_items(original, make_payload((make_variant("v1"), 1), (make_variant("v2"), 1)))

        assert len(original.items) == 1
        assert original.items[0].quantity == 1


class TestDeleteLineItem:
    def test_removes_row_and_recomputes(self, make_cart, make_line_item):
        cart = make_cart(make_line_item("li_1", "v1", 2, 50.0), make_line_item("li_2", "v2", 1, 20.0))
        cart = reducers.delete_line_item(cart, "li_1")

        assert [item.id for item in cart.items] == ["li_2"]
        assert cart.item_subtotal == 20.0

    def test_last_row_leaves_zero_subtotal(self, make_cart, make_line_item):
        cart = reducers.delete_line_item(make_cart(make_line_item("li_1", "v1", 2, 50.0)), "li_1")

        assert cart.items == ()
        assert cart.item_subtotal == 0


class TestUpdateLineItemQuantity:
    def test_replaces_quantity(self, make_cart, make_line_item):
        cart = make_cart(make_line_item("li_1", "v1", 2, 50.0))
        cart = reducers.update_line_item_quantity(cart, "li_1", 5)

        assert cart.items[0].quantity == 5
        assert cart.items[0].subtotal == 250.0
        assert cart.item_subtotal == 250.0

    def test_zero_removes_row(self, make_cart, make_line_item):
        cart = make_cart(make_line_item("li_1", "v1", 2, 50.0), make_line_item("li_2", "v2", 1, 20.0))
        cart = reducers.update_line_item_quantity(cart, "li_1", 0)

        assert [item.id for item in cart.items] == ["li_2"]
        assert cart.item_subtotal == 20.0

    def test_keeps_row_order(self, make_cart, make_line_item):
        cart = make_cart(
            make_line_item("li_1", "v1", 1, 1.0),
            make_line_item("li_2", "v2", 1, 1.0),
            make_line_item("li_3", "v3", 1, 1.0),
        )
        cart = reducers.update_line_item_quantity(cart, "li_2", 9)

        assert [item.id for item in cart.items] == ["li_1", "li_2", "li_3"]


@pytest.mark.parametrize(
    "steps",
    [
        [("add", "v1", 2), ("add", "v2", 1), ("update", "__optimistic__-v1", 7), ("delete", "__optimistic__-v2", 0)],
        [("add", "v1", 1), ("add", "v1", 1), ("update", "__optimistic__-v1", 0), ("add", "v2", 3)],
    ],
)
def test_subtotal_always_matches_rows(steps, make_payload, make_variant):
    cart = Cart(id="cart_01")
    prices = {"v1": 12.5, "v2": 40.0}
    for action, target, quantity in steps:
        if action == "add":
            cart = reducers.add_line_items(cart, make_payload((make_variant(target, prices[target]), quantity)))
        elif action == "update":
            cart = reducers.update_line_item_quantity(cart, target, quantity)
        else:
            cart = reducers.delete_line_item(cart, target)
        assert _subtotal_matches(cart)

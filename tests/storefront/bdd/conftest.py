"""Shared BDD fixtures and step definitions for the optimistic cart."""

import pytest
from pytest_bdd import given, parsers, then


@pytest.fixture()
def store(make_store, make_cart):
    return make_store(make_cart())


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart")
def empty_cart(store):
    return store


@given(
    parsers.cfparse(
        'a cart with item "{line_id}" for variant "{variant_id}" with quantity {qty:d} priced at {price:g}'
    )
)
def cart_with_item(store, fake_client, make_cart, make_line_item, line_id, variant_id, qty, price):
    cart = make_cart(make_line_item(line_id, variant_id, qty, price))
    fake_client.seed(cart)
    store.refresh(cart)


@given("the backend rejects deletes")
def backend_rejects_deletes(fake_client):
    fake_client.configure(should_succeed=False, operations=("delete_line_item",))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} item"))
def cart_has_n_items_singular(store, count):
    assert len(store.current.items) == count


@then(parsers.cfparse("the cart has {count:d} items"))
def cart_has_n_items(store, count):
    assert len(store.current.items) == count


@then(parsers.cfparse('the item "{line_id}" has quantity {qty:d}'))
def item_has_quantity(store, line_id, qty):
    assert store.current.find_item(line_id).quantity == qty


@then(parsers.cfparse("the cart subtotal is {amount:g}"))
def cart_subtotal_is(store, amount):
    assert store.current.item_subtotal == amount
    assert store.current.item_subtotal == sum(item.unit_price * item.quantity for item in store.current.items)

"""Tests for optimistic line item deletes through the cart store."""

import pytest


@pytest.mark.asyncio
async def test_delete_removes_and_calls_backend(make_store, make_cart, make_line_item, fake_client):
    cart = make_cart(make_line_item("li_1", "v1", 1, 50.0), make_line_item("li_2", "v2", 2, 20.0))
    fake_client.seed(cart)
    store = make_store(cart)

    await store.delete_item("li_1")

    assert [item.id for item in store.current.items] == ["li_2"]
    assert store.current.item_subtotal == 40.0
    assert fake_client.calls_to("delete_line_item") == [{"method": "delete_line_item", "line_id": "li_1"}]


@pytest.mark.asyncio
async def test_delete_unknown_item_is_noop(make_store, make_cart, make_line_item, fake_client, toaster):
    cart = make_cart(make_line_item("li_1", "v1", 1, 50.0))
    store = make_store(cart)

    await store.delete_item("li_missing")

    assert store.current == cart
    assert fake_client.calls == []
    assert toaster.toasts == []


@pytest.mark.asyncio
async def test_delete_without_cart_is_noop(make_store, fake_client):
    store = make_store(None)

    await store.delete_item("li_1")

    assert store.current is None
    assert fake_client.calls == []


@pytest.mark.asyncio
async def test_rejected_delete_restores_row(make_store, make_cart, make_line_item, fake_client, toaster):
    cart = make_cart(make_line_item("li_a", "v1", 1, 50.0))
    store = make_store(cart)
    fake_client.configure(should_succeed=False, operations=("delete_line_item",))

    await store.delete_item("li_a")

    assert store.current == cart
    assert store.current.items[0].quantity == 1
    assert store.current.item_subtotal == 50.0
    assert toaster.errors == ["Failed to delete item"]

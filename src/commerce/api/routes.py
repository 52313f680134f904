"""FastAPI routes for the store cart API: carts, line items, and variants."""

import json

from fastapi import APIRouter, HTTPException
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from commerce.api.schemas import (
    AddLineItemsBulkRequest,
    CartIdResponse,
    CartLineItemSchema,
    CartResponse,
    CartSchema,
    CreateCartRequest,
    RegisterVariantRequest,
    UpdateLineItemRequest,
    VariantIdResponse,
)
from commerce.cart.cart import StoreCart
from commerce.cart.line_items import AddLineItemsBulk, DeleteLineItem, UpdateLineItem
from commerce.cart.management import CreateCart
from commerce.variant.registration import RegisterVariant


def serialize_cart(cart: StoreCart) -> CartSchema:
    cart_id = str(cart.id)
    items = []
    for item in cart.items:
        amount = item.unit_price * item.quantity
        items.append(
            CartLineItemSchema(
                id=str(item.id),
                cart_id=cart_id,
                title=item.title or "",
                thumbnail=item.thumbnail,
                variant_id=str(item.variant_id),
                product_id=str(item.product_id) if item.product_id else None,
                quantity=item.quantity,
                unit_price=item.unit_price,
                subtotal=amount,
                total=amount,
                item_subtotal=amount,
                item_total=amount,
                created_at=item.created_at.isoformat() if item.created_at else None,
            )
        )

    return CartSchema(
        id=cart_id,
        region_id=str(cart.region_id) if cart.region_id else None,
        currency_code=cart.currency_code,
        item_subtotal=cart.item_subtotal(),
        items=items,
    )


def _cart_response(cart_id: str) -> CartResponse:
    cart = current_domain.repository_for(StoreCart).get(cart_id)
    return CartResponse(cart=serialize_cart(cart))


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/store/carts", tags=["carts"])


@cart_router.post("", status_code=201, response_model=CartIdResponse)
async def create_cart(body: CreateCartRequest) -> CartIdResponse:
    command = CreateCart(
        region_id=body.region_id,
        country_code=body.country_code.lower() if body.country_code else None,
        currency_code=body.currency_code,
    )
    result = current_domain.process(command, asynchronous=False)
    return CartIdResponse(cart_id=result)


@cart_router.get("/{cart_id}", response_model=CartResponse)
async def retrieve_cart(cart_id: str) -> CartResponse:
    try:
        return _cart_response(cart_id)
    except ObjectNotFoundError as exc:
        raise HTTPException(status_code=404, detail=f"Cart {cart_id} not found") from exc


@cart_router.post("/{cart_id}/line-items/bulk", response_model=CartResponse)
async def add_line_items_bulk(cart_id: str, body: AddLineItemsBulkRequest) -> CartResponse:
    command = AddLineItemsBulk(
        cart_id=cart_id,
        line_items=json.dumps([line_item.model_dump() for line_item in body.line_items]),
        country_code=body.country_code,
    )
    current_domain.process(command, asynchronous=False)
    return _cart_response(cart_id)


@cart_router.post("/{cart_id}/line-items/{line_item_id}", response_model=CartResponse)
async def update_line_item(cart_id: str, line_item_id: str, body: UpdateLineItemRequest) -> CartResponse:
    command = UpdateLineItem(
        cart_id=cart_id,
        line_item_id=line_item_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return _cart_response(cart_id)


@cart_router.delete("/{cart_id}/line-items/{line_item_id}", response_model=CartResponse)
async def delete_line_item(cart_id: str, line_item_id: str) -> CartResponse:
    command = DeleteLineItem(cart_id=cart_id, line_item_id=line_item_id)
    current_domain.process(command, asynchronous=False)
    return _cart_response(cart_id)


# ---------------------------------------------------------------------------
# Variant Router
# ---------------------------------------------------------------------------
variant_router = APIRouter(prefix="/store/variants", tags=["variants"])


@variant_router.post("", status_code=201, response_model=VariantIdResponse)
async def register_variant(body: RegisterVariantRequest) -> VariantIdResponse:
    command = RegisterVariant(**body.model_dump())
    result = current_domain.process(command, asynchronous=False)
    return VariantIdResponse(variant_id=result)

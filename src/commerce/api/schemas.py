"""Pydantic request/response schemas for the store cart API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands. The cart payload matches the storefront's
``storefront.cart.schemas.Cart`` model.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CreateCartRequest(BaseModel):
    region_id: str | None = None
    country_code: str | None = Field(default=None, min_length=2, max_length=2)
    currency_code: str = Field(default="usd", min_length=3, max_length=3)


class BulkLineItemSchema(BaseModel):
    variant_id: str
    quantity: int = Field(ge=1)


class AddLineItemsBulkRequest(BaseModel):
    line_items: list[BulkLineItemSchema] = Field(min_length=1)
    country_code: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "line_items": [{"variant_id": "variant_01", "quantity": 2}],
                    "country_code": "us",
                }
            ]
        }
    }


class UpdateLineItemRequest(BaseModel):
    quantity: int = Field(ge=0)


class RegisterVariantRequest(BaseModel):
    variant_id: str
    product_id: str
    product_title: str | None = None
    title: str | None = None
    thumbnail: str | None = None
    calculated_amount: float = Field(ge=0)
    currency_code: str = Field(default="usd", min_length=3, max_length=3)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartIdResponse(BaseModel):
    cart_id: str


class VariantIdResponse(BaseModel):
    variant_id: str


class CartLineItemSchema(BaseModel):
    id: str
    cart_id: str
    title: str = ""
    thumbnail: str | None = None
    variant_id: str
    product_id: str | None = None
    quantity: int
    unit_price: float
    subtotal: float
    total: float
    item_subtotal: float
    item_total: float
    created_at: str | None = None


class CartSchema(BaseModel):
    id: str
    region_id: str | None = None
    currency_code: str = "usd"
    item_subtotal: float
    items: list[CartLineItemSchema]


class CartResponse(BaseModel):
    cart: CartSchema

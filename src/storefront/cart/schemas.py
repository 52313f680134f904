"""Pydantic models for the storefront cart.

These mirror the commerce backend's cart payloads (anti-corruption layer).
All models are frozen so consumers can only ever hold immutable snapshots;
the optimistic store derives new instances instead of mutating in place.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Catalogue sub-models
# ---------------------------------------------------------------------------
class Product(BaseModel):
    id: str
    title: str = ""
    thumbnail: str | None = None

    model_config = {"frozen": True}


class CalculatedPrice(BaseModel):
    calculated_amount: float | None = None
    currency_code: str | None = None

    model_config = {"frozen": True}


class ProductVariant(BaseModel):
    id: str
    title: str = ""
    product: Product | None = None
    calculated_price: CalculatedPrice | None = None

    model_config = {"frozen": True}

    @property
    def price_amount(self) -> float:
        """Calculated unit price, or 0 when the variant carries none."""
        if self.calculated_price is None:
            return 0
        return self.calculated_price.calculated_amount or 0


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class LineItem(BaseModel):
    id: str
    cart_id: str = ""
    title: str = ""
    thumbnail: str | None = None
    variant_id: str | None = None
    variant: ProductVariant | None = None
    product_id: str | None = None
    product: Product | None = None
    quantity: int = Field(ge=0)
    unit_price: float = 0
    subtotal: float = 0
    total: float = 0
    item_subtotal: float = 0
    item_total: float = 0
    original_subtotal: float = 0
    original_total: float = 0
    tax_total: float = 0
    item_tax_total: float = 0
    original_tax_total: float = 0
    discount_total: float = 0
    discount_tax_total: float = 0
    is_discountable: bool = False
    is_tax_inclusive: bool = False
    requires_shipping: bool = True
    created_at: str | None = None

    model_config = {"frozen": True}

    def with_quantity(self, quantity: int) -> "LineItem":
        """Return a copy of this line carrying ``quantity`` with its totals recomputed."""
        amount = self.unit_price * quantity
        return self.model_copy(
            update={
                "quantity": quantity,
                "subtotal": amount,
                "total": amount,
                "item_subtotal": amount,
                "item_total": amount,
                "original_subtotal": amount,
                "original_total": amount,
            }
        )


class Cart(BaseModel):
    id: str
    region_id: str | None = None
    currency_code: str = "usd"
    item_subtotal: float = 0
    items: tuple[LineItem, ...] = ()

    model_config = {"frozen": True}

    def find_item(self, line_item_id: str) -> LineItem | None:
        return next((item for item in self.items if item.id == line_item_id), None)


# ---------------------------------------------------------------------------
# Cross-component "add to cart" payload
# ---------------------------------------------------------------------------
class AddToCartLineItem(BaseModel):
    product_variant: ProductVariant
    quantity: int = Field(ge=1)

    model_config = {"frozen": True}


class AddToCartEventPayload(BaseModel):
    line_items: list[AddToCartLineItem] = Field(min_length=1)
    region_id: str

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "line_items": [
                        {
                            "product_variant": {
                                "id": "variant_01",
                                "title": "Pallet of 40",
                                "product": {"id": "prod_01", "title": "Copy paper"},
                                "calculated_price": {"calculated_amount": 50.0},
                            },
                            "quantity": 2,
                        }
                    ],
                    "region_id": "reg_01",
                }
            ]
        },
    }

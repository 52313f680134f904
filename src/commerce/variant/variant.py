"""Product variant aggregate: the priced, sellable unit a line item points at.

Carries the calculated amount the store charges for one unit in the cart's
currency. Carts copy this price onto a line item when the row is created.
"""

from protean.fields import Float, Identifier, String

from commerce.domain import commerce


@commerce.aggregate
class ProductVariant:
    variant_id = Identifier(identifier=True, required=True)
    product_id = Identifier(required=True)
    product_title = String(max_length=255)
    title = String(max_length=255)
    thumbnail = String(max_length=1024)
    calculated_amount = Float(required=True, min_value=0.0)
    currency_code = String(max_length=3, default="usd")

"""Store cart aggregate: the authoritative cart the storefront reconciles against.

Line items are merged by variant: adding a variant the cart already holds
increases that row's quantity. Prices are captured from the variant's
calculated amount when the row is first created.
"""

import json
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from commerce.cart.events import LineItemDeleted, LineItemsAdded, LineItemUpdated
from commerce.domain import commerce


@commerce.entity(part_of="StoreCart")
class LineItem:
    variant_id = Identifier(required=True)
    product_id = Identifier()
    title = String(max_length=255)
    thumbnail = String(max_length=1024)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    created_at = DateTime()


@commerce.aggregate
class StoreCart:
    region_id = Identifier()
    country_code = String(max_length=2)
    currency_code = String(max_length=3, default="usd")
    items = HasMany(LineItem)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, region_id=None, country_code=None, currency_code="usd"):
        now = datetime.now(UTC)
        return cls(
            region_id=region_id,
            country_code=country_code,
            currency_code=currency_code,
            created_at=now,
            updated_at=now,
        )

    def item_subtotal(self):
        return sum((item.unit_price * item.quantity for item in self.items), 0.0)

    def _find_item(self, line_item_id):
        item = next((i for i in self.items if str(i.id) == str(line_item_id)), None)
        if item is None:
            raise ValidationError({"line_item_id": ["Line item not found in cart"]})
        return item

    # -------------------------------------------------------------------
    # Line items
    # -------------------------------------------------------------------
    def add_line_items(self, entries):
        """Add variants in bulk.

        Args:
            entries: List of (ProductVariant, quantity) pairs.
        """
        if not entries:
            raise ValidationError({"line_items": ["At least one line item is required"]})

        now = datetime.now(UTC)
        added = []

        for variant, quantity in entries:
            if quantity < 1:
                raise ValidationError({"quantity": ["Quantity must be at least 1"]})

            existing = next((i for i in self.items if str(i.variant_id) == str(variant.variant_id)), None)
            if existing:
                existing.quantity += quantity
                item_id = str(existing.id)
            else:
                item = LineItem(
                    variant_id=variant.variant_id,
                    product_id=variant.product_id,
                    title=variant.title,
                    thumbnail=variant.thumbnail,
                    unit_price=variant.calculated_amount,
                    quantity=quantity,
                    created_at=now,
                )
                self.add_items(item)
                item_id = str(item.id)

            added.append(
                {
                    "line_item_id": item_id,
                    "variant_id": str(variant.variant_id),
                    "quantity": quantity,
                }
            )

        self.updated_at = now

        self.raise_(
            LineItemsAdded(
                cart_id=str(self.id),
                line_items=json.dumps(added),
            )
        )

    def update_line_item(self, line_item_id, quantity):
        """Set a row's quantity. A quantity of 0 removes the row."""
        if quantity < 0:
            raise ValidationError({"quantity": ["Quantity cannot be negative"]})

        item = self._find_item(line_item_id)
        previous_quantity = item.quantity

        if quantity == 0:
            self.remove_items(item)
        else:
            item.quantity = quantity

        self.updated_at = datetime.now(UTC)

        self.raise_(
            LineItemUpdated(
                cart_id=str(self.id),
                line_item_id=str(line_item_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def delete_line_item(self, line_item_id):
        item = self._find_item(line_item_id)
        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            LineItemDeleted(
                cart_id=str(self.id),
                line_item_id=str(line_item_id),
            )
        )

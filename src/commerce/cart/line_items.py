"""Cart line item management: commands and handler."""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from commerce.cart.cart import StoreCart
from commerce.domain import commerce
from commerce.variant.variant import ProductVariant

logger = structlog.get_logger(__name__)


@commerce.command(part_of="StoreCart")
class AddLineItemsBulk:
    cart_id = Identifier(required=True)
    line_items = Text(required=True)  # JSON: list of {variant_id, quantity}
    country_code = String(max_length=2)


@commerce.command(part_of="StoreCart")
class UpdateLineItem:
    cart_id = Identifier(required=True)
    line_item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=0)


@commerce.command(part_of="StoreCart")
class DeleteLineItem:
    cart_id = Identifier(required=True)
    line_item_id = Identifier(required=True)


def _load_variant(variant_id):
    try:
        return current_domain.repository_for(ProductVariant).get(variant_id)
    except ObjectNotFoundError as exc:
        raise ValidationError({"variant_id": [f"Variant {variant_id} does not exist"]}) from exc


@commerce.command_handler(part_of=StoreCart)
class ManageLineItemsHandler:
    @handle(AddLineItemsBulk)
    def add_line_items(self, command):
        repo = current_domain.repository_for(StoreCart)
        cart = repo.get(command.cart_id)

        requested = json.loads(command.line_items) if isinstance(command.line_items, str) else command.line_items
        entries = [(_load_variant(entry["variant_id"]), int(entry["quantity"])) for entry in requested]

        if command.country_code and not cart.country_code:
            cart.country_code = command.country_code.lower()

        cart.add_line_items(entries)
        repo.add(cart)

        logger.info("Line items added", cart_id=str(cart.id), line_item_count=len(entries))

    @handle(UpdateLineItem)
    def update_line_item(self, command):
        repo = current_domain.repository_for(StoreCart)
        cart = repo.get(command.cart_id)
        cart.update_line_item(
            line_item_id=command.line_item_id,
            quantity=command.quantity,
        )
        repo.add(cart)

    @handle(DeleteLineItem)
    def delete_line_item(self, command):
        repo = current_domain.repository_for(StoreCart)
        cart = repo.get(command.cart_id)
        cart.delete_line_item(line_item_id=command.line_item_id)
        repo.add(cart)

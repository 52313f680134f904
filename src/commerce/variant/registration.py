"""Variant registration: command and handler."""

from protean import handle
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from commerce.domain import commerce
from commerce.variant.variant import ProductVariant


@commerce.command(part_of="ProductVariant")
class RegisterVariant:
    variant_id = Identifier(required=True)
    product_id = Identifier(required=True)
    product_title = String(max_length=255)
    title = String(max_length=255)
    thumbnail = String(max_length=1024)
    calculated_amount = Float(required=True, min_value=0.0)
    currency_code = String(max_length=3, default="usd")


@commerce.command_handler(part_of=ProductVariant)
class RegisterVariantHandler:
    @handle(RegisterVariant)
    def register_variant(self, command):
        variant = ProductVariant(
            variant_id=command.variant_id,
            product_id=command.product_id,
            product_title=command.product_title,
            title=command.title,
            thumbnail=command.thumbnail,
            calculated_amount=command.calculated_amount,
            currency_code=command.currency_code,
        )
        current_domain.repository_for(ProductVariant).add(variant)
        return str(variant.variant_id)

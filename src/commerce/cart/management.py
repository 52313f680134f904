"""Cart management: command and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from commerce.cart.cart import StoreCart
from commerce.domain import commerce


@commerce.command(part_of="StoreCart")
class CreateCart:
    """Open a new cart for a shopper in a region."""

    region_id = Identifier()
    country_code = String(max_length=2)
    currency_code = String(max_length=3, default="usd")


@commerce.command_handler(part_of=StoreCart)
class ManageCartHandler:
    @handle(CreateCart)
    def create_cart(self, command):
        cart = StoreCart.create(
            region_id=command.region_id,
            country_code=command.country_code,
            currency_code=command.currency_code,
        )
        current_domain.repository_for(StoreCart).add(cart)
        return str(cart.id)

"""Domain events for the StoreCart aggregate."""

from protean.fields import Identifier, Integer, Text

from commerce.domain import commerce


@commerce.event(part_of="StoreCart")
class LineItemsAdded:
    """One or more variants were added to the cart in a single request."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_items = Text(required=True)  # JSON: list of {line_item_id, variant_id, quantity}


@commerce.event(part_of="StoreCart")
class LineItemUpdated:
    """The quantity of a line item was changed (0 removes the row)."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@commerce.event(part_of="StoreCart")
class LineItemDeleted:
    """A line item was removed from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_item_id = Identifier(required=True)

"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Order")
class OrderPlaced:
    """A buyer's order was accepted against current stock."""

    __version__ = 1

    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    product_ids = Text(required=True)  # JSON: list of product ids
    item_count = Integer(required=True)
    total_amount = Float(required=True)
    placed_at = DateTime(required=True)

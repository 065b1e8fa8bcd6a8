"""Domain events for the WasteListing aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="WasteListing")
class ListingCreated:
    """A company offered a quantity of textile waste for exchange."""

    __version__ = 1

    listing_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    title = String(required=True)
    waste_type = String()
    quantity = Float(required=True)
    unit = String(required=True)
    created_at = DateTime(required=True)


@marketplace.event(part_of="WasteListing")
class WasteQuantityReleased:
    """Part of a listing's remaining quantity left with a completed exchange."""

    __version__ = 1

    listing_id = Identifier(required=True)
    exchange_id = Identifier()
    amount = Float(required=True)
    previous_quantity = Float(required=True)
    new_quantity = Float(required=True)
    released_at = DateTime(required=True)


@marketplace.event(part_of="WasteListing")
class ListingSoldOut:
    """A listing has no remaining quantity after a completion."""

    __version__ = 1

    listing_id = Identifier(required=True)
    sold_out_at = DateTime(required=True)


@marketplace.event(part_of="WasteListing")
class ListingStatusChanged:
    """The owner set the availability of a listing by hand."""

    __version__ = 1

    listing_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)

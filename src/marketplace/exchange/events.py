"""Domain events for the ExchangeRequest aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="ExchangeRequest")
class ExchangeRequested:
    """A company asked for part of another company's listing."""

    __version__ = 1

    exchange_id = Identifier(required=True)
    listing_id = Identifier(required=True)
    requester_id = Identifier(required=True)
    quantity = Float(required=True)
    city = String()
    requested_at = DateTime(required=True)


@marketplace.event(part_of="ExchangeRequest")
class ExchangeAccepted:
    """The listing owner agreed to the request."""

    __version__ = 1

    exchange_id = Identifier(required=True)
    listing_id = Identifier(required=True)
    price = Float()
    response_message = Text()
    accepted_at = DateTime(required=True)


@marketplace.event(part_of="ExchangeRequest")
class ExchangeRejected:
    """The listing owner declined the request."""

    __version__ = 1

    exchange_id = Identifier(required=True)
    listing_id = Identifier(required=True)
    response_message = Text()
    rejected_at = DateTime(required=True)


@marketplace.event(part_of="ExchangeRequest")
class ExchangeCompleted:
    """The waste changed hands and left the listing's remaining quantity."""

    __version__ = 1

    exchange_id = Identifier(required=True)
    listing_id = Identifier(required=True)
    requester_id = Identifier(required=True)
    quantity = Float(required=True)
    price = Float()
    completed_at = DateTime(required=True)


@marketplace.event(part_of="ExchangeRequest")
class ExchangeCancelled:
    """One of the parties withdrew before completion."""

    __version__ = 1

    exchange_id = Identifier(required=True)
    listing_id = Identifier(required=True)
    previous_status = String(required=True)
    cancelled_by = Identifier(required=True)
    cancelled_at = DateTime(required=True)

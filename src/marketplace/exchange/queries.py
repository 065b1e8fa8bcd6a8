"""Read side of exchanges — listings of sent and received requests, and a
single request enriched with an advisory carbon-savings estimate.
"""

from enum import Enum

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from marketplace.carbon import estimator
from marketplace.errors import Forbidden
from marketplace.exchange.exchange import ExchangeRequest, ExchangeStatus
from marketplace.listing.listing import WasteListing
from marketplace.listing.queries import listing_record


class ExchangeListType(Enum):
    ALL = "all"
    SENT = "sent"
    RECEIVED = "received"


def exchange_record(exchange, listing=None) -> dict:
    return {
        "id": str(exchange.id),
        "listing_id": str(exchange.listing_id),
        "requester_id": str(exchange.requester_id),
        "quantity": exchange.quantity,
        "status": exchange.status,
        "price": exchange.price,
        "request_message": exchange.request_message,
        "response_message": exchange.response_message,
        "city": exchange.city,
        "exchange_date": exchange.exchange_date,
        "cancelled_by": str(exchange.cancelled_by) if exchange.cancelled_by else None,
        "created_at": exchange.created_at,
        "updated_at": exchange.updated_at,
        "listing": listing_record(listing),
    }


def _parse_list_type(list_type) -> ExchangeListType:
    try:
        return ExchangeListType(list_type or ExchangeListType.ALL.value)
    except ValueError:
        raise ValidationError({"type": [f"Unknown exchange list type: {list_type}"]}) from None


def _parse_status(status) -> str | None:
    if not status or status == "all":
        return None
    try:
        return ExchangeStatus(status).value
    except ValueError:
        raise ValidationError({"status": [f"Unknown exchange status: {status}"]}) from None


def list_exchanges(actor_id, list_type="all", status=None) -> list[dict]:
    """Requests the actor sent, received on their listings, or both, newest first."""
    kind = _parse_list_type(list_type)
    status = _parse_status(status)

    exchanges = current_domain.repository_for(ExchangeRequest)
    listings = current_domain.repository_for(WasteListing)

    found = {}
    if kind in (ExchangeListType.ALL, ExchangeListType.RECEIVED):
        owned_ids = [str(listing.id) for listing in listings.owned_by(actor_id)]
        for exchange in exchanges.for_listings(owned_ids, status=status):
            found[str(exchange.id)] = exchange
    if kind in (ExchangeListType.ALL, ExchangeListType.SENT):
        for exchange in exchanges.sent_by(actor_id, status=status):
            found[str(exchange.id)] = exchange

    ordered = sorted(found.values(), key=lambda exchange: exchange.created_at, reverse=True)
    by_id = listings.by_ids(exchange.listing_id for exchange in ordered)
    return [exchange_record(exchange, by_id.get(str(exchange.listing_id))) for exchange in ordered]


def get_exchange_details(
    exchange_id,
    actor_id,
    actor_is_admin=False,
    waste_type=estimator.DEFAULT_WASTE_TYPE,
    mode=estimator.DEFAULT_MODE,
) -> dict:
    """A single exchange with its listing and carbon savings.

    Carbon fields are ``None`` when the requester city, the listing location
    or the quantity is missing, or when no estimate could be made.
    """
    exchange = current_domain.repository_for(ExchangeRequest).get(exchange_id)
    listing = current_domain.repository_for(WasteListing).get(exchange.listing_id)

    if not (actor_is_admin or exchange.is_party(actor_id, listing.owner_id)):
        raise Forbidden("You are not a party to this exchange")

    record = exchange_record(exchange, listing)
    carbon = estimator.estimate(
        weight=exchange.quantity,
        from_city=listing.location,
        to_city=exchange.city,
        waste_type=waste_type,
        mode=mode,
    )
    record["carbon_savings"] = carbon.savings if carbon else None
    record["carbon_details"] = carbon.details() if carbon else None
    return record

"""Exchange request creation: command and handler."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.errors import Conflict, OwnListingRequest
from marketplace.exchange.exchange import ExchangeRequest
from marketplace.listing.listing import WasteListing

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="ExchangeRequest")
class CreateExchangeRequest:
    listing_id = Identifier(required=True)
    requester_id = Identifier(required=True)
    quantity = Float(required=True)
    request_message = Text()
    city = String(max_length=100)


@marketplace.command_handler(part_of=ExchangeRequest)
class CreateExchangeRequestHandler:
    @handle(CreateExchangeRequest)
    def create_exchange_request(self, command):
        """Record a pending request; inventory is not touched until completion."""
        listing = current_domain.repository_for(WasteListing).get(command.listing_id)

        if not listing.is_available():
            raise Conflict("Textile waste is not available")
        if listing.is_owned_by(command.requester_id):
            raise OwnListingRequest()

        exchange = ExchangeRequest.create(
            listing_id=command.listing_id,
            requester_id=command.requester_id,
            quantity=command.quantity,
            request_message=command.request_message,
            city=command.city,
        )
        if command.quantity > listing.quantity:
            raise Conflict(
                f"Requested quantity {command.quantity} exceeds the available {listing.quantity} {listing.unit}"
            )

        current_domain.repository_for(ExchangeRequest).add(exchange)
        logger.info(
            "Exchange requested",
            exchange_id=str(exchange.id),
            listing_id=str(listing.id),
            requester_id=str(command.requester_id),
            quantity=command.quantity,
        )
        return exchange

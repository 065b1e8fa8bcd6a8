"""Exchange lifecycle transitions — command and handler.

Checks run in a fixed order: the exchange must exist, the action must be
known, the actor must be allowed to take it, and only then is the current
status consulted. Completion releases the requested quantity from the
listing through the inventory ledger in the same unit of work.
"""

import structlog
from protean import handle
from protean.fields import Boolean, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.concurrency import process_with_retry
from marketplace.domain import marketplace
from marketplace.errors import Forbidden, InvalidAction
from marketplace.exchange.exchange import ExchangeAction, ExchangeRequest
from marketplace.inventory.ledger import InventoryLedger
from marketplace.listing.listing import WasteListing

logger = structlog.get_logger(__name__)

_OWNER_ONLY = {ExchangeAction.ACCEPT, ExchangeAction.REJECT}


@marketplace.command(part_of="ExchangeRequest")
class TransitionExchange:
    exchange_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_is_admin = Boolean(default=False)
    action = String(required=True)
    price = Float()
    response_message = Text()


def parse_action(action) -> ExchangeAction:
    try:
        return ExchangeAction((action or "").lower())
    except ValueError:
        raise InvalidAction(action) from None


@marketplace.command_handler(part_of=ExchangeRequest)
class TransitionExchangeHandler:
    @handle(TransitionExchange)
    def transition_exchange(self, command):
        repo = current_domain.repository_for(ExchangeRequest)
        exchange = repo.get(command.exchange_id)
        action = parse_action(command.action)

        listings = current_domain.repository_for(WasteListing)
        listing = listings.get(exchange.listing_id)
        is_owner = listing.is_owned_by(command.actor_id)

        if action in _OWNER_ONLY:
            if not is_owner:
                raise Forbidden("Only the listing owner can accept or reject this request")
        elif not (command.actor_is_admin or exchange.is_party(command.actor_id, listing.owner_id)):
            raise Forbidden("You are not a party to this exchange")

        if action == ExchangeAction.ACCEPT:
            exchange.accept(price=command.price, response_message=command.response_message)
        elif action == ExchangeAction.REJECT:
            exchange.reject(price=command.price, response_message=command.response_message)
        elif action == ExchangeAction.COMPLETE:
            exchange.complete(price=command.price, response_message=command.response_message)
            InventoryLedger(listings=listings).decrement_waste_quantity(
                exchange.listing_id,
                exchange.quantity,
                exchange_id=exchange.id,
            )
        else:
            exchange.cancel(cancelled_by=command.actor_id)

        repo.add(exchange)
        logger.info(
            "Exchange transitioned",
            exchange_id=str(exchange.id),
            action=action.value,
            status=exchange.status,
            actor_id=str(command.actor_id),
        )
        return exchange


def transition_exchange(exchange_id, actor_id, action, actor_is_admin=False, price=None, response_message=None):
    """Apply ``action``; a concurrent transition that saved first makes this one re-check current state."""
    return process_with_retry(
        lambda: TransitionExchange(
            exchange_id=exchange_id,
            actor_id=actor_id,
            actor_is_admin=actor_is_admin,
            action=action,
            price=price,
            response_message=response_message,
        )
    )

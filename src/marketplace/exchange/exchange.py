"""ExchangeRequest aggregate (CQRS) — one company's request for another's waste.

State Machine:
    PENDING → ACCEPTED | REJECTED | CANCELLED
    ACCEPTED → COMPLETED | CANCELLED
    COMPLETED, REJECTED, CANCELLED are terminal

The aggregate guards its own lifecycle only. Who may act is decided by the
transition handler, which knows the listing owner; inventory is touched only
on completion, through the ledger.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String, Text

from marketplace.domain import marketplace
from marketplace.errors import InvalidState
from marketplace.exchange.events import (
    ExchangeAccepted,
    ExchangeCancelled,
    ExchangeCompleted,
    ExchangeRejected,
    ExchangeRequested,
)


class ExchangeStatus(Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ExchangeAction(Enum):
    ACCEPT = "accept"
    REJECT = "reject"
    COMPLETE = "complete"
    CANCEL = "cancel"


_VALID_TRANSITIONS = {
    ExchangeStatus.PENDING: {
        ExchangeStatus.ACCEPTED,
        ExchangeStatus.REJECTED,
        ExchangeStatus.CANCELLED,
    },
    ExchangeStatus.ACCEPTED: {ExchangeStatus.COMPLETED, ExchangeStatus.CANCELLED},
    ExchangeStatus.REJECTED: set(),  # Terminal
    ExchangeStatus.COMPLETED: set(),  # Terminal
    ExchangeStatus.CANCELLED: set(),  # Terminal
}

# Status each action leads to
ACTION_TARGETS = {
    ExchangeAction.ACCEPT: ExchangeStatus.ACCEPTED,
    ExchangeAction.REJECT: ExchangeStatus.REJECTED,
    ExchangeAction.COMPLETE: ExchangeStatus.COMPLETED,
    ExchangeAction.CANCEL: ExchangeStatus.CANCELLED,
}


@marketplace.aggregate
class ExchangeRequest:
    listing_id = Identifier(required=True)
    requester_id = Identifier(required=True)
    quantity = Float(required=True, min_value=0.0)
    status = String(
        choices=ExchangeStatus,
        default=ExchangeStatus.PENDING.value,
    )
    price = Float(min_value=0.0)
    request_message = Text()
    response_message = Text()
    city = String(max_length=100)
    exchange_date = DateTime()
    cancelled_by = Identifier()
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, listing_id, requester_id, quantity, request_message=None, city=None):
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        now = datetime.now(UTC)
        exchange = cls(
            listing_id=listing_id,
            requester_id=requester_id,
            quantity=quantity,
            status=ExchangeStatus.PENDING.value,
            request_message=request_message,
            city=city,
            created_at=now,
            updated_at=now,
        )
        exchange.raise_(
            ExchangeRequested(
                exchange_id=str(exchange.id),
                listing_id=str(listing_id),
                requester_id=str(requester_id),
                quantity=quantity,
                city=city,
                requested_at=now,
            )
        )
        return exchange

    # -------------------------------------------------------------------
    # State transition helpers
    # -------------------------------------------------------------------
    def can_transition_to(self, target_status) -> bool:
        current = ExchangeStatus(self.status)
        return target_status in _VALID_TRANSITIONS.get(current, set())

    def _assert_can_transition(self, target_status, action):
        if not self.can_transition_to(target_status):
            raise InvalidState(self.status, action)

    def _merge_response(self, price, response_message):
        if price is not None:
            if price < 0:
                raise ValidationError({"price": ["Price cannot be negative"]})
            self.price = price
        if response_message is not None:
            self.response_message = response_message

    def is_party(self, actor_id, listing_owner_id) -> bool:
        return str(actor_id) in (str(self.requester_id), str(listing_owner_id))

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def accept(self, price=None, response_message=None):
        self._assert_can_transition(ExchangeStatus.ACCEPTED, ExchangeAction.ACCEPT.value)
        self._merge_response(price, response_message)

        now = datetime.now(UTC)
        self.status = ExchangeStatus.ACCEPTED.value
        self.updated_at = now

        self.raise_(
            ExchangeAccepted(
                exchange_id=str(self.id),
                listing_id=str(self.listing_id),
                price=self.price,
                response_message=self.response_message,
                accepted_at=now,
            )
        )

    def reject(self, price=None, response_message=None):
        self._assert_can_transition(ExchangeStatus.REJECTED, ExchangeAction.REJECT.value)
        self._merge_response(price, response_message)

        now = datetime.now(UTC)
        self.status = ExchangeStatus.REJECTED.value
        self.updated_at = now

        self.raise_(
            ExchangeRejected(
                exchange_id=str(self.id),
                listing_id=str(self.listing_id),
                response_message=self.response_message,
                rejected_at=now,
            )
        )

    def complete(self, price=None, response_message=None):
        """Mark the exchange completed.

        The caller releases the quantity from the listing in the same unit of
        work; this method records the outcome on the request itself.
        """
        self._assert_can_transition(ExchangeStatus.COMPLETED, ExchangeAction.COMPLETE.value)
        self._merge_response(price, response_message)

        now = datetime.now(UTC)
        self.status = ExchangeStatus.COMPLETED.value
        self.exchange_date = now
        self.updated_at = now

        self.raise_(
            ExchangeCompleted(
                exchange_id=str(self.id),
                listing_id=str(self.listing_id),
                requester_id=str(self.requester_id),
                quantity=self.quantity,
                price=self.price,
                completed_at=now,
            )
        )

    def cancel(self, cancelled_by):
        self._assert_can_transition(ExchangeStatus.CANCELLED, ExchangeAction.CANCEL.value)

        previous = self.status
        now = datetime.now(UTC)
        self.status = ExchangeStatus.CANCELLED.value
        self.cancelled_by = cancelled_by
        self.updated_at = now

        self.raise_(
            ExchangeCancelled(
                exchange_id=str(self.id),
                listing_id=str(self.listing_id),
                previous_status=previous,
                cancelled_by=str(cancelled_by),
                cancelled_at=now,
            )
        )

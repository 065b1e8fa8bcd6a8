"""Tests for the ExchangeRequest state machine — valid transitions and guards."""

import pytest
from marketplace.errors import InvalidState
from marketplace.exchange.events import (
    ExchangeAccepted,
    ExchangeCancelled,
    ExchangeCompleted,
    ExchangeRejected,
    ExchangeRequested,
)
from marketplace.exchange.exchange import ExchangeRequest, ExchangeStatus
from protean.exceptions import ValidationError


def _make_exchange(**overrides):
    defaults = {
        "listing_id": "listing-001",
        "requester_id": "company-002",
        "quantity": 40.0,
        "request_message": "We can collect on Friday",
        "city": "Boston",
    }
    defaults.update(overrides)
    return ExchangeRequest.create(**defaults)


def _exchange_at_state(target_status):
    exchange = _make_exchange()
    exchange._events.clear()

    if target_status == ExchangeStatus.PENDING:
        return exchange
    if target_status == ExchangeStatus.REJECTED:
        exchange.reject()
    elif target_status == ExchangeStatus.CANCELLED:
        exchange.cancel(cancelled_by="company-002")
    else:
        exchange.accept()
        if target_status == ExchangeStatus.COMPLETED:
            exchange.complete()

    exchange._events.clear()
    return exchange


class TestExchangeCreation:
    def test_new_request_is_pending(self):
        exchange = _make_exchange()
        assert exchange.status == ExchangeStatus.PENDING.value
        assert exchange.exchange_date is None

    def test_create_raises_exchange_requested(self):
        exchange = _make_exchange()
        event = exchange._events[0]
        assert isinstance(event, ExchangeRequested)
        assert event.quantity == 40.0
        assert event.city == "Boston"

    @pytest.mark.parametrize("quantity", [0, -1.5])
    def test_quantity_must_be_positive(self, quantity):
        with pytest.raises(ValidationError):
            _make_exchange(quantity=quantity)


class TestValidTransitions:
    def test_accept_merges_price_and_message(self):
        exchange = _exchange_at_state(ExchangeStatus.PENDING)
        exchange.accept(price=120.0, response_message="Deal")

        assert exchange.status == ExchangeStatus.ACCEPTED.value
        assert exchange.price == 120.0
        assert exchange.response_message == "Deal"
        assert isinstance(exchange._events[0], ExchangeAccepted)

    def test_reject_from_pending(self):
        exchange = _exchange_at_state(ExchangeStatus.PENDING)
        exchange.reject(response_message="Already promised elsewhere")

        assert exchange.status == ExchangeStatus.REJECTED.value
        assert exchange.response_message == "Already promised elsewhere"
        assert isinstance(exchange._events[0], ExchangeRejected)

    def test_complete_sets_exchange_date(self):
        exchange = _exchange_at_state(ExchangeStatus.ACCEPTED)
        exchange.complete(price=90.0)

        assert exchange.status == ExchangeStatus.COMPLETED.value
        assert exchange.exchange_date is not None
        assert exchange.price == 90.0
        event = exchange._events[0]
        assert isinstance(event, ExchangeCompleted)
        assert event.quantity == 40.0

    def test_missing_price_keeps_earlier_price(self):
        exchange = _exchange_at_state(ExchangeStatus.PENDING)
        exchange.accept(price=75.0)
        exchange.complete()
        assert exchange.price == 75.0

    @pytest.mark.parametrize("status", [ExchangeStatus.PENDING, ExchangeStatus.ACCEPTED])
    def test_cancel_from_open_states(self, status):
        exchange = _exchange_at_state(status)
        exchange.cancel(cancelled_by="company-001")

        assert exchange.status == ExchangeStatus.CANCELLED.value
        assert exchange.cancelled_by == "company-001"
        event = exchange._events[0]
        assert isinstance(event, ExchangeCancelled)
        assert event.previous_status == status.value

    def test_negative_price_rejected(self):
        exchange = _exchange_at_state(ExchangeStatus.PENDING)
        with pytest.raises(ValidationError):
            exchange.accept(price=-1.0)
        assert exchange.status == ExchangeStatus.PENDING.value


class TestInvalidTransitions:
    @pytest.mark.parametrize(
        "status",
        [ExchangeStatus.ACCEPTED, ExchangeStatus.REJECTED, ExchangeStatus.COMPLETED, ExchangeStatus.CANCELLED],
    )
    def test_accept_requires_pending(self, status):
        exchange = _exchange_at_state(status)
        with pytest.raises(InvalidState):
            exchange.accept()
        assert exchange.status == status.value

    @pytest.mark.parametrize(
        "status",
        [ExchangeStatus.ACCEPTED, ExchangeStatus.REJECTED, ExchangeStatus.COMPLETED, ExchangeStatus.CANCELLED],
    )
    def test_reject_requires_pending(self, status):
        exchange = _exchange_at_state(status)
        with pytest.raises(InvalidState):
            exchange.reject()

    @pytest.mark.parametrize(
        "status",
        [ExchangeStatus.PENDING, ExchangeStatus.REJECTED, ExchangeStatus.COMPLETED, ExchangeStatus.CANCELLED],
    )
    def test_complete_requires_accepted(self, status):
        exchange = _exchange_at_state(status)
        exchange_date = exchange.exchange_date
        with pytest.raises(InvalidState):
            exchange.complete()
        assert exchange.exchange_date == exchange_date
        assert exchange.status == status.value

    @pytest.mark.parametrize(
        "status",
        [ExchangeStatus.REJECTED, ExchangeStatus.COMPLETED, ExchangeStatus.CANCELLED],
    )
    def test_terminal_states_cannot_be_cancelled(self, status):
        exchange = _exchange_at_state(status)
        with pytest.raises(InvalidState):
            exchange.cancel(cancelled_by="company-002")

    def test_invalid_state_names_current_status(self):
        exchange = _exchange_at_state(ExchangeStatus.COMPLETED)
        with pytest.raises(InvalidState) as exc:
            exchange.accept()
        assert exc.value.current == "completed"
        assert exc.value.message == "Cannot accept an exchange that is completed"

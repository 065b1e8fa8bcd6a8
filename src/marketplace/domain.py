"""Marketplace bounded context — waste exchanges and artisan orders.

Handles the lifecycle of textile-waste exchange requests between companies
and requesters, the fulfillment of artisan product orders, and the inventory
ledger that both of them write through. All aggregates live in one domain so
that a completion or an order placement commits inside a single unit of work.
"""

import structlog
from protean.domain import Domain

marketplace = Domain(name="marketplace")

logger = structlog.get_logger(__name__)

"""Order aggregate (CQRS) — a buyer's purchase of artisan products.

Line items snapshot the product's name, unit and price at the moment the
order is placed; later catalogue changes never alter a placed order. The
stored total is always the sum of its line items.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from marketplace.domain import marketplace
from marketplace.order.events import OrderPlaced

# Client totals within one cent of the computed sum are accepted
TOTAL_TOLERANCE = 0.01


class OrderStatus(Enum):
    PLACED = "placed"


@marketplace.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    artisan_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    unit = String(max_length=20)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)

    def line_total(self) -> float:
        return self.price * self.quantity


@marketplace.aggregate
class Order:
    buyer_id = Identifier(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PLACED.value)
    items = HasMany(OrderItem)
    total_amount = Float(required=True, min_value=0.0)
    pickup_address = Text()
    contact_number = String(max_length=50)
    notes = Text()
    created_at = DateTime()

    @invariant.post
    def total_must_match_items(self):
        if self.items and abs(self.total_amount - self.computed_total()) > TOTAL_TOLERANCE:
            raise ValidationError({"total_amount": ["Order total must equal the sum of its items"]})

    def computed_total(self) -> float:
        return round(sum(item.line_total() for item in self.items), 2)

    @classmethod
    def place(cls, buyer_id, lines, pickup_address=None, contact_number=None, notes=None):
        """Create an order from ``(product, quantity)`` pairs.

        Snapshots each product; stock is withdrawn separately by the ledger.
        """
        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

        items = [
            OrderItem(
                product_id=product.id,
                artisan_id=product.artisan_id,
                product_name=product.name,
                unit=product.unit,
                quantity=quantity,
                price=product.price,
            )
            for product, quantity in lines
        ]
        total = round(sum(item.line_total() for item in items), 2)

        now = datetime.now(UTC)
        order = cls(
            buyer_id=buyer_id,
            status=OrderStatus.PLACED.value,
            items=items,
            total_amount=total,
            pickup_address=pickup_address,
            contact_number=contact_number,
            notes=notes,
            created_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                buyer_id=str(buyer_id),
                product_ids=json.dumps([str(item.product_id) for item in items]),
                item_count=len(items),
                total_amount=total,
                placed_at=now,
            )
        )
        return order

    def has_items_from(self, artisan_id) -> bool:
        return any(str(item.artisan_id) == str(artisan_id) for item in self.items)

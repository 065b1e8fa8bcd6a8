"""Repository for the Order aggregate."""

from marketplace.domain import marketplace
from marketplace.order.order import Order


@marketplace.repository(part_of=Order)
class OrderRepository:
    def placed_by(self, buyer_id) -> list[Order]:
        return self._dao.query.filter(buyer_id=str(buyer_id)).order_by("-created_at").all().items

    def with_items_from(self, artisan_id) -> list[Order]:
        """Orders holding at least one of the artisan's products, newest first."""
        orders = self._dao.query.order_by("-created_at").all().items
        return [order for order in orders if order.has_items_from(artisan_id)]

"""Repository for the ShoppingCart aggregate."""

from marketplace.cart.cart import ShoppingCart
from marketplace.domain import marketplace


@marketplace.repository(part_of=ShoppingCart)
class ShoppingCartRepository:
    def for_buyer(self, buyer_id) -> ShoppingCart | None:
        # Carts share their buyer's id
        carts = self._dao.query.filter(id=str(buyer_id)).all().items
        return carts[0] if carts else None

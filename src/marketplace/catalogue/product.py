"""Product aggregate (CQRS) — an artisan's product with a stock counter.

``stock`` and ``sales_count`` move together and only through ``record_sale``,
which the inventory ledger calls while an order is placed.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from marketplace.catalogue.events import ProductCreated, ProductOutOfStock, ProductSold
from marketplace.domain import marketplace
from marketplace.errors import InsufficientStock


@marketplace.aggregate
class Product:
    artisan_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    description = Text()
    unit = String(max_length=20, default="piece")
    price = Float(required=True, min_value=0.0)
    stock = Integer(default=0, min_value=0)
    sales_count = Integer(default=0, min_value=0)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, artisan_id, name, price, stock=0, unit="piece", description=None):
        if price is None or price < 0:
            raise ValidationError({"price": ["Price cannot be negative"]})
        if stock is None or stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

        now = datetime.now(UTC)
        product = cls(
            artisan_id=artisan_id,
            name=name,
            description=description,
            unit=unit or "piece",
            price=price,
            stock=stock,
            sales_count=0,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                artisan_id=str(artisan_id),
                name=name,
                price=price,
                stock=stock,
                created_at=now,
            )
        )
        return product

    def has_stock_for(self, quantity) -> bool:
        return (self.stock or 0) >= quantity

    def record_sale(self, quantity, order_id=None):
        """Withdraw ``quantity`` units from stock and count them as sold."""
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})
        if not self.has_stock_for(quantity):
            raise InsufficientStock(
                product_id=str(self.id),
                product_name=self.name,
                available=self.stock or 0,
                requested=quantity,
            )

        previous = self.stock
        now = datetime.now(UTC)
        self.stock = previous - quantity
        self.sales_count = (self.sales_count or 0) + quantity
        self.updated_at = now

        self.raise_(
            ProductSold(
                product_id=str(self.id),
                order_id=str(order_id) if order_id else None,
                quantity=quantity,
                previous_stock=previous,
                new_stock=self.stock,
                sales_count=self.sales_count,
                sold_at=now,
            )
        )

        if self.stock == 0:
            self.raise_(ProductOutOfStock(product_id=str(self.id), out_of_stock_at=now))

"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Product")
class ProductCreated:
    """An artisan put a product made from textile waste on sale."""

    __version__ = 1

    product_id = Identifier(required=True)
    artisan_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    stock = Integer(required=True)
    created_at = DateTime(required=True)


@marketplace.event(part_of="Product")
class ProductSold:
    """Units of a product left stock with a placed order."""

    __version__ = 1

    product_id = Identifier(required=True)
    order_id = Identifier()
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    sales_count = Integer(required=True)
    sold_at = DateTime(required=True)


@marketplace.event(part_of="Product")
class ProductOutOfStock:
    """A product has no units left."""

    __version__ = 1

    product_id = Identifier(required=True)
    out_of_stock_at = DateTime(required=True)

"""Order placement — command, handler and retrying entry point.

The handler is the whole fulfillment step: it re-checks stock, creates the
order with snapshotted line items, records each sale in the inventory ledger
and clears the buyer's cart. It runs in one unit of work, so a failure at
any point leaves no order, no stock change and the cart untouched.

Product writes are compare-and-set on the version read in the handler. When
a concurrent order saved first, the whole command is run again; the fresh
stock check then either succeeds or reports the shortage.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.cart.cart import ShoppingCart
from marketplace.catalogue.product import Product
from marketplace.concurrency import process_with_retry
from marketplace.domain import marketplace
from marketplace.errors import InsufficientStock
from marketplace.inventory.ledger import InventoryLedger
from marketplace.order.order import TOTAL_TOLERANCE, Order

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Order")
class PlaceOrder:
    buyer_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {"product_id", "quantity"}
    total_amount = Float(required=True)
    pickup_address = Text()
    contact_number = String(max_length=50)
    notes = Text()


def parse_order_items(items) -> list[tuple[str, int]]:
    """Validate requested lines and merge repeats of the same product."""
    items = json.loads(items) if isinstance(items, str) else items
    if not items or not isinstance(items, list):
        raise ValidationError({"items": ["An order needs at least one item"]})

    merged: dict[str, int] = {}
    for item in items:
        product_id = item.get("product_id") if isinstance(item, dict) else None
        quantity = item.get("quantity") if isinstance(item, dict) else None
        if not product_id:
            raise ValidationError({"items": ["Each item needs a product_id"]})
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
            raise ValidationError({"items": [f"Quantity for product {product_id} must be a positive integer"]})
        merged[str(product_id)] = merged.get(str(product_id), 0) + quantity
    return list(merged.items())


@marketplace.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        requested = parse_order_items(command.items)
        if command.total_amount is None or command.total_amount <= 0:
            raise ValidationError({"total_amount": ["Total amount must be positive"]})

        products = current_domain.repository_for(Product)
        lines = []
        for product_id, quantity in requested:
            try:
                product = products.get(product_id)
            except ObjectNotFoundError:
                raise ValidationError({"items": [f"Product {product_id} not found"]}) from None
            if not product.has_stock_for(quantity):
                raise InsufficientStock(
                    product_id=str(product.id),
                    product_name=product.name,
                    available=product.stock,
                    requested=quantity,
                )
            lines.append((product, quantity))

        order = Order.place(
            buyer_id=command.buyer_id,
            lines=lines,
            pickup_address=command.pickup_address,
            contact_number=command.contact_number,
            notes=command.notes,
        )
        if abs(order.total_amount - command.total_amount) > TOTAL_TOLERANCE:
            raise ValidationError(
                {"total_amount": [f"Total amount {command.total_amount} does not match the items ({order.total_amount})"]}
            )

        ledger = InventoryLedger(products=products)
        for product, quantity in lines:
            ledger.record_product_sale(product.id, quantity, order_id=order.id)

        current_domain.repository_for(Order).add(order)

        carts = current_domain.repository_for(ShoppingCart)
        cart = carts.for_buyer(command.buyer_id)
        if cart is not None:
            cart.clear()
            carts.add(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            buyer_id=str(command.buyer_id),
            item_count=len(lines),
            total_amount=order.total_amount,
        )
        return order


def place_order(buyer_id, items, total_amount, pickup_address=None, contact_number=None, notes=None) -> Order:
    """Place an order, running it again when a concurrent order got there first."""
    return process_with_retry(
        lambda: PlaceOrder(
            buyer_id=buyer_id,
            items=json.dumps(items),
            total_amount=total_amount,
            pickup_address=pickup_address,
            contact_number=contact_number,
            notes=notes,
        )
    )

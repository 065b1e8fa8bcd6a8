"""Read side of orders — buyer history, single order and artisan sales."""

from protean.utils.globals import current_domain

from marketplace.errors import Forbidden
from marketplace.order.order import Order


def item_record(item) -> dict:
    return {
        "id": str(item.id),
        "product_id": str(item.product_id),
        "artisan_id": str(item.artisan_id),
        "product_name": item.product_name,
        "unit": item.unit,
        "quantity": item.quantity,
        "price": item.price,
    }


def order_record(order, items=None) -> dict:
    return {
        "id": str(order.id),
        "buyer_id": str(order.buyer_id),
        "status": order.status,
        "total_amount": order.total_amount,
        "pickup_address": order.pickup_address,
        "contact_number": order.contact_number,
        "notes": order.notes,
        "created_at": order.created_at,
        "items": [item_record(item) for item in (order.items if items is None else items)],
    }


def list_orders(buyer_id) -> list[dict]:
    return [order_record(order) for order in current_domain.repository_for(Order).placed_by(buyer_id)]


def get_order(order_id, actor_id, actor_is_admin=False) -> dict:
    order = current_domain.repository_for(Order).get(order_id)
    if not actor_is_admin and str(order.buyer_id) != str(actor_id):
        raise Forbidden("You can only view your own orders")
    return order_record(order)


def list_artisan_orders(artisan_id) -> list[dict]:
    """Orders with the artisan's products; other artisans' lines are left out."""
    records = []
    for order in current_domain.repository_for(Order).with_items_from(artisan_id):
        own_items = [item for item in order.items if str(item.artisan_id) == str(artisan_id)]
        record = order_record(order, items=own_items)
        record["artisan_total"] = round(sum(item.line_total() for item in own_items), 2)
        records.append(record)
    return records

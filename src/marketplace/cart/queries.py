"""Read side of carts — the buyer's cart with current product details."""

from protean.utils.globals import current_domain

from marketplace.cart.cart import ShoppingCart
from marketplace.catalogue.product import Product


def cart_record(buyer_id, cart) -> dict:
    products = current_domain.repository_for(Product)
    items = []
    total = 0.0
    for item in cart.items if cart else []:
        product = products.get(item.product_id)
        subtotal = product.price * item.quantity
        total += subtotal
        items.append(
            {
                "product_id": str(product.id),
                "name": product.name,
                "unit": product.unit,
                "price": product.price,
                "quantity": item.quantity,
                "available_stock": product.stock,
                "subtotal": round(subtotal, 2),
            }
        )
    return {
        "buyer_id": str(buyer_id),
        "items": items,
        "total": round(total, 2),
    }


def get_cart(buyer_id) -> dict:
    """The buyer's cart; a buyer who never added anything has an empty one."""
    cart = current_domain.repository_for(ShoppingCart).for_buyer(buyer_id)
    return cart_record(buyer_id, cart)

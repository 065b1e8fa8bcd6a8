"""Cart item management — commands and handler.

Each buyer has one cart, created on the first item added.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from marketplace.cart.cart import ShoppingCart
from marketplace.catalogue.product import Product
from marketplace.domain import marketplace
from marketplace.errors import InsufficientStock


@marketplace.command(part_of="ShoppingCart")
class AddToCart:
    buyer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@marketplace.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    buyer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@marketplace.command(part_of="ShoppingCart")
class RemoveFromCart:
    buyer_id = Identifier(required=True)
    product_id = Identifier(required=True)


@marketplace.command(part_of="ShoppingCart")
class ClearCart:
    buyer_id = Identifier(required=True)


def _assert_in_stock(product_id, quantity):
    product = current_domain.repository_for(Product).get(product_id)
    if not product.has_stock_for(quantity):
        raise InsufficientStock(
            product_id=str(product.id),
            product_name=product.name,
            available=product.stock,
            requested=quantity,
        )


def _existing_cart(repo, buyer_id):
    cart = repo.for_buyer(buyer_id)
    if cart is None:
        raise ObjectNotFoundError(f"No cart for buyer {buyer_id}")
    return cart


@marketplace.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_buyer(command.buyer_id) or ShoppingCart.create(buyer_id=command.buyer_id)

        _assert_in_stock(command.product_id, cart.quantity_of(command.product_id) + (command.quantity or 0))
        cart.add_item(product_id=command.product_id, quantity=command.quantity)
        repo.add(cart)
        return cart

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = _existing_cart(repo, command.buyer_id)

        _assert_in_stock(command.product_id, command.quantity or 0)
        cart.update_item_quantity(product_id=command.product_id, new_quantity=command.quantity)
        repo.add(cart)
        return cart

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = _existing_cart(repo, command.buyer_id)
        cart.remove_item(product_id=command.product_id)
        repo.add(cart)
        return cart

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_buyer(command.buyer_id)
        if cart is None:
            return None
        cart.clear()
        repo.add(cart)
        return cart

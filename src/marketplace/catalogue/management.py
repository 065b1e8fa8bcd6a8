"""Product registration: command and handler."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.catalogue.product import Product
from marketplace.domain import marketplace

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Product")
class CreateProduct:
    artisan_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    description = Text()
    unit = String(max_length=20, default="piece")
    price = Float(required=True)
    stock = Integer(default=0)


@marketplace.command_handler(part_of=Product)
class ProductCommandHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            artisan_id=command.artisan_id,
            name=command.name,
            price=command.price,
            stock=command.stock if command.stock is not None else 0,
            unit=command.unit,
            description=command.description,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product created", product_id=str(product.id), artisan_id=str(command.artisan_id))
        return product

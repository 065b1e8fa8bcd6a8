"""Read side of products."""

from protean.utils.globals import current_domain

from marketplace.catalogue.product import Product


def product_record(product) -> dict:
    return {
        "id": str(product.id),
        "artisan_id": str(product.artisan_id),
        "name": product.name,
        "description": product.description,
        "unit": product.unit,
        "price": product.price,
        "stock": product.stock,
        "sales_count": product.sales_count,
    }


def get_product(product_id) -> dict:
    return product_record(current_domain.repository_for(Product).get(product_id))

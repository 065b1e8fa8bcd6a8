"""Inventory ledger — the single writer of waste quantities and product stock.

Both operations load the aggregate, re-validate against the value held right
now and persist it through its repository. Persisting is a compare-and-set on
the aggregate version read here: a concurrent writer that saved first makes
the save fail with ``ExpectedVersionError`` instead of overwriting it.

Repositories default to the active domain's and can be passed in explicitly.
"""

import structlog
from protean.utils.globals import current_domain

from marketplace.catalogue.product import Product
from marketplace.listing.listing import WasteListing

logger = structlog.get_logger(__name__)


class InventoryLedger:
    def __init__(self, listings=None, products=None):
        self._listings = listings if listings is not None else current_domain.repository_for(WasteListing)
        self._products = products if products is not None else current_domain.repository_for(Product)

    def decrement_waste_quantity(self, listing_id, amount, exchange_id=None) -> WasteListing:
        """Release ``amount`` from a listing; the listing sells out at zero.

        Raises ``Conflict`` when more is asked for than remains.
        """
        listing = self._listings.get(listing_id)
        listing.release(amount, exchange_id=exchange_id)
        self._listings.add(listing)

        logger.info(
            "Waste quantity released",
            listing_id=str(listing_id),
            amount=amount,
            remaining=listing.quantity,
            status=listing.availability_status,
        )
        return listing

    def record_product_sale(self, product_id, amount, order_id=None) -> Product:
        """Decrement stock and increment the sales count together.

        Raises ``InsufficientStock`` when the product holds fewer units.
        """
        product = self._products.get(product_id)
        product.record_sale(amount, order_id=order_id)
        self._products.add(product)

        logger.info(
            "Product sale recorded",
            product_id=str(product_id),
            quantity=amount,
            stock=product.stock,
            sales_count=product.sales_count,
        )
        return product

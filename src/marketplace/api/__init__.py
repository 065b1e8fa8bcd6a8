"""Marketplace API package."""

from marketplace.api.errors import register_error_handlers
from marketplace.api.routes import (
    artisan_router,
    cart_router,
    exchange_router,
    listing_router,
    order_router,
    product_router,
)

ROUTERS = [
    listing_router,
    exchange_router,
    product_router,
    cart_router,
    order_router,
    artisan_router,
]

__all__ = [
    "ROUTERS",
    "artisan_router",
    "cart_router",
    "exchange_router",
    "listing_router",
    "order_router",
    "product_router",
    "register_error_handlers",
]

"""FastAPI routes for the marketplace — listings, exchanges, products,
carts, orders and artisan sales.
"""

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from marketplace.api.auth import Actor, current_actor
from marketplace.api.schemas import (
    AddToCartRequest,
    ArtisanOrderResponse,
    CartResponse,
    ChangeListingStatusRequest,
    CreateExchangeRequestBody,
    CreateListingRequest,
    CreateProductRequest,
    ExchangeDetailResponse,
    ExchangeResponse,
    ListingResponse,
    OrderResponse,
    PlaceOrderRequest,
    ProductResponse,
    TransitionExchangeBody,
    UpdateCartQuantityRequest,
)
from marketplace.carbon.estimator import DEFAULT_MODE, DEFAULT_WASTE_TYPE
from marketplace.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartQuantity
from marketplace.cart.queries import get_cart
from marketplace.catalogue.management import CreateProduct
from marketplace.catalogue.queries import get_product, product_record
from marketplace.exchange.queries import exchange_record, get_exchange_details, list_exchanges
from marketplace.exchange.request import CreateExchangeRequest
from marketplace.exchange.transition import transition_exchange
from marketplace.listing.listing import WasteListing
from marketplace.listing.management import ChangeListingStatus, CreateListing
from marketplace.listing.queries import list_owned_listings, listing_record
from marketplace.order.placement import place_order
from marketplace.order.queries import get_order, list_artisan_orders, list_orders, order_record

# ---------------------------------------------------------------------------
# Listing Router
# ---------------------------------------------------------------------------
listing_router = APIRouter(prefix="/listings", tags=["listings"])


@listing_router.post("", status_code=201, response_model=ListingResponse)
async def create_listing(body: CreateListingRequest, actor: Actor = Depends(current_actor)) -> dict:
    actor.require_role("company")
    command = CreateListing(
        owner_id=actor.id,
        title=body.title,
        waste_type=body.waste_type,
        material_type=body.material_type,
        quantity=body.quantity,
        unit=body.unit,
        price_per_unit=body.price_per_unit,
        location=body.location,
    )
    listing = current_domain.process(command, asynchronous=False)
    return listing_record(listing)


@listing_router.get("/mine", response_model=list[ListingResponse])
async def my_listings(actor: Actor = Depends(current_actor)) -> list[dict]:
    return list_owned_listings(actor.id)


@listing_router.put("/{listing_id}/status", response_model=ListingResponse)
async def change_listing_status(
    listing_id: str,
    body: ChangeListingStatusRequest,
    actor: Actor = Depends(current_actor),
) -> dict:
    command = ChangeListingStatus(listing_id=listing_id, actor_id=actor.id, status=body.status)
    listing = current_domain.process(command, asynchronous=False)
    return listing_record(listing)


# ---------------------------------------------------------------------------
# Exchange Router
# ---------------------------------------------------------------------------
exchange_router = APIRouter(prefix="/exchanges", tags=["exchanges"])


@exchange_router.post("", status_code=201, response_model=ExchangeResponse)
async def create_exchange(body: CreateExchangeRequestBody, actor: Actor = Depends(current_actor)) -> dict:
    command = CreateExchangeRequest(
        listing_id=body.listing_id,
        requester_id=actor.id,
        quantity=body.quantity,
        request_message=body.request_message,
        city=body.city,
    )
    exchange = current_domain.process(command, asynchronous=False)
    return exchange_record(exchange)


@exchange_router.get("", response_model=list[ExchangeResponse])
async def get_exchanges(
    list_type: str = Query(default="all", alias="type"),
    status: str = "all",
    actor: Actor = Depends(current_actor),
) -> list[dict]:
    return list_exchanges(actor.id, list_type=list_type, status=status)


@exchange_router.get("/{exchange_id}", response_model=ExchangeDetailResponse)
def get_exchange(
    exchange_id: str,
    waste_type: str = DEFAULT_WASTE_TYPE,
    mode: str = DEFAULT_MODE,
    actor: Actor = Depends(current_actor),
) -> dict:
    """Plain ``def``: carbon lookups block on HTTP, so FastAPI runs this in its threadpool."""
    return get_exchange_details(
        exchange_id,
        actor.id,
        actor_is_admin=actor.is_admin,
        waste_type=waste_type,
        mode=mode,
    )


@exchange_router.post("/{exchange_id}", response_model=ExchangeResponse)
async def update_exchange(
    exchange_id: str,
    body: TransitionExchangeBody,
    actor: Actor = Depends(current_actor),
) -> dict:
    exchange = transition_exchange(
        exchange_id,
        actor.id,
        body.action,
        actor_is_admin=actor.is_admin,
        price=body.price,
        response_message=body.response_message,
    )
    listing = current_domain.repository_for(WasteListing).get(exchange.listing_id)
    return exchange_record(exchange, listing)


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.post("", status_code=201, response_model=ProductResponse)
async def create_product(body: CreateProductRequest, actor: Actor = Depends(current_actor)) -> dict:
    actor.require_role("artisan")
    command = CreateProduct(
        artisan_id=actor.id,
        name=body.name,
        description=body.description,
        unit=body.unit,
        price=body.price,
        stock=body.stock,
    )
    product = current_domain.process(command, asynchronous=False)
    return product_record(product)


@product_router.get("/{product_id}", response_model=ProductResponse)
async def read_product(product_id: str) -> dict:
    return get_product(product_id)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def read_cart(actor: Actor = Depends(current_actor)) -> dict:
    return get_cart(actor.id)


@cart_router.post("/items", response_model=CartResponse)
async def add_cart_item(body: AddToCartRequest, actor: Actor = Depends(current_actor)) -> dict:
    command = AddToCart(buyer_id=actor.id, product_id=body.product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return get_cart(actor.id)


@cart_router.put("/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    product_id: str,
    body: UpdateCartQuantityRequest,
    actor: Actor = Depends(current_actor),
) -> dict:
    command = UpdateCartQuantity(buyer_id=actor.id, product_id=product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return get_cart(actor.id)


@cart_router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_cart_item(product_id: str, actor: Actor = Depends(current_actor)) -> dict:
    command = RemoveFromCart(buyer_id=actor.id, product_id=product_id)
    current_domain.process(command, asynchronous=False)
    return get_cart(actor.id)


@cart_router.delete("", response_model=CartResponse)
async def clear_cart(actor: Actor = Depends(current_actor)) -> dict:
    current_domain.process(ClearCart(buyer_id=actor.id), asynchronous=False)
    return get_cart(actor.id)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", response_model=OrderResponse)
async def create_order(body: PlaceOrderRequest, actor: Actor = Depends(current_actor)) -> dict:
    order = place_order(
        buyer_id=actor.id,
        items=[item.model_dump() for item in body.items],
        total_amount=body.total_amount,
        pickup_address=body.pickup_address,
        contact_number=body.contact_number,
        notes=body.notes,
    )
    return order_record(order)


@order_router.get("", response_model=list[OrderResponse])
async def my_orders(actor: Actor = Depends(current_actor)) -> list[dict]:
    return list_orders(actor.id)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def read_order(order_id: str, actor: Actor = Depends(current_actor)) -> dict:
    return get_order(order_id, actor.id, actor_is_admin=actor.is_admin)


# ---------------------------------------------------------------------------
# Artisan Router
# ---------------------------------------------------------------------------
artisan_router = APIRouter(prefix="/artisan", tags=["artisan"])


@artisan_router.get("/orders", response_model=list[ArtisanOrderResponse])
async def artisan_orders(actor: Actor = Depends(current_actor)) -> list[dict]:
    actor.require_role("artisan")
    return list_artisan_orders(actor.id)

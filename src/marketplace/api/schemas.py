"""Pydantic request/response schemas for the marketplace API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands. Field rules that belong to the domain (positive
quantities, stock, totals) are left to the domain so clients get the same
messages whichever way they reach it.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Listings and products
# ---------------------------------------------------------------------------
class CreateListingRequest(BaseModel):
    title: str
    waste_type: str | None = None
    material_type: str | None = None
    quantity: float
    unit: str = "kg"
    price_per_unit: float | None = None
    location: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Cotton offcuts",
                    "waste_type": "organic",
                    "material_type": "cotton",
                    "quantity": 120.0,
                    "unit": "kg",
                    "location": "New York, USA",
                }
            ]
        }
    }


class ChangeListingStatusRequest(BaseModel):
    status: str


class CreateProductRequest(BaseModel):
    name: str
    description: str | None = None
    unit: str = "piece"
    price: float
    stock: int = 0


# ---------------------------------------------------------------------------
# Exchanges
# ---------------------------------------------------------------------------
class CreateExchangeRequestBody(BaseModel):
    listing_id: str = Field(min_length=1)
    quantity: float
    request_message: str | None = None
    city: str | None = None


class TransitionExchangeBody(BaseModel):
    action: str
    price: float | None = None
    response_message: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"action": "accept", "price": 250.0, "response_message": "Ready for pickup on Monday"},
            ]
        }
    }


# ---------------------------------------------------------------------------
# Cart and orders
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = 1


class UpdateCartQuantityRequest(BaseModel):
    quantity: int


class OrderLineSchema(BaseModel):
    product_id: str | None = None
    quantity: int | None = None


class PlaceOrderRequest(BaseModel):
    items: list[OrderLineSchema]
    total_amount: float
    pickup_address: str | None = None
    contact_number: str | None = None
    notes: str | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ListingResponse(BaseModel):
    id: str
    owner_id: str
    title: str
    waste_type: str | None = None
    material_type: str | None = None
    quantity: float
    unit: str | None = None
    availability_status: str
    price_per_unit: float | None = None
    location: str | None = None
    created_at: datetime | None = None


class ProductResponse(BaseModel):
    id: str
    artisan_id: str
    name: str
    description: str | None = None
    unit: str | None = None
    price: float
    stock: int
    sales_count: int


class ExchangeResponse(BaseModel):
    id: str
    listing_id: str
    requester_id: str
    quantity: float
    status: str
    price: float | None = None
    request_message: str | None = None
    response_message: str | None = None
    city: str | None = None
    exchange_date: datetime | None = None
    cancelled_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    listing: ListingResponse | None = None


class ExchangeDetailResponse(ExchangeResponse):
    carbon_savings: float | None = None
    carbon_details: dict | None = None


class CartLineResponse(BaseModel):
    product_id: str
    name: str
    unit: str | None = None
    price: float
    quantity: int
    available_stock: int
    subtotal: float


class CartResponse(BaseModel):
    buyer_id: str
    items: list[CartLineResponse]
    total: float


class OrderItemResponse(BaseModel):
    id: str
    product_id: str
    artisan_id: str
    product_name: str
    unit: str | None = None
    quantity: int
    price: float


class OrderResponse(BaseModel):
    id: str
    buyer_id: str
    status: str
    total_amount: float
    pickup_address: str | None = None
    contact_number: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    items: list[OrderItemResponse]


class ArtisanOrderResponse(OrderResponse):
    artisan_total: float

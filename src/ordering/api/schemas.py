"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands. Field checks that carry business meaning (blank
delivery details, quantities, unknown products) are left to the domain so
they surface as domain errors.
"""

from datetime import datetime

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class CustomerInfoSchema(BaseModel):
    name: str
    email: str
    phone: str
    address: str
    payment_method: str = "cod"


class OrderLineRequest(BaseModel):
    product_id: str
    quantity: int = 1


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    customer_info: CustomerInfoSchema
    items: list[OrderLineRequest]
    notes: str | None = None

    # Client-side totals are accepted for compatibility and ignored
    subtotal: int | None = None
    delivery_fee: int | None = None
    service_charge: int | None = None
    total: int | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "customer_info": {
                        "name": "Asha Rai",
                        "email": "asha@example.com",
                        "phone": "9800000000",
                        "address": "Lakeside, Pokhara",
                        "payment_method": "cod",
                    },
                    "items": [{"product_id": "momo-01", "quantity": 2}],
                }
            ]
        }
    }


class UpdateStatusRequest(BaseModel):
    status: str


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class LineItemResponse(BaseModel):
    product_id: str
    name: str
    unit_price: int
    quantity: int
    image: str | None = None


class OrderResponse(BaseModel):
    order_id: str
    customer_id: str
    customer_info: CustomerInfoSchema
    items: list[LineItemResponse]
    notes: str | None = None
    subtotal: int
    delivery_fee: int
    service_charge: int
    total: int
    status: str
    is_accepted: bool
    accepted_at: datetime | None = None
    accepted_by: str | None = None
    estimated_delivery: datetime | None = None
    actual_delivery: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
    total: int
    total_pages: int
    current_page: int

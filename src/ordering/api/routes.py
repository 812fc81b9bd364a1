"""FastAPI routes for the Ordering domain: order placement and operator actions.

Customer routes act on the caller's own orders; `/orders/admin` routes need
an operator identity.
"""

import json

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    CustomerInfoSchema,
    LineItemResponse,
    OrderListResponse,
    OrderResponse,
    PlaceOrderRequest,
    UpdateStatusRequest,
)
from ordering.order.acceptance import AcceptOrder
from ordering.order.order import Order
from ordering.order.placement import PlaceOrder
from ordering.order.repository import OrderPage
from ordering.order.status import UpdateOrderStatus
from shared.auth.dependencies import current_identity, current_operator
from shared.auth.port import Identity

order_router = APIRouter(prefix="/orders", tags=["orders"])


def _order_response(order: Order) -> OrderResponse:
    info = order.customer_info
    return OrderResponse(
        order_id=str(order.order_id),
        customer_id=str(order.customer_id),
        customer_info=CustomerInfoSchema(
            name=info.name,
            email=info.email,
            phone=info.phone,
            address=info.address,
            payment_method=info.payment_method,
        ),
        items=[
            LineItemResponse(
                product_id=str(item.product_id),
                name=item.name,
                unit_price=item.unit_price,
                quantity=item.quantity,
                image=item.image,
            )
            for item in order.items
        ],
        notes=order.notes,
        subtotal=order.subtotal,
        delivery_fee=order.delivery_fee,
        service_charge=order.service_charge,
        total=order.total,
        status=order.status,
        is_accepted=order.is_accepted,
        accepted_at=order.accepted_at,
        accepted_by=str(order.accepted_by) if order.accepted_by else None,
        estimated_delivery=order.estimated_delivery,
        actual_delivery=order.actual_delivery,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def _list_response(page: OrderPage) -> OrderListResponse:
    return OrderListResponse(
        orders=[_order_response(order) for order in page.orders],
        total=page.total,
        total_pages=page.total_pages,
        current_page=page.current_page,
    )


# ---------------------------------------------------------------------------
# Customer routes
# ---------------------------------------------------------------------------
@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: PlaceOrderRequest, identity: Identity = Depends(current_identity)) -> OrderResponse:
    """Place an order for the authenticated customer."""
    command = PlaceOrder(
        customer_id=identity.id,
        name=body.customer_info.name,
        email=body.customer_info.email,
        phone=body.customer_info.phone,
        address=body.customer_info.address,
        payment_method=body.customer_info.payment_method,
        items=json.dumps([item.model_dump() for item in body.items]),
        notes=body.notes,
        subtotal=body.subtotal,
        delivery_fee=body.delivery_fee,
        service_charge=body.service_charge,
        total=body.total,
    )
    order_id = current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).get_order(order_id)
    return _order_response(order)


@order_router.get("/mine", response_model=OrderListResponse)
async def list_my_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    identity: Identity = Depends(current_identity),
) -> OrderListResponse:
    """The caller's orders, newest first."""
    repo = current_domain.repository_for(Order)
    return _list_response(repo.page_for_customer(identity.id, page=page, limit=limit))


@order_router.get("/admin/all", response_model=OrderListResponse)
async def list_all_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: str | None = None,
    is_accepted: bool | None = None,
    _operator: Identity = Depends(current_operator),
) -> OrderListResponse:
    """All orders, optionally filtered by status and acceptance."""
    repo = current_domain.repository_for(Order)
    return _list_response(repo.page_for_operator(status=status, is_accepted=is_accepted, page=page, limit=limit))


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_my_order(order_id: str, identity: Identity = Depends(current_identity)) -> OrderResponse:
    repo = current_domain.repository_for(Order)
    return _order_response(repo.get_for_customer(order_id, identity.id))


# ---------------------------------------------------------------------------
# Operator routes
# ---------------------------------------------------------------------------
@order_router.put("/admin/{order_id}/accept", response_model=OrderResponse)
async def accept_order(order_id: str, operator: Identity = Depends(current_operator)) -> OrderResponse:
    """Accept an order; fails if it was already accepted."""
    current_domain.process(AcceptOrder(order_id=order_id, operator_id=operator.id), asynchronous=False)
    return _order_response(current_domain.repository_for(Order).get_order(order_id))


@order_router.put("/admin/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    body: UpdateStatusRequest,
    operator: Identity = Depends(current_operator),
) -> OrderResponse:
    command = UpdateOrderStatus(order_id=order_id, status=body.status, operator_id=operator.id)
    current_domain.process(command, asynchronous=False)
    return _order_response(current_domain.repository_for(Order).get_order(order_id))

"""Order aggregate (CQRS): the core of the Order Ledger.

An Order is created from a customer's cart with every line item and the
delivery details captured as snapshots, so later catalogue or profile edits
never change a placed order. After placement only operators mutate it.

Acceptance and status are independent fields:
    is_accepted: False → True, exactly once (AcceptOrder)
    status: any of the six values may follow any other (UpdateOrderStatus)

Acceptance always moves the status to CONFIRMED.
"""

import os
from datetime import UTC, datetime, timedelta
from enum import Enum
from uuid import uuid4

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from ordering.domain import ordering
from ordering.order.events import OrderAccepted, OrderPlaced, OrderStatusUpdated
from ordering.order.pricing import OrderPricing
from shared.errors import AlreadyAccepted, InvalidStatus


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    ON_THE_WAY = "on_the_way"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]


class PaymentMethod(Enum):
    COD = "cod"
    ONLINE = "online"


def parse_status(value) -> OrderStatus:
    """Return the OrderStatus for `value` or raise InvalidStatus."""
    try:
        return OrderStatus(value)
    except ValueError:
        raise InvalidStatus(
            {"status": [f"Invalid status '{value}'. Expected one of: {', '.join(OrderStatus.values())}"]}
        ) from None


def new_order_id() -> str:
    """A collision-resistant, human-readable order identifier."""
    return f"ORD-{datetime.now(UTC):%Y%m%d%H%M%S}-{uuid4().hex[:10].upper()}"


def delivery_lead_time() -> timedelta:
    return timedelta(minutes=int(os.environ.get("ORDER_LEAD_TIME_MINUTES", "30")))


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class CustomerInfo:
    """Delivery details captured when the order is placed.

    Once recorded on an Order the snapshot is immutable: it is where and to
    whom the order was delivered, regardless of later profile changes.
    """

    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    phone = String(required=True, max_length=30)
    address = Text(required=True)
    payment_method = String(choices=PaymentMethod, default=PaymentMethod.COD.value)

    @invariant.post
    def fields_must_not_be_blank(self):
        blank = [
            field_name
            for field_name in ("name", "email", "phone", "address")
            if getattr(self, field_name) is not None and not str(getattr(self, field_name)).strip()
        ]
        if blank:
            raise ValidationError({field_name: ["is required"] for field_name in blank})


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class LineItem:
    """One ordered product, priced from the catalogue at submission time."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    unit_price = Integer(required=True, min_value=0)
    quantity = Integer(required=True, min_value=1)
    image = String(max_length=500)

    @property
    def line_total(self) -> int:
        return self.unit_price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    order_id = Identifier(identifier=True)
    customer_id = Identifier(required=True)
    customer_info = ValueObject(CustomerInfo, required=True)
    items = HasMany(LineItem)
    notes = Text()

    # Pricing, smallest currency unit
    subtotal = Integer(required=True, min_value=0)
    delivery_fee = Integer(required=True, min_value=0)
    service_charge = Integer(required=True, min_value=0)
    total = Integer(required=True, min_value=0)

    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)

    # Acceptance
    is_accepted = Boolean(default=False)
    accepted_at = DateTime()
    accepted_by = Identifier()

    # Delivery
    estimated_delivery = DateTime()
    actual_delivery = DateTime()

    # Timestamps
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def total_must_equal_sum_of_charges(self):
        if None in (self.subtotal, self.delivery_fee, self.service_charge, self.total):
            return
        if self.total != self.subtotal + self.delivery_fee + self.service_charge:
            raise ValidationError({"total": ["Total must equal subtotal + delivery fee + service charge"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, customer_id, customer_info, lines, pricing: OrderPricing, notes=None):
        """Place a new order.

        Args:
            customer_id: The customer placing the order.
            customer_info: Dict with name, email, phone, address, payment_method.
            lines: List of (CatalogueEntry, quantity) pairs, in cart order.
            pricing: Charges computed from `lines` by the fee policy.
        """
        if not lines:
            raise ValidationError({"items": ["Order must contain at least one item"]})

        now = datetime.now(UTC)

        order = cls(
            order_id=new_order_id(),
            customer_id=customer_id,
            customer_info=CustomerInfo(
                name=customer_info.get("name"),
                email=customer_info.get("email"),
                phone=customer_info.get("phone"),
                address=customer_info.get("address"),
                payment_method=customer_info.get("payment_method") or PaymentMethod.COD.value,
            ),
            notes=notes,
            subtotal=pricing.subtotal,
            delivery_fee=pricing.delivery_fee,
            service_charge=pricing.service_charge,
            total=pricing.total,
            status=OrderStatus.PENDING.value,
            is_accepted=False,
            estimated_delivery=now + delivery_lead_time(),
            created_at=now,
            updated_at=now,
        )

        for entry, quantity in lines:
            order.add_items(
                LineItem(
                    product_id=entry.product_id,
                    name=entry.name,
                    unit_price=entry.price,
                    quantity=quantity,
                    image=entry.image,
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=order.order_id,
                customer_id=str(customer_id),
                item_count=len(lines),
                subtotal=pricing.subtotal,
                delivery_fee=pricing.delivery_fee,
                service_charge=pricing.service_charge,
                total=pricing.total,
                payment_method=order.customer_info.payment_method,
                placed_at=now,
            )
        )

        return order

    # -------------------------------------------------------------------
    # Operator actions
    # -------------------------------------------------------------------
    def accept(self, operator_id):
        """Accept the order for fulfillment. Allowed exactly once."""
        if self.is_accepted:
            raise AlreadyAccepted({"order_id": [f"Order {self.order_id} has already been accepted"]})

        now = datetime.now(UTC)
        previous_status = self.status

        self.is_accepted = True
        self.accepted_at = now
        self.accepted_by = operator_id
        self.status = OrderStatus.CONFIRMED.value
        self.updated_at = now

        self.raise_(
            OrderAccepted(
                order_id=self.order_id,
                accepted_by=str(operator_id),
                previous_status=previous_status,
                accepted_at=now,
            )
        )

    def update_status(self, status, operator_id=None):
        """Move the order to `status`.

        Any status may follow any other. Delivering stamps the delivery time,
        overwriting it on repeated deliveries.
        """
        target = parse_status(status)
        now = datetime.now(UTC)
        previous_status = self.status

        self.status = target.value
        if target == OrderStatus.DELIVERED:
            self.actual_delivery = now
        self.updated_at = now

        self.raise_(
            OrderStatusUpdated(
                order_id=self.order_id,
                previous_status=previous_status,
                new_status=target.value,
                updated_by=str(operator_id) if operator_id else None,
                updated_at=now,
            )
        )

    def belongs_to(self, customer_id) -> bool:
        return str(self.customer_id) == str(customer_id)

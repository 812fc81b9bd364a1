"""Domain events for the Order aggregate.

All events are versioned, immutable facts representing state changes.
They are persisted to the event store with the aggregate and give the
Order Query side an audit trail of placement, acceptance and status moves.
"""

from protean.fields import DateTime, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A customer placed an order from their cart."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    item_count = Integer(required=True)
    subtotal = Integer(required=True)
    delivery_fee = Integer(required=True)
    service_charge = Integer(required=True)
    total = Integer(required=True)
    payment_method = String(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderAccepted:
    """An operator accepted the order for fulfillment."""

    __version__ = 1

    order_id = Identifier(required=True)
    accepted_by = Identifier(required=True)
    previous_status = String(required=True)
    accepted_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusUpdated:
    """An operator moved the order to a new status."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    updated_by = Identifier()
    updated_at = DateTime(required=True)

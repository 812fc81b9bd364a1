"""PlaceOrder: turn a customer's cart into a persisted order.

Every product is resolved against the catalogue when the order is placed;
line items keep the name, price and image seen at that moment. Charges are
recomputed here, never taken from the client.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order
from ordering.order.pricing import price_lines
from shared.catalogue import get_catalogue
from shared.errors import InvalidReference

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    phone = String(required=True, max_length=30)
    address = Text(required=True)
    payment_method = String(max_length=20)
    items = Text(required=True)  # JSON: [{product_id, quantity}]
    notes = Text()

    # Client-echoed charges; advisory only
    subtotal = Integer()
    delivery_fee = Integer()
    service_charge = Integer()
    total = Integer()


def _parse_items(raw) -> list[dict]:
    try:
        items = json.loads(raw) if isinstance(raw, str) else raw
    except json.JSONDecodeError:
        raise ValidationError({"items": ["Items must be a JSON list of products and quantities"]}) from None
    if not isinstance(items, list) or not items:
        raise ValidationError({"items": ["Order must contain at least one item"]})

    parsed = []
    for position, item in enumerate(items):
        product_id = item.get("product_id") if isinstance(item, dict) else None
        quantity = item.get("quantity") if isinstance(item, dict) else None
        if not product_id:
            raise ValidationError({"items": [f"Item {position + 1} is missing a product id"]})
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationError({"items": [f"Quantity for product {product_id} must be a whole number of at least 1"]})
        parsed.append({"product_id": str(product_id), "quantity": quantity})
    return parsed


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        requested = _parse_items(command.items)

        catalogue = get_catalogue()
        lines = []
        for item in requested:
            entry = catalogue.resolve(item["product_id"])
            if entry is None or not entry.is_active:
                raise InvalidReference({"items": [f"Product {item['product_id']} not found"]})
            lines.append((entry, item["quantity"]))

        pricing = price_lines(lines)

        mismatched = pricing.differs_from(
            {
                "subtotal": command.subtotal,
                "delivery_fee": command.delivery_fee,
                "service_charge": command.service_charge,
                "total": command.total,
            }
        )
        if mismatched:
            logger.warning(
                "Ignoring client-supplied charges",
                customer_id=str(command.customer_id),
                fields=mismatched,
            )

        order = Order.place(
            customer_id=command.customer_id,
            customer_info={
                "name": command.name,
                "email": command.email,
                "phone": command.phone,
                "address": command.address,
                "payment_method": command.payment_method,
            },
            lines=lines,
            pricing=pricing,
            notes=command.notes,
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=order.order_id,
            customer_id=str(command.customer_id),
            total=order.total,
        )
        return order.order_id

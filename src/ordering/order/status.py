"""UpdateOrderStatus: an operator moves an order through delivery states.

No transition table is enforced: any of the six statuses may be set from
any other so operators can correct mistakes.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order, parse_status

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = Text()  # Checked against OrderStatus by the handler
    operator_id = Identifier()


@ordering.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        target = parse_status(command.status)

        repo = current_domain.repository_for(Order)
        order = repo.get_order(command.order_id)

        previous_status = order.status
        order.update_status(target.value, operator_id=command.operator_id)
        repo.add(order)

        logger.info(
            "Order status updated",
            order_id=order.order_id,
            previous_status=previous_status,
            new_status=target.value,
        )

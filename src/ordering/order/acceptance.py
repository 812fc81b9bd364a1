"""AcceptOrder: an operator commits an order to fulfillment.

Acceptance happens once. A repeated call fails with AlreadyAccepted and
leaves the first acceptance untouched. Two racing calls that both load the
order before either saves are separated by the aggregate's version check:
the second save is stale and is rejected by the repository.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class AcceptOrder:
    order_id = Identifier(required=True)
    operator_id = Identifier(required=True)


@ordering.command_handler(part_of=Order)
class AcceptOrderHandler:
    @handle(AcceptOrder)
    def accept_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_order(command.order_id)

        order.accept(command.operator_id)
        repo.add(order)

        logger.info(
            "Order accepted",
            order_id=order.order_id,
            operator_id=str(command.operator_id),
        )

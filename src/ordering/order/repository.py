"""Repository for the Order aggregate.

Adds the read-side queries the ledger exposes: a customer's own orders and
the operator's filtered view, both newest first and paginated.
"""

import math
from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError

from ordering.domain import ordering
from ordering.order.order import Order, parse_status
from shared.errors import NotFound


@dataclass(frozen=True)
class OrderPage:
    orders: list
    total: int
    current_page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


@ordering.repository(part_of=Order)
class OrderRepository:
    def get_order(self, order_id) -> Order:
        """Load an order or raise NotFound."""
        try:
            return self.get(order_id)
        except ObjectNotFoundError:
            raise NotFound({"order_id": [f"Order {order_id} not found"]}) from None

    def get_for_customer(self, order_id, customer_id) -> Order:
        """Load a customer's own order; other customers' orders are not found."""
        order = self.get_order(order_id)
        if not order.belongs_to(customer_id):
            raise NotFound({"order_id": [f"Order {order_id} not found"]})
        return order

    def page_for_customer(self, customer_id, page: int = 1, limit: int = 10) -> OrderPage:
        return self._page({"customer_id": str(customer_id)}, page, limit)

    def page_for_operator(self, status=None, is_accepted=None, page: int = 1, limit: int = 20) -> OrderPage:
        criteria = {}
        if status:
            criteria["status"] = parse_status(status).value
        if is_accepted is not None:
            criteria["is_accepted"] = is_accepted
        return self._page(criteria, page, limit)

    def _page(self, criteria: dict, page: int, limit: int) -> OrderPage:
        page = max(page, 1)
        limit = max(limit, 1)

        query = self._dao.query
        if criteria:
            query = query.filter(**criteria)

        results = query.order_by("-created_at").offset((page - 1) * limit).limit(limit).all()
        return OrderPage(orders=list(results.items), total=results.total, current_page=page, limit=limit)

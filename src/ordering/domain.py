"""Ordering bounded context: the Order Ledger.

Turns a submitted cart into a persisted order with catalogue snapshots and
server-side pricing, and owns the operator acceptance and delivery status
lifecycle.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)

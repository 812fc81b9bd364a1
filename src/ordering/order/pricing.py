"""Server-side order pricing.

Charges are computed only from catalogue prices and the fee policy; any
totals echoed by the client are advisory. All amounts are integers in the
smallest currency unit.
"""

import os
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal


@dataclass(frozen=True)
class FeePolicy:
    delivery_fee: int = 50
    service_charge_percent: int = 10

    @classmethod
    def from_env(cls) -> "FeePolicy":
        return cls(
            delivery_fee=int(os.environ.get("ORDER_DELIVERY_FEE", "50")),
            service_charge_percent=int(os.environ.get("ORDER_SERVICE_CHARGE_PERCENT", "10")),
        )

    def service_charge_for(self, subtotal: int) -> int:
        charge = Decimal(subtotal) * Decimal(self.service_charge_percent) / Decimal(100)
        return int(charge.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class OrderPricing:
    subtotal: int
    delivery_fee: int
    service_charge: int
    total: int

    def differs_from(self, claimed: dict) -> list[str]:
        """Names of client-claimed charges that disagree with these."""
        return [
            name
            for name, value in claimed.items()
            if value is not None and getattr(self, name, None) is not None and value != getattr(self, name)
        ]


def price_lines(lines, policy: FeePolicy | None = None) -> OrderPricing:
    """Price `(CatalogueEntry, quantity)` pairs under `policy`."""
    policy = policy or FeePolicy.from_env()

    subtotal = sum(entry.price * quantity for entry, quantity in lines)
    service_charge = policy.service_charge_for(subtotal)

    return OrderPricing(
        subtotal=subtotal,
        delivery_fee=policy.delivery_fee,
        service_charge=service_charge,
        total=subtotal + policy.delivery_fee + service_charge,
    )

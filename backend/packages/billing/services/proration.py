"""
Prorated pricing for mid-cycle plan changes.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from common.core.config import settings

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class ProrationQuote:
    price_difference: int
    elapsed_days: int
    remaining_days: int
    prorated_price: int


class ProrationCalculator:
    """
    Price owed when a subscription moves to another plan before its cycle ends.

    Every cycle is treated as cycle_days long regardless of MONTHLY/YEARLY.
    remaining_days is clamped to [0, cycle_days] so an overrun cycle owes
    nothing and a future-dated activation never owes more than a full cycle.
    The result is rounded half-up to whole minor currency units and is
    negative when moving to a cheaper plan (a credit).
    """

    def __init__(self, cycle_days: Optional[int] = None):
        self.cycle_days = (
            settings.billing_proration_cycle_days if cycle_days is None else cycle_days
        )
        if self.cycle_days <= 0:
            raise ValueError("cycle_days must be positive")

    def elapsed_days(self, activated_at: datetime, now: datetime) -> int:
        """Whole days since activation, floored."""
        return (now - activated_at) // ONE_DAY

    def remaining_days(self, activated_at: datetime, now: datetime) -> int:
        remaining = self.cycle_days - self.elapsed_days(activated_at, now)
        return max(0, min(self.cycle_days, remaining))

    def quote(
        self,
        current_price: int,
        target_price: int,
        activated_at: datetime,
        now: datetime,
    ) -> ProrationQuote:
        price_difference = target_price - current_price
        elapsed = self.elapsed_days(activated_at, now)
        remaining = self.remaining_days(activated_at, now)

        prorated = Decimal(price_difference * remaining) / Decimal(self.cycle_days)
        prorated_price = int(prorated.quantize(Decimal(1), rounding=ROUND_HALF_UP))

        return ProrationQuote(
            price_difference=price_difference,
            elapsed_days=elapsed,
            remaining_days=remaining,
            prorated_price=prorated_price,
        )

    def prorated_price(
        self,
        current_price: int,
        target_price: int,
        activated_at: datetime,
        now: datetime,
    ) -> int:
        return self.quote(current_price, target_price, activated_at, now).prorated_price

"""
Loyalty accrual rules.

A rule turns a completed order's total into points. The active rule is picked
from CAFE_POS["LOYALTY_RULE"] and built once by core_backend.config.
"""
from payments.money import Money


class AccrualRule:
    """Base class for loyalty accrual rules."""

    def __init__(self, **options):
        self.options = options

    def points_for(self, total: Money) -> int:
        raise NotImplementedError


class ProportionalAccrualRule(AccrualRule):
    """
    One point for every `rupees_per_point` of order total, rounded down.

    With the default of 10, a ₹270 order earns 27 points and ₹9.99 earns none.
    """

    def __init__(self, rupees_per_point=10, **options):
        super().__init__(**options)
        if Money.from_decimal(rupees_per_point).minor <= 0:
            raise ValueError("rupees_per_point must be at least one minor unit")
        self.rupees_per_point = rupees_per_point

    def points_for(self, total: Money) -> int:
        if total.is_negative() or total.is_zero():
            return 0
        step = Money.from_decimal(self.rupees_per_point, total.currency)
        return total.minor // step.minor


class NoAccrualRule(AccrualRule):
    """Counts visits but never awards points."""

    def points_for(self, total: Money) -> int:
        return 0

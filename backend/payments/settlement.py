"""
Payment details for order settlement.

An order is settled once, by cash, UPI, or a cash/UPI split. What gets stored
is always the exact record: cash_amount + upi_amount == total, checked with
Money equality. Cash handed over beyond the bill is change, never part of the
record; from_tender() does that normalization for the till.
"""

from dataclasses import dataclass
from typing import Optional

from django.db import models
from django.utils.translation import gettext_lazy as _

from .exceptions import PaymentMismatch
from .money import Money


class PaymentMethod(models.TextChoices):
    CASH = "cash", _("Cash")
    UPI = "upi", _("UPI")
    SPLIT = "split", _("Split (Cash + UPI)")


@dataclass(frozen=True)
class PaymentDetails:
    """The settlement recorded on a completed order."""

    method: str
    total: Money
    cash_amount: Optional[Money] = None
    upi_amount: Optional[Money] = None

    def __post_init__(self):
        if self.method not in PaymentMethod.values:
            raise ValueError(f"'{self.method}' is not a valid payment method.")
        zero = Money.zero(self.total.currency)
        if self.cash_amount is None:
            object.__setattr__(self, "cash_amount", zero)
        if self.upi_amount is None:
            object.__setattr__(self, "upi_amount", zero)

    @property
    def paid(self) -> Money:
        return self.cash_amount + self.upi_amount

    @property
    def cash_portion(self) -> Money:
        """The part of this payment that ended up in the cash drawer."""
        if self.method == PaymentMethod.CASH:
            return self.total
        if self.method == PaymentMethod.SPLIT:
            return self.cash_amount
        return Money.zero(self.total.currency)

    @classmethod
    def cash(cls, total: Money) -> "PaymentDetails":
        return cls(PaymentMethod.CASH, total, cash_amount=total)

    @classmethod
    def upi(cls, total: Money) -> "PaymentDetails":
        return cls(PaymentMethod.UPI, total, upi_amount=total)

    @classmethod
    def split(cls, total: Money, cash_amount: Money, upi_amount: Money) -> "PaymentDetails":
        return cls(PaymentMethod.SPLIT, total, cash_amount=cash_amount, upi_amount=upi_amount)

    @classmethod
    def from_tender(cls, method, total, cash_tendered=None, upi_tendered=None):
        """
        Turn what the customer handed over into an exact settlement record.

        Returns (PaymentDetails, change_due). Change is only ever given back in
        cash, so it comes out of the cash part; a UPI transfer must be exact.

        Raises:
            PaymentMismatch: if the tender does not cover the total, or a UPI
                amount exceeds what is owed.
        """
        zero = Money.zero(total.currency)
        cash_tendered = cash_tendered or zero
        upi_tendered = upi_tendered or zero

        if method == PaymentMethod.CASH:
            cash_tendered, upi_tendered = cash_tendered, zero
        elif method == PaymentMethod.UPI:
            cash_tendered = zero
        elif method != PaymentMethod.SPLIT:
            raise ValueError(f"'{method}' is not a valid payment method.")

        if upi_tendered > total:
            raise PaymentMismatch(total - upi_tendered)

        paid = cash_tendered + upi_tendered
        if paid < total:
            raise PaymentMismatch(total - paid)

        change_due = paid - total
        details = cls(
            method,
            total,
            cash_amount=cash_tendered - change_due,
            upi_amount=upi_tendered,
        )
        return details, change_due


def validate_payment(details: PaymentDetails, order_total: Money) -> PaymentDetails:
    """
    Check a settlement record against the order it pays for.

    Rules (exact Money equality, no tolerance):
    - details.total must be the order's total
    - cash: cash_amount == total and upi_amount == 0
    - upi: upi_amount == total and cash_amount == 0
    - split: cash_amount + upi_amount == total, neither part negative

    Raises:
        PaymentMismatch: with the deficit (order total minus amount paid)
    """
    if details.total != order_total:
        raise PaymentMismatch(
            order_total - details.total,
            message=f"Payment total {details.total} does not match order total {order_total}",
        )

    if details.cash_amount.is_negative() or details.upi_amount.is_negative():
        raise PaymentMismatch(order_total - details.paid, message="Payment amounts cannot be negative")

    if details.method == PaymentMethod.CASH and not details.upi_amount.is_zero():
        raise PaymentMismatch(order_total - details.cash_amount, message="A cash payment cannot carry a UPI amount")

    if details.method == PaymentMethod.UPI and not details.cash_amount.is_zero():
        raise PaymentMismatch(order_total - details.upi_amount, message="A UPI payment cannot carry a cash amount")

    if details.paid != order_total:
        raise PaymentMismatch(order_total - details.paid)

    return details

"""
Cash drawer reconciliation.

Each staff member opens a drawer with a float at the start of the day and
counts it at the end. The expected count is the float plus the cash taken on
that staff member's orders completed that day:

    cash order    -> full order total
    split order   -> the cash part
    upi order     -> nothing

A counted amount that differs from the expected one is recorded and reported
(shortage / excess); it is never refused.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from django.db import IntegrityError, transaction
from django.utils import timezone

from core_backend.exceptions import store_guard
from orders.models import Order
from payments.money import Money
from payments.settlement import PaymentMethod

from .exceptions import AlreadyClosed, DrawerAlreadyOpen, NoOpenDrawer
from .models import CashDrawerEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DrawerReconciliation:
    """Expected vs counted cash for one drawer. `counted` is None until closing."""

    entry: CashDrawerEntry
    cash_sales: Money
    expected: Money
    counted: Optional[Money] = None

    @property
    def difference(self) -> Optional[Money]:
        """counted - expected: negative is a shortage, positive an excess."""
        if self.counted is None:
            return None
        return self.counted - self.expected

    @property
    def outcome(self) -> str:
        difference = self.difference
        if difference is None:
            return "open"
        if difference.is_negative():
            return "shortage"
        if difference.is_zero():
            return "balanced"
        return "excess"

    def as_dict(self):
        def amount(value):
            return str(value.to_decimal()) if value is not None else None

        return {
            "staff_id": self.entry.staff_id,
            "staff_name": self.entry.staff_name,
            "date": self.entry.date.isoformat(),
            "opening_amount": amount(self.entry.opening_amount),
            "cash_sales": amount(self.cash_sales),
            "expected": amount(self.expected),
            "counted": amount(self.counted),
            "difference": amount(self.difference),
            "outcome": self.outcome,
        }


class CashDrawerService:
    """Opening, closing and reconciling per-staff, per-day cash drawers."""

    @staticmethod
    def open_drawer(
        staff_id,
        staff_name: str,
        opening_amount: Money,
        reason: str = "",
        day: Optional[date] = None,
    ) -> CashDrawerEntry:
        """
        Open today's drawer for a staff member.

        Raises:
            ValueError: negative opening amount
            DrawerAlreadyOpen: an entry for (staff_id, day) already exists
        """
        if opening_amount.is_negative():
            raise ValueError("Opening amount cannot be negative")
        day = day or timezone.localdate()

        try:
            with store_guard("open cash drawer"), transaction.atomic():
                entry = CashDrawerEntry.objects.create(
                    staff_id=str(staff_id),
                    staff_name=staff_name,
                    date=day,
                    opening_amount=opening_amount,
                    reason=reason or "",
                )
        except IntegrityError:
            logger.info(f"Drawer for {staff_id} on {day} is already open")
            raise DrawerAlreadyOpen(staff_id, day)

        logger.info(f"Cash drawer opened by {staff_name} ({staff_id}) on {day} with {opening_amount}")
        return entry

    @staticmethod
    def today_entry(staff_id, day: Optional[date] = None) -> Optional[CashDrawerEntry]:
        day = day or timezone.localdate()
        with store_guard("cash drawer lookup"):
            return CashDrawerEntry.objects.filter(staff_id=str(staff_id), date=day).first()

    @staticmethod
    def entries_for_day(day: Optional[date] = None) -> List[CashDrawerEntry]:
        day = day or timezone.localdate()
        with store_guard("cash drawer list"):
            return list(CashDrawerEntry.objects.filter(date=day).order_by("staff_name"))

    @staticmethod
    def cash_sales(staff_id, day: Optional[date] = None) -> Money:
        """
        Cash taken on a staff member's orders completed on `day` (local date
        of completed_at). UPI-only orders are skipped.
        """
        day = day or timezone.localdate()
        orders = (
            Order.objects.filter(
                staff_id=str(staff_id),
                status=Order.OrderStatus.COMPLETED,
                completed_at__date=day,
            )
            .exclude(payment_method=PaymentMethod.UPI)
            .only("payment_method", "total_amount", "cash_amount", "upi_amount", "payment_total")
        )
        with store_guard("cash sales"):
            return sum((order.cash_portion for order in orders), Money.zero())

    @staticmethod
    def preview(staff_id, day: Optional[date] = None) -> DrawerReconciliation:
        """
        Expected cash so far, without closing.

        Raises:
            NoOpenDrawer: nothing was opened for (staff_id, day)
        """
        day = day or timezone.localdate()
        entry = CashDrawerService.today_entry(staff_id, day)
        if entry is None:
            raise NoOpenDrawer(staff_id, day)

        cash_sales = CashDrawerService.cash_sales(staff_id, day)
        return DrawerReconciliation(
            entry=entry,
            cash_sales=cash_sales,
            expected=entry.opening_amount + cash_sales,
            counted=entry.closing_amount,
        )

    @staticmethod
    def close_drawer(
        staff_id, closing_amount: Money, day: Optional[date] = None
    ) -> DrawerReconciliation:
        """
        Record the counted cash and reconcile it against the expected amount.

        The closing amount is written with a conditional UPDATE that only
        matches a still-open entry, so two concurrent closes cannot both land.

        Raises:
            ValueError: negative closing amount
            NoOpenDrawer: nothing was opened for (staff_id, day)
            AlreadyClosed: the drawer already has a closing amount
        """
        if closing_amount.is_negative():
            raise ValueError("Closing amount cannot be negative")
        day = day or timezone.localdate()

        with store_guard("close cash drawer"), transaction.atomic():
            entry = (
                CashDrawerEntry.objects.select_for_update()
                .filter(staff_id=str(staff_id), date=day)
                .first()
            )
            if entry is None:
                raise NoOpenDrawer(staff_id, day)
            if entry.is_closed:
                raise AlreadyClosed(entry)

            cash_sales = CashDrawerService.cash_sales(staff_id, day)
            closed_at = timezone.now()
            updated = CashDrawerEntry.objects.filter(
                pk=entry.pk, closing_amount__isnull=True
            ).update(closing_amount=closing_amount, closed_at=closed_at)
            if not updated:
                raise AlreadyClosed(entry)

        entry.closing_amount = closing_amount
        entry.closed_at = closed_at

        reconciliation = DrawerReconciliation(
            entry=entry,
            cash_sales=cash_sales,
            expected=entry.opening_amount + cash_sales,
            counted=closing_amount,
        )
        if reconciliation.outcome == "balanced":
            logger.info(f"Cash drawer closed for {entry.staff_name} on {day}: balanced at {closing_amount}")
        else:
            logger.warning(
                f"Cash drawer closed for {entry.staff_name} on {day} with {reconciliation.outcome} "
                f"of {abs(reconciliation.difference)} (expected {reconciliation.expected}, "
                f"counted {closing_amount})"
            )
        return reconciliation

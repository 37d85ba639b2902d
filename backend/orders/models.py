import logging
import re
import uuid

from django.db import IntegrityError, models, transaction
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from customers.models import Customer
from payments.fields import MoneyField
from payments.money import Money
from payments.settlement import PaymentDetails, PaymentMethod

logger = logging.getLogger(__name__)


class Order(models.Model):
    """
    A checked-out cart.

    Lines and the subtotal/discount/total snapshots are written once at
    checkout and never recomputed; printing, loyalty and drawer reconciliation
    all read these snapshots rather than the live menu.
    """

    class OrderStatus(models.TextChoices):
        PENDING = "pending", _("Pending")  # Just placed
        PREPARING = "preparing", _("Preparing")  # Kitchen is on it
        READY = "ready", _("Ready")  # Ready to serve / hand over
        COMPLETED = "completed", _("Completed")  # Paid for
        CANCELLED = "cancelled", _("Cancelled")

    class OrderType(models.TextChoices):
        DINE_IN = "dine-in", _("Dine In")
        TAKEAWAY = "takeaway", _("Takeaway")
        DELIVERY = "delivery", _("Delivery")

    ACTIVE_STATUSES = (OrderStatus.PENDING, OrderStatus.PREPARING, OrderStatus.READY)
    TERMINAL_STATUSES = (OrderStatus.COMPLETED, OrderStatus.CANCELLED)

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order_number = models.CharField(max_length=20, unique=True, editable=False)
    status = models.CharField(
        max_length=10,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
        db_index=True,
    )
    order_type = models.CharField(max_length=10, choices=OrderType.choices)
    table_number = models.CharField(
        max_length=10,
        blank=True,
        default="",
        help_text=_("Set for dine-in orders only"),
    )

    # --- Relationships ---
    customer = models.ForeignKey(
        Customer,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )
    staff_id = models.CharField(max_length=64, db_index=True)
    staff_name = models.CharField(max_length=150, help_text=_("Snapshot at checkout"))

    # --- Financial snapshots (minor units) ---
    subtotal_amount = MoneyField()
    discount_amount = MoneyField()
    total_amount = MoneyField()

    # --- Settlement, written exactly once on completion ---
    payment_method = models.CharField(
        max_length=10, choices=PaymentMethod.choices, blank=True, default=""
    )
    cash_amount = MoneyField(null=True, blank=True)
    upi_amount = MoneyField(null=True, blank=True)
    payment_total = MoneyField(null=True, blank=True)

    # --- Fulfillment flags ---
    kot_printed = models.BooleanField(default=False)
    bill_printed = models.BooleanField(default=False)

    notes = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(default=timezone.now, editable=False)
    completed_at = models.DateTimeField(
        null=True,
        blank=True,
        editable=False,
        db_index=True,
        help_text="Timestamp when the order was paid. Cash drawer days are keyed on this.",
    )

    class Meta:
        ordering = ["-created_at", "order_number"]
        indexes = [
            models.Index(fields=["staff_id", "status", "completed_at"], name="order_staff_status_done_idx"),
        ]

    def __str__(self):
        return f"Order {self.order_number or self.pk} ({self.order_type}) - {self.status}"

    @property
    def is_active(self):
        return self.status in self.ACTIVE_STATUSES

    @property
    def is_terminal(self):
        return self.status in self.TERMINAL_STATUSES

    @property
    def payment_details(self):
        """The settlement recorded at completion, or None while unpaid."""
        if not self.payment_method:
            return None
        return PaymentDetails(
            self.payment_method,
            self.payment_total,
            cash_amount=self.cash_amount,
            upi_amount=self.upi_amount,
        )

    @property
    def cash_portion(self):
        """Cash that went into the drawer for this order (zero unless paid in cash)."""
        details = self.payment_details
        if details is None:
            return Money.zero(self.total_amount.currency)
        return details.cash_portion

    def save(self, *args, **kwargs):
        # Generate order_number only if it's not already set
        if self.order_number:
            super().save(*args, **kwargs)
            return

        max_retries = 5
        for _attempt in range(max_retries):
            self.order_number = self._generate_sequential_order_number()
            try:
                with transaction.atomic():
                    super().save(*args, **kwargs)
                return
            except IntegrityError:
                # Another till took the number, retry
                logger.debug(f"Order number {self.order_number} taken, retrying")
                continue

        self.order_number = ""
        raise IntegrityError("Failed to generate a unique order number after multiple retries.")

    def _generate_sequential_order_number(self):
        """
        Generates the next sequential order number, e.g. ORD-000042.
        """
        prefix = "ORD-"
        last_order = (
            Order.objects.filter(order_number__startswith=prefix)
            .order_by("-order_number")
            .first()
        )

        next_number = 1
        if last_order:
            match = re.match(rf"^{re.escape(prefix)}(\d+)$", last_order.order_number)
            if match:
                next_number = int(match.group(1)) + 1

        return f"{prefix}{next_number:06d}"


class OrderLine(models.Model):
    """Immutable copy of a cart line, taken at checkout."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="lines")
    item_id = models.UUIDField()
    name = models.CharField(max_length=200)
    unit_price = MoneyField()
    quantity = models.PositiveIntegerField()
    category = models.CharField(max_length=100, blank=True, default="")
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position"]

    def __str__(self):
        return f"{self.quantity} x {self.name}"

    @property
    def line_total(self):
        return self.unit_price * self.quantity

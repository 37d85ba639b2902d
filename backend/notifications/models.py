import uuid

from django.db import models
from django.utils.translation import gettext_lazy as _


class OrderNotification(models.Model):
    """
    Record of a customer notification for an order.

    The (order, kind) unique constraint is what makes dispatch happen at most
    once per completed order. Status and error are shown to staff as a
    non-blocking warning; nothing here ever affects the order itself.
    """

    class Kind(models.TextChoices):
        COMPLETION = "completion", _("Order Completed")

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        SENT = "sent", _("Sent")
        FAILED = "failed", _("Failed")
        SKIPPED = "skipped", _("Skipped")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(
        "orders.Order", on_delete=models.CASCADE, related_name="notifications"
    )
    kind = models.CharField(max_length=20, choices=Kind.choices, default=Kind.COMPLETION)
    recipient = models.CharField(max_length=20, blank=True, default="")
    status = models.CharField(
        max_length=10, choices=Status.choices, default=Status.PENDING, db_index=True
    )
    error = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    attempted_at = models.DateTimeField(null=True, blank=True)
    sent_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["order", "kind"], name="unique_notification_per_order_kind"),
        ]

    def __str__(self):
        return f"{self.get_kind_display()} notice for {self.order_id}: {self.status}"

import uuid

from django.db import models
from django.utils import timezone

from payments.fields import MoneyField


class CashDrawerEntry(models.Model):
    """
    One staff member's drawer for one local calendar day.

    Created when the shift opens the drawer, closed once at shift end, never
    deleted. The (staff_id, date) unique constraint is what rejects a second
    opening.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    staff_id = models.CharField(max_length=64)
    staff_name = models.CharField(max_length=150)
    date = models.DateField(default=timezone.localdate)
    opening_amount = MoneyField()
    closing_amount = MoneyField(null=True, blank=True)
    reason = models.TextField(blank=True, default="", help_text="Note attached at opening")
    opened_at = models.DateTimeField(default=timezone.now, editable=False)
    closed_at = models.DateTimeField(null=True, blank=True, editable=False)

    class Meta:
        verbose_name = "Cash Drawer Entry"
        verbose_name_plural = "Cash Drawer Entries"
        ordering = ["-date", "staff_name"]
        constraints = [
            models.UniqueConstraint(fields=["staff_id", "date"], name="unique_drawer_per_staff_day"),
        ]

    def __str__(self):
        return f"Drawer {self.staff_name} {self.date}"

    @property
    def is_closed(self):
        return self.closing_amount is not None

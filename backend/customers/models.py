"""
Customer records as seen by the order engine: identity, contact and loyalty.
"""
import uuid

from django.core.validators import MinValueValidator
from django.db import models


class Customer(models.Model):
    """
    A walk-in customer known by phone number.

    Loyalty fields are only ever written by LoyaltyService: accrual on order
    completion and explicit redemption.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=150, help_text="Customer's name")
    phone = models.CharField(
        max_length=20,
        blank=True,
        db_index=True,
        help_text="Customer's phone number, used for order notifications",
    )

    # Loyalty
    loyalty_points = models.PositiveIntegerField(
        default=0,
        validators=[MinValueValidator(0)],
        help_text="Current points balance; never negative",
    )
    visit_count = models.PositiveIntegerField(
        default=0, help_text="Number of completed orders"
    )
    first_visit = models.DateTimeField(auto_now_add=True)
    last_visit = models.DateTimeField(
        null=True, blank=True, help_text="Completion time of the latest order"
    )

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Customer"
        verbose_name_plural = "Customers"
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.phone})" if self.phone else self.name

import uuid

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from payments.fields import MoneyField


class Cart(models.Model):
    """
    The in-progress order a staff member is building at the till.

    Lifecycle:
    1. Created on first use for a staff member (one open cart each)
    2. Lines added, re-quantified and removed as the customer orders
    3. Optionally discounted (percentage or fixed amount)
    4. Checked out into an Order, which clears it

    Key Design:
    - NO totals stored; subtotal/discount/total are computed from the lines
    - Discount is stored as entered and clamped against the subtotal on read,
      so the total can never go negative
    """

    class DiscountType(models.TextChoices):
        NONE = "", "None"
        PERCENTAGE = "percentage", "Percentage"
        FIXED = "fixed", "Fixed Amount"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    staff_id = models.CharField(
        max_length=64,
        unique=True,
        help_text="Staff member who owns this cart",
    )

    discount_type = models.CharField(
        max_length=20,
        choices=DiscountType.choices,
        default=DiscountType.NONE,
        blank=True,
    )
    discount_percent = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
        help_text="Percentage off the subtotal, 0-100",
    )
    discount_fixed = MoneyField(
        null=True,
        blank=True,
        help_text="Fixed amount off the subtotal, in minor units",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-updated_at"]

    def __str__(self):
        return f"Cart for staff {self.staff_id}"

    @property
    def item_count(self):
        return sum(line.quantity for line in self.lines.all())

    @property
    def is_empty(self):
        return not self.lines.exists()


class CartLine(models.Model):
    """
    One menu item in a cart.

    Name, unit price and category are copied from the menu when the line is
    first added; later menu edits do not touch them.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    cart = models.ForeignKey(Cart, on_delete=models.CASCADE, related_name="lines")
    item_id = models.UUIDField(help_text="Menu item this line was taken from")
    name = models.CharField(max_length=200)
    unit_price = MoneyField()
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    category = models.CharField(max_length=100, blank=True, default="")
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position"]
        constraints = [
            models.UniqueConstraint(fields=["cart", "item_id"], name="unique_item_per_cart"),
        ]

    def __str__(self):
        return f"{self.quantity} x {self.name}"

    @property
    def line_total(self):
        return self.unit_price * self.quantity

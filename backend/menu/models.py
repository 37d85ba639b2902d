import uuid

from django.db import models
from django.utils.translation import gettext_lazy as _

from payments.fields import MoneyField


class MenuItem(models.Model):
    """
    A sellable menu item.

    Menu editing happens elsewhere; the order engine only reads name, price
    and category from here, and copies them onto cart and order lines.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200, help_text=_("Name shown on tickets."))
    price = MoneyField(help_text=_("Current price in minor units (paise)."))
    category = models.CharField(max_length=100, blank=True, default="")
    is_available = models.BooleanField(
        default=True,
        db_index=True,
        help_text=_("Unavailable items cannot be added to a cart."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Menu Item")
        verbose_name_plural = _("Menu Items")
        ordering = ["category", "name"]

    def __str__(self):
        return f"{self.name} ({self.price})"

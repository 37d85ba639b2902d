"""
Cart service layer for the till.

This service handles:
- Cart retrieval per staff member
- Adding/updating/removing lines (menu snapshots)
- Discounts (percentage or fixed, clamped so the total never goes negative)
- Totals for display and for checkout

Checkout itself lives in orders.services.OrderService.
"""

import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_EVEN
from typing import Any, Dict, Optional

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import F, Max
from django.utils import timezone

from core_backend.exceptions import store_guard
from menu.models import MenuItem
from payments.money import Money

from .exceptions import InvalidItem
from .models import Cart, CartLine
from .signals import cart_item_added

logger = logging.getLogger(__name__)


def _check_quantity(qty) -> int:
    if isinstance(qty, bool) or not isinstance(qty, int):
        raise ValueError("Quantity must be a whole number")
    return qty


class CartService:
    """Service for managing cart operations."""

    @staticmethod
    def get_or_create_cart(staff_id) -> Cart:
        """
        Get the open cart for a staff member, creating it on first use.

        Raises:
            ValueError: If staff_id is empty
        """
        if not staff_id:
            raise ValueError("staff_id is required to get a cart")

        with store_guard("cart lookup"):
            cart, created = Cart.objects.get_or_create(staff_id=str(staff_id))

        if created:
            logger.info(f"Created new cart {cart.id} for staff {staff_id}")
        return cart

    @staticmethod
    def refresh(cart: Cart) -> Cart:
        """Re-read a cart and its discount state from the database."""
        with store_guard("cart refresh"):
            return Cart.objects.get(pk=cart.pk)

    @staticmethod
    def _menu_item(item_id) -> MenuItem:
        try:
            return MenuItem.objects.get(pk=item_id, is_available=True)
        except (MenuItem.DoesNotExist, ValidationError, ValueError):
            raise InvalidItem(item_id)

    @staticmethod
    def _line(cart: Cart, item_id) -> CartLine:
        try:
            return cart.lines.get(item_id=item_id)
        except (CartLine.DoesNotExist, ValidationError, ValueError):
            raise InvalidItem(item_id, message=f"Item '{item_id}' is not in the cart")

    @staticmethod
    def _touch(cart: Cart, **fields):
        Cart.objects.filter(pk=cart.pk).update(updated_at=timezone.now(), **fields)

    @staticmethod
    def add_line(cart: Cart, item_id, qty: int = 1) -> CartLine:
        """
        Add a menu item to the cart.

        If the item is already in the cart its quantity is increased (the unit
        price captured on first add is kept); otherwise a new line is created
        from the menu's current name, price and category. Sends
        cart_item_added exactly once on success.

        Raises:
            InvalidItem: unknown or unavailable menu item
            ValueError: qty below 1
        """
        if _check_quantity(qty) < 1:
            raise ValueError("Quantity must be at least 1")

        with store_guard("add to cart"), transaction.atomic():
            item = CartService._menu_item(item_id)
            Cart.objects.select_for_update().get(pk=cart.pk)

            line = cart.lines.filter(item_id=item.id).first()
            if line:
                CartLine.objects.filter(pk=line.pk).update(quantity=F("quantity") + qty)
                line.refresh_from_db(fields=["quantity"])
            else:
                last_position = cart.lines.aggregate(last=Max("position"))["last"] or 0
                line = CartLine.objects.create(
                    cart=cart,
                    item_id=item.id,
                    name=item.name,
                    unit_price=item.price,
                    quantity=qty,
                    category=item.category,
                    position=last_position + 1,
                )
            CartService._touch(cart)

        logger.debug(f"Cart {cart.id}: +{qty} {line.name} (now {line.quantity})")
        cart_item_added.send(sender=Cart, cart=cart, line=line, quantity=qty)
        return line

    @staticmethod
    def set_quantity(cart: Cart, item_id, qty: int) -> Optional[CartLine]:
        """
        Set a line's quantity exactly. Zero or less removes the line.

        Returns the updated line, or None if it was removed.

        Raises:
            InvalidItem: the item is not in the cart
        """
        _check_quantity(qty)

        with store_guard("update cart quantity"), transaction.atomic():
            line = CartService._line(cart, item_id)
            if qty <= 0:
                line.delete()
                CartService._touch(cart)
                return None

            CartLine.objects.filter(pk=line.pk).update(quantity=qty)
            CartService._touch(cart)

        line.quantity = qty
        return line

    @staticmethod
    def remove_line(cart: Cart, item_id) -> bool:
        """Remove an item from the cart. Returns False if it was not there."""
        try:
            return CartService.set_quantity(cart, item_id, 0) is None
        except InvalidItem:
            return False

    @staticmethod
    @transaction.atomic
    def clear(cart: Cart) -> None:
        """Remove all lines and any discount."""
        with store_guard("clear cart"):
            cart.lines.all().delete()
            CartService._touch(
                cart,
                discount_type=Cart.DiscountType.NONE,
                discount_percent=None,
                discount_fixed=None,
            )

        cart.discount_type = Cart.DiscountType.NONE
        cart.discount_percent = None
        cart.discount_fixed = None

    # --- Discounts ---

    @staticmethod
    def apply_discount(cart: Cart, kind: str, value) -> Money:
        """
        Apply a discount, replacing any existing one. Returns the discount as
        it applies to the current subtotal.

        Args:
            kind: "percentage" (value 0-100, up to 2 decimals) or "fixed"
                (value as Money or a major-unit amount; clamped to the subtotal)

        Raises:
            ValueError: percentage outside [0, 100], negative fixed amount, or
                an unknown kind
        """
        if kind == Cart.DiscountType.PERCENTAGE:
            try:
                percent = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_EVEN)
            except InvalidOperation:
                raise ValueError(f"'{value}' is not a valid percentage")
            if percent < 0 or percent > 100:
                raise ValueError("Percentage discount must be between 0 and 100")
            fields = {"discount_percent": percent, "discount_fixed": None}
        elif kind == Cart.DiscountType.FIXED:
            amount = value if isinstance(value, Money) else Money.from_decimal(value)
            if amount.is_negative():
                raise ValueError("Fixed discount cannot be negative")
            fields = {"discount_percent": None, "discount_fixed": amount}
        else:
            raise ValueError(f"Unknown discount type '{kind}'")

        with store_guard("apply discount"):
            CartService._touch(cart, discount_type=kind, **fields)

        cart.discount_type = kind
        for name, field_value in fields.items():
            setattr(cart, name, field_value)

        logger.info(f"Cart {cart.id}: {kind} discount {value} applied")
        return CartService.discount_amount(cart)

    @staticmethod
    def remove_discount(cart: Cart) -> None:
        with store_guard("remove discount"):
            CartService._touch(
                cart,
                discount_type=Cart.DiscountType.NONE,
                discount_percent=None,
                discount_fixed=None,
            )
        cart.discount_type = Cart.DiscountType.NONE
        cart.discount_percent = None
        cart.discount_fixed = None

    # --- Totals ---

    @staticmethod
    def subtotal(cart: Cart) -> Money:
        """Sum of unit price x quantity over all lines."""
        with store_guard("cart subtotal"):
            lines = list(cart.lines.all())
        return sum((line.line_total for line in lines), Money.zero())

    @staticmethod
    def discount_amount(cart: Cart, subtotal: Optional[Money] = None) -> Money:
        """The discount as it applies right now, within [0, subtotal]."""
        if subtotal is None:
            subtotal = CartService.subtotal(cart)
        zero = Money.zero(subtotal.currency)

        if cart.discount_type == Cart.DiscountType.PERCENTAGE and cart.discount_percent is not None:
            discount = subtotal.percentage(cart.discount_percent)
        elif cart.discount_type == Cart.DiscountType.FIXED and cart.discount_fixed is not None:
            discount = cart.discount_fixed
        else:
            return zero

        return discount.clamp(zero, subtotal)

    @staticmethod
    def total(cart: Cart) -> Money:
        """max(0, subtotal - discount)."""
        subtotal = CartService.subtotal(cart)
        total = subtotal - CartService.discount_amount(cart, subtotal)
        return max(Money.zero(subtotal.currency), total)

    @staticmethod
    def get_totals(cart: Cart) -> Dict[str, Any]:
        """All totals in one pass, for display and checkout."""
        subtotal = CartService.subtotal(cart)
        discount = CartService.discount_amount(cart, subtotal)
        return {
            "subtotal": subtotal,
            "discount": discount,
            "total": max(Money.zero(subtotal.currency), subtotal - discount),
            "item_count": sum(line.quantity for line in cart.lines.all()),
        }

"""
Shared test fixtures for all backend tests.

This module provides reusable pytest fixtures for common test objects
like menu items, customers, carts and orders.
"""
import pytest

from cart.models import Cart
from cart.services import CartService
from customers.models import Customer
from menu.models import MenuItem
from orders.models import Order
from orders.services import OrderService
from payments.money import Money
from printing.backends import ConsolePrinterBackend


# ============================================================================
# STAFF FIXTURES
# ============================================================================

@pytest.fixture
def staff():
    """The cashier on shift (staff are identified by id and display name only)"""
    return {"staff_id": "S-001", "staff_name": "Asha"}


@pytest.fixture
def other_staff():
    return {"staff_id": "S-002", "staff_name": "Vikram"}


# ============================================================================
# MENU FIXTURES
# ============================================================================

@pytest.fixture
def cappuccino(db):
    """Cappuccino at ₹120.00"""
    return MenuItem.objects.create(
        name="Cappuccino",
        price=Money(12000),
        category="Beverages",
    )


@pytest.fixture
def samosa(db):
    """Samosa at ₹60.00"""
    return MenuItem.objects.create(
        name="Samosa",
        price=Money(6000),
        category="Snacks",
    )


@pytest.fixture
def unavailable_item(db):
    """Menu item that is switched off for the day"""
    return MenuItem.objects.create(
        name="Cold Brew",
        price=Money(18000),
        category="Beverages",
        is_available=False,
    )


# ============================================================================
# CUSTOMER FIXTURES
# ============================================================================

@pytest.fixture
def customer(db):
    """Regular customer with a phone number for notifications"""
    return Customer.objects.create(name="Ravi", phone="+919876543210")


@pytest.fixture
def customer_without_phone(db):
    return Customer.objects.create(name="Meera", phone="")


# ============================================================================
# CART FIXTURES
# ============================================================================

@pytest.fixture
def cart(db, staff) -> Cart:
    """Empty cart for the staff member on shift"""
    return CartService.get_or_create_cart(staff["staff_id"])


@pytest.fixture
def cart_with_items(cart, cappuccino, samosa) -> Cart:
    """2 x Cappuccino + 1 x Samosa = ₹300.00"""
    CartService.add_line(cart, cappuccino.id, 2)
    CartService.add_line(cart, samosa.id, 1)
    return cart


# ============================================================================
# ORDER FIXTURES
# ============================================================================

@pytest.fixture
def pending_order(cart_with_items, staff) -> Order:
    """
    Dine-in order at table 5 with a 10% discount.

    Subtotal ₹300.00, discount ₹30.00, total ₹270.00.
    """
    CartService.apply_discount(cart_with_items, Cart.DiscountType.PERCENTAGE, 10)
    return OrderService.checkout(
        cart_with_items,
        order_type=Order.OrderType.DINE_IN,
        table_number="5",
        **staff,
    )


@pytest.fixture
def customer_order(cart_with_items, staff, customer) -> Order:
    """Takeaway order for `customer`, total ₹300.00"""
    return OrderService.checkout(
        cart_with_items,
        order_type=Order.OrderType.TAKEAWAY,
        customer_id=customer.id,
        **staff,
    )


# ============================================================================
# PRINTER FIXTURES
# ============================================================================

@pytest.fixture
def printer():
    """In-memory printer that records every ticket it is sent"""
    return ConsolePrinterBackend()

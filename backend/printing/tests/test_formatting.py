"""
Ticket layout tests for the KOT and the customer bill.
"""
import pytest

from core_backend.config import app_settings
from orders.models import Order
from orders.services import OrderService
from payments.money import Money
from payments.settlement import PaymentDetails
from printing.formatting import render_bill, render_kot


@pytest.fixture
def print_options():
    return dict(app_settings.PRINT)


@pytest.mark.django_db
class TestKitchenTicket:

    def test_kot_layout(self, pending_order):
        ticket = render_kot(pending_order)
        lines = ticket.splitlines()

        assert "KITCHEN ORDER TICKET" in lines
        assert f"Order #: {pending_order.order_number}" in lines
        assert "Type: DINE-IN" in lines
        assert "Table: 5" in lines
        assert "Server: Asha" in lines
        assert lines[lines.index("ITEMS:") + 1:lines.index("ITEMS:") + 3] == ["2x Cappuccino", "1x Samosa"]
        assert ticket.endswith("\n\n\n")

    def test_kot_has_no_prices(self, pending_order):
        assert "₹" not in render_kot(pending_order)

    def test_kot_table_hidden_when_disabled(self, pending_order, print_options):
        print_options["KOT_SHOW_TABLE"] = False

        assert "Table:" not in render_kot(pending_order, print_options)

    def test_takeaway_kot_has_no_table(self, cart_with_items, staff):
        order = OrderService.checkout(cart_with_items, order_type=Order.OrderType.TAKEAWAY, **staff)

        ticket = render_kot(order)

        assert "Type: TAKEAWAY" in ticket
        assert "Table:" not in ticket

    def test_kot_shows_notes_and_footer(self, pending_order, print_options):
        print_options["KOT_FOOTER"] = "--- KITCHEN COPY ---"
        OrderService.update_notes(pending_order.pk, "Less sugar")

        ticket = render_kot(OrderService.sync(pending_order), print_options)

        assert "Notes: Less sugar" in ticket
        assert "--- KITCHEN COPY ---" in ticket


@pytest.mark.django_db
class TestBill:

    def test_bill_totals(self, pending_order):
        ticket = render_bill(pending_order)
        lines = ticket.splitlines()

        assert "INVOICE" in lines
        assert "Subtotal: ₹300.00" in lines
        assert "Discount: -₹30.00" in lines
        assert "TOTAL: ₹270.00" in lines
        assert "  ₹120.00 each: ₹240.00" in lines

    def test_bill_without_discount_has_no_discount_line(self, cart_with_items, staff):
        order = OrderService.checkout(cart_with_items, order_type=Order.OrderType.TAKEAWAY, **staff)

        assert "Discount" not in render_bill(order)

    def test_bill_not_itemized(self, pending_order, print_options):
        print_options["BILL_ITEMIZED"] = False

        assert "each" not in render_bill(pending_order, print_options)

    def test_bill_shows_split_payment(self, pending_order):
        OrderService.complete_order(
            pending_order.pk, PaymentDetails.split(Money(27000), Money(10000), Money(17000))
        )

        ticket = render_bill(OrderService.sync(pending_order))

        assert "Payment Method: SPLIT" in ticket
        assert "Cash: ₹100.00" in ticket
        assert "UPI: ₹170.00" in ticket

    def test_unpaid_bill_has_no_payment_section(self, pending_order):
        assert "Payment Method" not in render_bill(pending_order)

    def test_bill_shows_customer(self, customer_order):
        ticket = render_bill(OrderService.sync(customer_order))

        assert "Customer: Ravi" in ticket
        assert "Phone: +919876543210" in ticket

    def test_bill_header_and_footer_from_settings(self, pending_order, settings):
        settings.CAFE_POS = {"PRINT": {"CAFE_NAME": "Blue Tokai", "BILL_FOOTER": "Visit again"}}

        ticket = render_bill(pending_order)

        assert ticket.splitlines()[1] == "BLUE TOKAI"
        assert "Visit again" in ticket
        # Keys not overridden keep their defaults
        assert "  ₹120.00 each: ₹240.00" in ticket

    def test_bill_uses_stored_prices(self, pending_order, cappuccino):
        cappuccino.price = Money(99900)
        cappuccino.save()

        assert "TOTAL: ₹270.00" in render_bill(OrderService.sync(pending_order))

"""
Order Lifecycle Tests

Checkout from the cart, kitchen status changes, payment completion and
cancellation, driven through OrderService the way the till drives them.
"""
from datetime import timedelta

import pytest
from django.utils import timezone

from cart.models import Cart
from cart.services import CartService
from customers.models import Customer
from orders.models import Order, OrderLine
from orders.services import OrderService
from orders.signals import order_completed
from payments.money import Money
from payments.settlement import PaymentDetails, PaymentMethod


@pytest.mark.django_db
class TestCheckout:
    """Turning a cart into a pending order"""

    def test_checkout_snapshots_totals(self, pending_order):
        """
        CRITICAL: 2 x ₹120 + 1 x ₹60 with 10% off is stored as 300 / 30 / 270.
        """
        assert pending_order.status == Order.OrderStatus.PENDING
        assert pending_order.subtotal_amount == Money(30000)
        assert pending_order.discount_amount == Money(3000)
        assert pending_order.total_amount == Money(27000)
        assert pending_order.table_number == "5"
        assert pending_order.staff_id == "S-001"
        assert pending_order.staff_name == "Asha"

    def test_checkout_copies_lines_in_cart_order(self, pending_order):
        lines = list(pending_order.lines.all())

        assert [(line.name, line.quantity) for line in lines] == [("Cappuccino", 2), ("Samosa", 1)]
        assert lines[0].unit_price == Money(12000)
        assert lines[0].category == "Beverages"
        assert sum((line.line_total for line in lines), Money.zero()) == pending_order.subtotal_amount

    def test_checkout_clears_cart(self, pending_order, cart_with_items):
        cart = CartService.refresh(cart_with_items)

        assert cart.is_empty
        assert cart.discount_type == Cart.DiscountType.NONE

    def test_order_numbers_are_sequential(self, pending_order, cart, cappuccino, staff):
        CartService.add_line(cart, cappuccino.id)
        second = OrderService.checkout(cart, order_type=Order.OrderType.TAKEAWAY, **staff)

        assert pending_order.order_number == "ORD-000001"
        assert second.order_number == "ORD-000002"

    def test_checkout_uses_discount_saved_through_another_copy(self, cart_with_items, staff):
        """A discount applied from another terminal view of the same cart is charged."""
        other_copy = CartService.get_or_create_cart(staff["staff_id"])
        CartService.apply_discount(other_copy, Cart.DiscountType.PERCENTAGE, 10)

        order = OrderService.checkout(
            cart_with_items, order_type=Order.OrderType.TAKEAWAY, **staff
        )

        assert order.discount_amount == Money(3000)
        assert order.total_amount == Money(27000)
        assert cart_with_items.discount_type == Cart.DiscountType.NONE
        assert CartService.refresh(cart_with_items).is_empty

    def test_takeaway_drops_table_number(self, cart_with_items, staff):
        order = OrderService.checkout(
            cart_with_items,
            order_type=Order.OrderType.TAKEAWAY,
            table_number="9",
            **staff,
        )

        assert order.table_number == ""

    def test_checkout_links_customer(self, customer_order, customer):
        assert customer_order.customer_id == customer.id
        assert customer_order.order_type == Order.OrderType.TAKEAWAY

    def test_menu_price_change_does_not_touch_existing_order(self, pending_order, cappuccino):
        cappuccino.price = Money(20000)
        cappuccino.save()

        order = OrderService.sync(pending_order)
        assert order.lines.get(name="Cappuccino").unit_price == Money(12000)
        assert order.total_amount == Money(27000)

    def test_checkout_keeps_notes(self, cart_with_items, staff):
        order = OrderService.checkout(
            cart_with_items,
            order_type=Order.OrderType.DELIVERY,
            notes="Less sugar",
            **staff,
        )

        assert order.notes == "Less sugar"


@pytest.mark.django_db
class TestStatusTransitions:

    def test_pending_to_preparing_to_ready(self, pending_order):
        order = OrderService.update_status(pending_order.pk, Order.OrderStatus.PREPARING)
        assert order.status == Order.OrderStatus.PREPARING

        order = OrderService.update_status(pending_order.pk, Order.OrderStatus.READY)
        assert order.status == Order.OrderStatus.READY
        assert Order.objects.get(pk=pending_order.pk).status == Order.OrderStatus.READY

    def test_active_statuses_can_move_backwards(self, pending_order):
        OrderService.update_status(pending_order.pk, Order.OrderStatus.READY)
        order = OrderService.update_status(pending_order.pk, Order.OrderStatus.PENDING)

        assert order.status == Order.OrderStatus.PENDING

    def test_current_orders_excludes_terminal(self, pending_order, cart, samosa, staff):
        CartService.add_line(cart, samosa.id)
        other = OrderService.checkout(cart, order_type=Order.OrderType.TAKEAWAY, **staff)
        OrderService.cancel_order(other.pk)

        assert [o.pk for o in OrderService.current_orders()] == [pending_order.pk]

    def test_orders_for_day(self, pending_order):
        today = timezone.localdate()

        assert [o.pk for o in OrderService.orders_for_day(today)] == [pending_order.pk]
        assert OrderService.orders_for_day(today - timedelta(days=1)) == []
        assert OrderService.orders_for_day(today, staff_id="S-999") == []


@pytest.mark.django_db
class TestCompleteOrder:
    """Taking payment"""

    def test_cash_payment_completes_order(self, pending_order):
        order = OrderService.complete_order(pending_order.pk, PaymentDetails.cash(Money(27000)))

        assert order.status == Order.OrderStatus.COMPLETED
        assert order.completed_at is not None
        assert order.payment_method == PaymentMethod.CASH
        assert order.cash_amount == Money(27000)
        assert order.upi_amount == Money(0)
        assert order.payment_total == Money(27000)

        stored = Order.objects.get(pk=pending_order.pk)
        assert stored.status == Order.OrderStatus.COMPLETED
        assert stored.payment_details == PaymentDetails.cash(Money(27000))

    def test_upi_payment(self, pending_order):
        order = OrderService.complete_order(pending_order.pk, PaymentDetails.upi(Money(27000)))

        assert order.payment_method == PaymentMethod.UPI
        assert order.cash_portion == Money(0)

    def test_split_payment(self, pending_order):
        details = PaymentDetails.split(Money(27000), Money(10000), Money(17000))

        order = OrderService.complete_order(pending_order.pk, details)

        assert order.payment_method == PaymentMethod.SPLIT
        assert order.cash_amount == Money(10000)
        assert order.upi_amount == Money(17000)
        assert order.cash_portion == Money(10000)

    def test_completion_from_ready(self, pending_order):
        OrderService.update_status(pending_order.pk, Order.OrderStatus.READY)

        order = OrderService.complete_order(pending_order.pk, PaymentDetails.cash(Money(27000)))

        assert order.status == Order.OrderStatus.COMPLETED

    def test_completion_accrues_loyalty(self, customer_order, customer):
        order = OrderService.complete_order(customer_order.pk, PaymentDetails.cash(Money(30000)))

        customer = Customer.objects.get(pk=customer.pk)
        assert customer.loyalty_points == 30
        assert customer.visit_count == 1
        assert customer.last_visit == order.completed_at

    def test_completion_announced_after_commit(self, pending_order, django_capture_on_commit_callbacks):
        received = []

        def handler(sender, order_id, order_number, **kwargs):
            received.append((order_id, order_number))

        order_completed.connect(handler)
        try:
            with django_capture_on_commit_callbacks(execute=False) as callbacks:
                OrderService.complete_order(pending_order.pk, PaymentDetails.cash(Money(27000)))
                assert received == []

            assert len(callbacks) == 1
            callbacks[0]()
        finally:
            order_completed.disconnect(handler)

        assert received == [(pending_order.pk, pending_order.order_number)]

    def test_failing_receiver_does_not_affect_completion(self, pending_order, django_capture_on_commit_callbacks):
        def broken(sender, **kwargs):
            raise RuntimeError("boom")

        order_completed.connect(broken)
        try:
            with django_capture_on_commit_callbacks(execute=True):
                order = OrderService.complete_order(pending_order.pk, PaymentDetails.cash(Money(27000)))
        finally:
            order_completed.disconnect(broken)

        assert order.status == Order.OrderStatus.COMPLETED
        assert Order.objects.get(pk=order.pk).status == Order.OrderStatus.COMPLETED


@pytest.mark.django_db
class TestCancelAndFlags:

    def test_cancel_pending_order(self, pending_order):
        order = OrderService.cancel_order(pending_order.pk)

        assert order.status == Order.OrderStatus.CANCELLED
        assert Order.objects.get(pk=pending_order.pk).status == Order.OrderStatus.CANCELLED

    def test_cancel_keeps_lines(self, pending_order):
        OrderService.cancel_order(pending_order.pk)

        assert OrderLine.objects.filter(order=pending_order).count() == 2

    def test_print_flags_are_idempotent(self, pending_order):
        OrderService.set_kot_printed(pending_order.pk)
        order = OrderService.set_kot_printed(pending_order.pk)

        assert order.kot_printed is True
        assert order.bill_printed is False

    def test_bill_flag_can_be_set_after_completion(self, pending_order):
        OrderService.complete_order(pending_order.pk, PaymentDetails.cash(Money(27000)))

        order = OrderService.set_bill_printed(pending_order.pk)

        assert order.bill_printed is True
        assert Order.objects.get(pk=pending_order.pk).bill_printed is True

    def test_update_notes(self, pending_order):
        order = OrderService.update_notes(pending_order.pk, "Extra hot")

        assert order.notes == "Extra hot"
        assert Order.objects.get(pk=pending_order.pk).notes == "Extra hot"

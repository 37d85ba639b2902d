"""
Order Error Handling Tests

Every rejected operation must raise its own error kind and leave the stored
order exactly as it was.
"""
import uuid
from decimal import Decimal

import pytest

from cart.models import CartLine
from customers.exceptions import CustomerNotFound
from orders.exceptions import (
    AlreadyCompleted,
    EmptyCart,
    InvalidTransition,
    MissingTable,
    OrderNotActive,
    OrderNotFound,
)
from orders.models import Order
from orders.services import OrderService
from payments.exceptions import PaymentMismatch
from payments.money import Money
from payments.settlement import PaymentDetails, PaymentMethod


@pytest.mark.django_db
class TestCheckoutErrors:

    def test_empty_cart(self, cart, staff):
        with pytest.raises(EmptyCart):
            OrderService.checkout(cart, order_type=Order.OrderType.TAKEAWAY, **staff)

        assert Order.objects.count() == 0

    def test_empty_cart_reported_before_missing_table(self, cart, staff):
        with pytest.raises(EmptyCart):
            OrderService.checkout(cart, order_type=Order.OrderType.DINE_IN, **staff)

    @pytest.mark.parametrize("table", [None, "", "   "])
    def test_dine_in_requires_table(self, cart_with_items, staff, table):
        with pytest.raises(MissingTable):
            OrderService.checkout(
                cart_with_items,
                order_type=Order.OrderType.DINE_IN,
                table_number=table,
                **staff,
            )

        assert Order.objects.count() == 0
        assert CartLine.objects.filter(cart=cart_with_items).count() == 2

    def test_unknown_customer(self, cart_with_items, staff):
        with pytest.raises(CustomerNotFound):
            OrderService.checkout(
                cart_with_items,
                order_type=Order.OrderType.TAKEAWAY,
                customer_id=uuid.uuid4(),
                **staff,
            )

        assert Order.objects.count() == 0
        assert CartLine.objects.filter(cart=cart_with_items).count() == 2

    def test_unknown_order_type(self, cart_with_items, staff):
        with pytest.raises(ValueError):
            OrderService.checkout(cart_with_items, order_type="drive-thru", **staff)


@pytest.mark.django_db
class TestPaymentErrors:

    def test_underpayment_reports_deficit(self, pending_order):
        """
        CRITICAL: Paying ₹200.00 against ₹270.00 fails with a ₹70.00 deficit
        and the order stays pending.
        """
        details = PaymentDetails(PaymentMethod.CASH, Money(27000), cash_amount=Money(20000))

        with pytest.raises(PaymentMismatch) as exc_info:
            OrderService.complete_order(pending_order.pk, details)

        assert exc_info.value.deficit == Money(7000)
        assert exc_info.value.details["deficit"] == Decimal("70.00")

        stored = Order.objects.get(pk=pending_order.pk)
        assert stored.status == Order.OrderStatus.PENDING
        assert stored.payment_method == ""
        assert stored.completed_at is None

    def test_total_must_match_order_total(self, pending_order):
        with pytest.raises(PaymentMismatch) as exc_info:
            OrderService.complete_order(pending_order.pk, PaymentDetails.cash(Money(30000)))

        assert exc_info.value.deficit == Money(-3000)

    def test_split_parts_must_add_up(self, pending_order):
        details = PaymentDetails.split(Money(27000), Money(10000), Money(10000))

        with pytest.raises(PaymentMismatch) as exc_info:
            OrderService.complete_order(pending_order.pk, details)

        assert exc_info.value.deficit == Money(7000)

    def test_failed_payment_awards_no_points(self, customer_order, customer):
        with pytest.raises(PaymentMismatch):
            OrderService.complete_order(customer_order.pk, PaymentDetails.upi(Money(100)))

        customer.refresh_from_db()
        assert customer.loyalty_points == 0
        assert customer.visit_count == 0


@pytest.mark.django_db
class TestTerminalOrderErrors:

    @pytest.fixture
    def completed_order(self, pending_order):
        return OrderService.complete_order(pending_order.pk, PaymentDetails.cash(Money(27000)))

    @pytest.fixture
    def cancelled_order(self, pending_order):
        return OrderService.cancel_order(pending_order.pk)

    def test_complete_twice(self, completed_order):
        with pytest.raises(AlreadyCompleted):
            OrderService.complete_order(completed_order.pk, PaymentDetails.upi(Money(27000)))

        stored = Order.objects.get(pk=completed_order.pk)
        assert stored.payment_method == "cash"
        assert stored.completed_at == completed_order.completed_at

    def test_complete_cancelled_order(self, cancelled_order):
        with pytest.raises(OrderNotActive):
            OrderService.complete_order(cancelled_order.pk, PaymentDetails.cash(Money(27000)))

        assert Order.objects.get(pk=cancelled_order.pk).payment_method == ""

    def test_cancel_completed_order(self, completed_order):
        with pytest.raises(OrderNotActive):
            OrderService.cancel_order(completed_order.pk)

        assert Order.objects.get(pk=completed_order.pk).status == Order.OrderStatus.COMPLETED

    def test_cancel_twice(self, cancelled_order):
        with pytest.raises(OrderNotActive):
            OrderService.cancel_order(cancelled_order.pk)

    @pytest.mark.parametrize("target", ["pending", "preparing", "ready"])
    def test_status_change_on_completed_order(self, completed_order, target):
        with pytest.raises(InvalidTransition):
            OrderService.update_status(completed_order.pk, target)

        assert Order.objects.get(pk=completed_order.pk).status == Order.OrderStatus.COMPLETED

    def test_status_change_on_cancelled_order(self, cancelled_order):
        with pytest.raises(InvalidTransition):
            OrderService.update_status(cancelled_order.pk, Order.OrderStatus.PREPARING)

    @pytest.mark.parametrize("target", ["completed", "cancelled", "served"])
    def test_update_status_cannot_reach_terminal_or_unknown(self, pending_order, target):
        with pytest.raises(InvalidTransition):
            OrderService.update_status(pending_order.pk, target)

        assert Order.objects.get(pk=pending_order.pk).status == Order.OrderStatus.PENDING

    def test_notes_locked_after_completion(self, completed_order):
        with pytest.raises(OrderNotActive):
            OrderService.update_notes(completed_order.pk, "too late")


@pytest.mark.django_db
class TestUnknownOrder:

    @pytest.mark.parametrize("order_id", [uuid.uuid4(), "not-a-uuid"])
    def test_unknown_order(self, order_id):
        with pytest.raises(OrderNotFound):
            OrderService.get_order(order_id)
        with pytest.raises(OrderNotFound):
            OrderService.complete_order(order_id, PaymentDetails.cash(Money(100)))
        with pytest.raises(OrderNotFound):
            OrderService.cancel_order(order_id)
        with pytest.raises(OrderNotFound):
            OrderService.update_status(order_id, "ready")

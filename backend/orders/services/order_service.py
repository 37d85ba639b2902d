from datetime import date
from typing import List, Optional
import logging

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from cart.models import Cart
from cart.services import CartService
from core_backend.exceptions import store_guard
from customers.services import LoyaltyService
from orders.exceptions import (
    AlreadyCompleted,
    EmptyCart,
    InvalidTransition,
    MissingTable,
    OrderNotActive,
    OrderNotFound,
)
from orders.models import Order, OrderLine
from orders.signals import order_completed
from payments.settlement import PaymentDetails, validate_payment

logger = logging.getLogger(__name__)


class OrderService:
    """
    Core service for the order lifecycle: checkout, status changes, payment
    completion and cancellation.

    Every mutation takes an order id, re-reads the row under a lock inside a
    transaction and writes with a conditional UPDATE on the expected status.
    The order handed back is only updated after that write succeeded.
    """

    # Valid status transitions for order state machine
    VALID_STATUS_TRANSITIONS = {
        Order.OrderStatus.PENDING: [
            Order.OrderStatus.PENDING,
            Order.OrderStatus.PREPARING,
            Order.OrderStatus.READY,
        ],
        Order.OrderStatus.PREPARING: [
            Order.OrderStatus.PENDING,
            Order.OrderStatus.PREPARING,
            Order.OrderStatus.READY,
        ],
        Order.OrderStatus.READY: [
            Order.OrderStatus.PENDING,
            Order.OrderStatus.PREPARING,
            Order.OrderStatus.READY,
        ],
        # completed/cancelled are reached only via complete_order/cancel_order
        Order.OrderStatus.COMPLETED: [],
        Order.OrderStatus.CANCELLED: [],
    }

    # --- Reads ---

    @staticmethod
    def get_order(order_id) -> Order:
        with store_guard("order lookup"):
            try:
                return Order.objects.select_related("customer").get(pk=order_id)
            except (Order.DoesNotExist, ValidationError, ValueError):
                raise OrderNotFound(order_id)

    @staticmethod
    def sync(order: Order) -> Order:
        """Re-read an order from the database."""
        return OrderService.get_order(order.pk)

    @staticmethod
    def current_orders() -> List[Order]:
        """Orders still in the kitchen/front-of-house flow, oldest first."""
        with store_guard("current orders"):
            return list(
                Order.objects.filter(status__in=Order.ACTIVE_STATUSES)
                .select_related("customer")
                .prefetch_related("lines")
                .order_by("created_at")
            )

    @staticmethod
    def orders_for_day(day: Optional[date] = None, staff_id=None) -> List[Order]:
        """All orders placed on a local calendar day (today by default)."""
        day = day or timezone.localdate()
        queryset = Order.objects.filter(created_at__date=day)
        if staff_id:
            queryset = queryset.filter(staff_id=staff_id)
        with store_guard("orders for day"):
            return list(queryset.prefetch_related("lines").order_by("created_at"))

    @staticmethod
    def _lock(order_id) -> Order:
        try:
            return Order.objects.select_for_update().get(pk=order_id)
        except (Order.DoesNotExist, ValidationError, ValueError):
            raise OrderNotFound(order_id)

    # --- Checkout ---

    @staticmethod
    def checkout(
        cart: Cart,
        order_type: str,
        staff_id,
        staff_name: str,
        table_number: Optional[str] = None,
        customer_id=None,
        notes: str = "",
    ) -> Order:
        """
        Turns a cart into a pending order.

        Every line is copied with its snapshot name and price, the totals are
        computed once from the cart and stored, and the cart is cleared, all
        in one transaction.

        Raises:
            EmptyCart: the cart has no lines
            MissingTable: dine-in without a table number
            CustomerNotFound: customer_id does not resolve
            ValueError: unknown order type
        """
        if order_type not in Order.OrderType.values:
            raise ValueError(f"'{order_type}' is not a valid order type.")
        table_number = (table_number or "").strip()

        with store_guard("checkout"), transaction.atomic():
            locked = Cart.objects.select_for_update().get(pk=cart.pk)
            lines = list(locked.lines.all())
            if not lines:
                raise EmptyCart()

            if order_type == Order.OrderType.DINE_IN and not table_number:
                raise MissingTable()
            if order_type != Order.OrderType.DINE_IN:
                table_number = ""

            customer = LoyaltyService.get_customer(customer_id) if customer_id else None
            totals = CartService.get_totals(locked)

            order = Order.objects.create(
                order_type=order_type,
                table_number=table_number,
                customer=customer,
                staff_id=str(staff_id),
                staff_name=staff_name,
                subtotal_amount=totals["subtotal"],
                discount_amount=totals["discount"],
                total_amount=totals["total"],
                notes=notes or "",
            )
            OrderLine.objects.bulk_create(
                [
                    OrderLine(
                        order=order,
                        item_id=line.item_id,
                        name=line.name,
                        unit_price=line.unit_price,
                        quantity=line.quantity,
                        category=line.category,
                        position=position,
                    )
                    for position, line in enumerate(lines, start=1)
                ]
            )
            CartService.clear(locked)

        cart.discount_type = locked.discount_type
        cart.discount_percent = locked.discount_percent
        cart.discount_fixed = locked.discount_fixed

        logger.info(
            f"Order {order.order_number} created by {staff_name} ({order_type}"
            f"{', table ' + table_number if table_number else ''}) total {order.total_amount}"
        )
        return order

    # --- Status ---

    @staticmethod
    def update_status(order_id, new_status: str) -> Order:
        """
        Moves an active order between pending, preparing and ready.

        Raises:
            InvalidTransition: the order is completed/cancelled, or new_status
                is not one of the three active states
        """
        with store_guard("update order status"), transaction.atomic():
            order = OrderService._lock(order_id)

            if new_status not in OrderService.VALID_STATUS_TRANSITIONS.get(order.status, []):
                raise InvalidTransition(order, new_status)

            now = timezone.now()
            updated = Order.objects.filter(
                pk=order.pk, status__in=Order.ACTIVE_STATUSES
            ).update(status=new_status, updated_at=now)
            if not updated:
                raise InvalidTransition(OrderService._lock(order.pk), new_status)

        order.status = new_status
        order.updated_at = now
        logger.info(f"Order {order.order_number} -> {new_status}")
        return order

    @staticmethod
    def ensure_completable(order: Order):
        """
        Raises AlreadyCompleted or OrderNotActive for an order that cannot take
        payment. Order state is checked before any tender is looked at.
        """
        if order.status == Order.OrderStatus.COMPLETED or order.payment_method:
            raise AlreadyCompleted(order)
        if not order.is_active:
            raise OrderNotActive(order)

    @staticmethod
    def complete_order(order_id, payment_details: PaymentDetails) -> Order:
        """
        Takes payment for an order and closes it.

        The settlement must match the order's stored total exactly. Status,
        completed_at and the payment columns are written in one conditional
        UPDATE that only matches an active, unpaid order, so of two
        concurrent completions exactly one wins. Loyalty is accrued in the same
        transaction; order_completed is sent only once it has committed.

        Raises:
            OrderNotFound, AlreadyCompleted, OrderNotActive,
            PaymentMismatch: with the deficit (order total minus paid)
        """
        with store_guard("complete order"), transaction.atomic():
            order = OrderService._lock(order_id)
            OrderService.ensure_completable(order)
            validate_payment(payment_details, order.total_amount)

            completed_at = timezone.now()
            updated = Order.objects.filter(
                pk=order.pk,
                status__in=Order.ACTIVE_STATUSES,
                payment_method="",
            ).update(
                status=Order.OrderStatus.COMPLETED,
                completed_at=completed_at,
                updated_at=completed_at,
                payment_method=payment_details.method,
                cash_amount=payment_details.cash_amount,
                upi_amount=payment_details.upi_amount,
                payment_total=payment_details.total,
            )
            if not updated:
                current = Order.objects.get(pk=order.pk)
                OrderService.ensure_completable(current)
                raise AlreadyCompleted(current)

            order.refresh_from_db()
            points = LoyaltyService.accrue_for_order(order)

            order_id, order_number = order.pk, order.order_number
            transaction.on_commit(
                lambda: OrderService._announce_completion(order_id, order_number)
            )

        logger.info(
            f"Order {order.order_number} completed: {payment_details.method} "
            f"{payment_details.total} (cash {payment_details.cash_amount}, "
            f"upi {payment_details.upi_amount}), {points} loyalty points"
        )
        return order

    @staticmethod
    def _announce_completion(order_id, order_number):
        results = order_completed.send_robust(
            sender=Order, order_id=order_id, order_number=order_number
        )
        for receiver, response in results:
            if isinstance(response, Exception):
                logger.warning(
                    f"order_completed receiver {getattr(receiver, '__name__', receiver)} "
                    f"failed for {order_number}: {response}",
                    exc_info=response,
                )

    @staticmethod
    def cancel_order(order_id) -> Order:
        """
        Cancels an active order.

        Raises:
            OrderNotActive: the order is already completed or cancelled
        """
        with store_guard("cancel order"), transaction.atomic():
            order = OrderService._lock(order_id)
            if not order.is_active:
                raise OrderNotActive(order)

            now = timezone.now()
            updated = Order.objects.filter(
                pk=order.pk, status__in=Order.ACTIVE_STATUSES
            ).update(status=Order.OrderStatus.CANCELLED, updated_at=now)
            if not updated:
                raise OrderNotActive(Order.objects.get(pk=order.pk))

        order.status = Order.OrderStatus.CANCELLED
        order.updated_at = now
        logger.info(f"Order {order.order_number} cancelled")
        return order

    # --- Print flags and notes ---

    @staticmethod
    def _set_flag(order_id, flag: str) -> Order:
        with store_guard(f"set {flag}"), transaction.atomic():
            order = OrderService._lock(order_id)
            if not getattr(order, flag):
                now = timezone.now()
                Order.objects.filter(pk=order.pk, **{flag: False}).update(
                    **{flag: True, "updated_at": now}
                )
                setattr(order, flag, True)
                order.updated_at = now
        return order

    @staticmethod
    def set_kot_printed(order_id) -> Order:
        """Marks the KOT as printed. Calling it again is a no-op."""
        return OrderService._set_flag(order_id, "kot_printed")

    @staticmethod
    def set_bill_printed(order_id) -> Order:
        """Marks the bill as printed. Calling it again is a no-op."""
        return OrderService._set_flag(order_id, "bill_printed")

    @staticmethod
    def update_notes(order_id, notes: str) -> Order:
        with store_guard("update order notes"), transaction.atomic():
            order = OrderService._lock(order_id)
            if not order.is_active:
                raise OrderNotActive(order)

            now = timezone.now()
            Order.objects.filter(pk=order.pk).update(notes=notes or "", updated_at=now)

        order.notes = notes or ""
        order.updated_at = now
        return order

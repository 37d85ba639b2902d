"""
Loyalty services: accrual on order completion and explicit redemption.
"""
import logging

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import F

from core_backend.config import app_settings
from core_backend.exceptions import store_guard

from .exceptions import CustomerNotFound, InsufficientPoints
from .models import Customer

logger = logging.getLogger(__name__)


class LoyaltyService:
    """
    Points are only moved with conditional UPDATEs, so the balance in the
    database is the single source of truth and never goes negative, even with
    two tills redeeming at once.
    """

    @staticmethod
    def get_customer(customer_id) -> Customer:
        with store_guard("customer lookup"):
            try:
                return Customer.objects.get(pk=customer_id)
            except (Customer.DoesNotExist, ValidationError, ValueError):
                raise CustomerNotFound(customer_id)

    @staticmethod
    def balance(customer_id) -> int:
        return LoyaltyService.get_customer(customer_id).loyalty_points

    @staticmethod
    def accrue_for_order(order) -> int:
        """
        Credit a completed order to its customer.

        Bumps visit_count, sets last_visit to the order's completion time and
        adds the points the configured rule awards for the order total. Meant
        to run inside the completion transaction; returns the points awarded.
        An order without a customer, or whose customer record has gone, earns
        nothing.
        """
        if not order.customer_id:
            return 0

        points = app_settings.get_loyalty_rule().points_for(order.total_amount)

        with store_guard("loyalty accrual"):
            updated = Customer.objects.filter(pk=order.customer_id).update(
                loyalty_points=F("loyalty_points") + points,
                visit_count=F("visit_count") + 1,
                last_visit=order.completed_at,
            )

        if not updated:
            logger.warning(
                f"Order {order.order_number} references missing customer {order.customer_id}; "
                f"no loyalty accrued"
            )
            return 0

        logger.info(f"Customer {order.customer_id} earned {points} points on order {order.order_number}")
        return points

    @staticmethod
    @transaction.atomic
    def redeem_points(customer_id, points: int) -> int:
        """
        Take `points` off a customer's balance and return the new balance.

        Raises:
            ValueError: if points is not a positive integer
            CustomerNotFound: unknown customer
            InsufficientPoints: points exceeds the current balance (balance unchanged)
        """
        if isinstance(points, bool) or not isinstance(points, int) or points <= 0:
            raise ValueError("Points to redeem must be a positive integer")

        customer = LoyaltyService.get_customer(customer_id)

        with store_guard("loyalty redemption"):
            updated = Customer.objects.filter(
                pk=customer.pk, loyalty_points__gte=points
            ).update(loyalty_points=F("loyalty_points") - points)
            customer.refresh_from_db(fields=["loyalty_points"])

        if not updated:
            logger.info(
                f"Redemption of {points} points refused for customer {customer_id} "
                f"(balance {customer.loyalty_points})"
            )
            raise InsufficientPoints(points, customer.loyalty_points)

        logger.info(f"Customer {customer_id} redeemed {points} points, balance {customer.loyalty_points}")
        return customer.loyalty_points

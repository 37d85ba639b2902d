"""
Post-completion customer notifications.

Dispatch is fire-and-forget relative to the order: it is queued only after
the completion has committed, runs in a Celery worker, is attempted once and
never retried. Every outcome (sent, failed, skipped) is recorded on the
OrderNotification row so staff can see it; none of them touch the order.
"""
import logging
from typing import Optional

from django.utils import timezone

from core_backend.config import app_settings
from core_backend.exceptions import store_guard
from orders.models import Order

from .messages import build_order_summary
from .models import OrderNotification

logger = logging.getLogger(__name__)


class NotificationService:

    @staticmethod
    def queue_completion_notice(order_id) -> Optional[OrderNotification]:
        """
        Record and enqueue the completion notice for an order.

        Returns the notification row, or None when the order has no customer.
        A second call for the same order returns the existing row without
        enqueueing again.
        """
        with store_guard("queue completion notice"):
            order = Order.objects.select_related("customer").get(pk=order_id)
            if order.customer is None:
                logger.debug(f"Order {order.order_number} has no customer; no notification")
                return None

            phone = order.customer.phone
            defaults = {"recipient": phone}
            if not phone:
                defaults.update(
                    status=OrderNotification.Status.SKIPPED,
                    error="Customer has no phone number",
                )

            notification, created = OrderNotification.objects.get_or_create(
                order=order, kind=OrderNotification.Kind.COMPLETION, defaults=defaults
            )

        if not created:
            logger.info(f"Completion notice for order {order.order_number} already recorded ({notification.status})")
            return notification

        if notification.status == OrderNotification.Status.SKIPPED:
            logger.info(f"Completion notice for order {order.order_number} skipped: {notification.error}")
            return notification

        from .tasks import send_order_completion_notification

        try:
            send_order_completion_notification.delay(str(notification.pk))
        except Exception as exc:
            # Broker unreachable; the order stays completed either way
            logger.warning(
                f"Could not enqueue completion notice for order {order.order_number}: {exc}",
                exc_info=True,
            )
            OrderNotification.objects.filter(pk=notification.pk).update(
                status=OrderNotification.Status.FAILED, error=f"Enqueue failed: {exc}"
            )
            notification.refresh_from_db()

        return notification

    @staticmethod
    def deliver(notification_id) -> OrderNotification:
        """
        Send one pending notification through the configured backend.

        The row is claimed with a conditional UPDATE first, so a duplicated
        task delivery cannot send twice.
        """
        claimed = OrderNotification.objects.filter(
            pk=notification_id,
            status=OrderNotification.Status.PENDING,
            attempted_at__isnull=True,
        ).update(attempted_at=timezone.now())

        notification = OrderNotification.objects.select_related("order", "order__customer").get(
            pk=notification_id
        )
        if not claimed:
            logger.info(f"Notification {notification_id} already attempted ({notification.status}); skipping")
            return notification

        order = notification.order
        backend = app_settings.get_notification_backend()

        try:
            delivered = backend.notify(notification.recipient, build_order_summary(order))
            error = "" if delivered else "Backend reported failure"
        except Exception as exc:
            logger.error(f"Notification for order {order.order_number} failed: {exc}", exc_info=True)
            delivered, error = False, str(exc) or exc.__class__.__name__

        if delivered:
            notification.status = OrderNotification.Status.SENT
            notification.sent_at = timezone.now()
            logger.info(f"Completion notice sent for order {order.order_number} to {notification.recipient}")
        else:
            notification.status = OrderNotification.Status.FAILED
            logger.warning(f"Completion notice for order {order.order_number} not delivered: {error}")
        notification.error = error
        notification.save(update_fields=["status", "sent_at", "error"])
        return notification

from django.dispatch import receiver
import logging

from orders.signals import order_completed

from .services import NotificationService

logger = logging.getLogger(__name__)


@receiver(order_completed)
def queue_order_completion_notice(sender, order_id, order_number=None, **kwargs):
    """
    Receiver for order_completed (sent after the completion has committed).

    Failures are logged and swallowed: payment has already been collected,
    so nothing here may surface as an error on the completion.
    """
    try:
        NotificationService.queue_completion_notice(order_id)
    except Exception as exc:
        logger.warning(f"Completion notice for order {order_number or order_id} not queued: {exc}", exc_info=True)

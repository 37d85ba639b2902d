from celery import shared_task
import logging

from .services import NotificationService

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=0, ignore_result=True)
def send_order_completion_notification(self, notification_id):
    """
    Async task to deliver an order completion notice.

    Queued after the completion transaction commits. A single attempt:
    failures are recorded on the notification row, never retried.

    Args:
        notification_id: UUID of the OrderNotification to deliver

    Returns:
        dict: Status of the delivery
    """
    logger.info(f"Delivering notification {notification_id}")
    notification = NotificationService.deliver(notification_id)
    return {
        "status": notification.status,
        "notification_id": str(notification_id),
        "order_id": str(notification.order_id),
    }

"""
Customer notification backends.

The active backend is chosen by dotted path in
CAFE_POS["NOTIFICATION_BACKEND"]. notify() returns True on delivery; it may
return False or raise, and the caller records either as a failure.
"""
import logging

import requests

from core_backend.config import app_settings

from .messages import render_completion_message

logger = logging.getLogger(__name__)


class NotificationBackend:
    """Base class for notification backends."""

    def __init__(self, **options):
        self.options = options

    def notify(self, contact: str, summary: dict) -> bool:
        raise NotImplementedError

    def render(self, summary: dict) -> str:
        return render_completion_message(summary, app_settings.PRINT["CAFE_NAME"])


class LoggingNotificationBackend(NotificationBackend):
    """Logs the message that would have been sent. Default in development."""

    def notify(self, contact: str, summary: dict) -> bool:
        logger.info(f"Would send notification to {contact}:\n{self.render(summary)}")
        return True


class WhatsAppNotificationBackend(NotificationBackend):
    """
    Sends the completion message through an HTTP WhatsApp gateway.

    Configured by CAFE_POS["WHATSAPP"]: API_URL, API_KEY (sent as a bearer
    token) and TIMEOUT in seconds.
    """

    def __init__(self, api_url=None, api_key=None, timeout=None, **options):
        super().__init__(**options)
        config = app_settings.WHATSAPP
        self.api_url = api_url or config["API_URL"]
        self.api_key = api_key or config["API_KEY"]
        self.timeout = timeout or config["TIMEOUT"]

    def notify(self, contact: str, summary: dict) -> bool:
        if not self.api_url or not self.api_key:
            raise RuntimeError("WhatsApp API is not configured")

        response = requests.post(
            self.api_url,
            json={"phone": contact, "message": self.render(summary)},
            headers={"Authorization": f"Bearer {self.api_key}"},
            timeout=self.timeout,
        )
        response.raise_for_status()
        logger.info(f"WhatsApp notification for order {summary['order_number']} accepted ({response.status_code})")
        return True

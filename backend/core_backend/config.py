"""
Centralized access to the CAFE_POS settings block.

Follows a lazy singleton: the settings dict is merged with defaults on first
attribute access, so importing this module never touches django.conf before
the app registry is ready. Pluggable collaborators (printer, notification
backend, loyalty rule) are resolved here from dotted paths once and then
handed to the services that need them.
"""

import copy
import logging
from typing import Any, Dict, Optional

from django.conf import settings
from django.core.signals import setting_changed
from django.dispatch import receiver
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)


DEFAULTS: Dict[str, Any] = {
    "CURRENCY": "INR",
    "LOYALTY_RULE": "customers.loyalty.ProportionalAccrualRule",
    "LOYALTY_RUPEES_PER_POINT": 10,
    "PRINTER_BACKEND": "printing.backends.ConsolePrinterBackend",
    "PRINTER_OPTIONS": {},
    "NOTIFICATION_BACKEND": "notifications.backends.LoggingNotificationBackend",
    "WHATSAPP": {"API_URL": "", "API_KEY": "", "TIMEOUT": 10},
    "PRINT": {
        "CAFE_NAME": "CAFE",
        "ADDRESS_LINES": [],
        "BILL_FOOTER": "",
        "KOT_FOOTER": "",
        "KOT_SHOW_TABLE": True,
        "KOT_SHOW_TIME": True,
        "KOT_SHOW_SERVER": True,
        "BILL_ITEMIZED": True,
        "BILL_SHOW_CUSTOMER": True,
    },
}


class AppSettings:
    """
    Lazy singleton over settings.CAFE_POS.

    Nested dicts (PRINT, WHATSAPP) are merged key by key so a deployment only
    has to override what it changes.
    """

    _instance: Optional["AppSettings"] = None

    def __new__(cls) -> "AppSettings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._values = None
            cls._instance._components = {}
        return cls._instance

    def _load(self) -> Dict[str, Any]:
        values = copy.deepcopy(DEFAULTS)
        user_values = getattr(settings, "CAFE_POS", {}) or {}
        for key, value in user_values.items():
            if isinstance(value, dict) and isinstance(values.get(key), dict):
                values[key].update(value)
            else:
                values[key] = value
        return values

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        if self._values is None:
            self._values = self._load()
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(f"'AppSettings' object has no attribute '{name}'")

    def reload(self) -> None:
        """Drop cached values and built components (used when settings change)."""
        self._values = None
        self._components = {}

    def _component(self, setting_name: str, **kwargs):
        if setting_name not in self._components:
            dotted_path = getattr(self, setting_name)
            component_class = import_string(dotted_path)
            self._components[setting_name] = component_class(**kwargs)
            logger.debug(f"Configured {setting_name} -> {dotted_path}")
        return self._components[setting_name]

    def get_printer(self):
        return self._component("PRINTER_BACKEND", **self.PRINTER_OPTIONS)

    def get_notification_backend(self):
        return self._component("NOTIFICATION_BACKEND")

    def get_loyalty_rule(self):
        return self._component(
            "LOYALTY_RULE", rupees_per_point=self.LOYALTY_RUPEES_PER_POINT
        )


app_settings = AppSettings()


@receiver(setting_changed)
def reload_app_settings(*, setting, **kwargs):
    if setting == "CAFE_POS":
        app_settings.reload()

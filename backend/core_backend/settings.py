"""
Django settings for the café POS backend.

Values that differ per deployment are read from the environment; everything
specific to the order/payment engine lives in the CAFE_POS dict and is read
through core_backend.config.app_settings.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "insecure-dev-key-change-me")
DEBUG = env_bool("DJANGO_DEBUG", True)
ALLOWED_HOSTS = [h for h in os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Third party
    "rest_framework",
    "django_filters",
    # Local apps
    "core_backend",
    "payments",
    "menu",
    "customers",
    "cart",
    "orders",
    "cash_drawer",
    "printing",
    "notifications",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "core_backend.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "core_backend.wsgi.application"

# --- Database ---
# SQLite by default so the engine runs out of the box; point DATABASE_ENGINE at
# postgresql in production to get real row locks for select_for_update().
DATABASE_ENGINE = os.environ.get("DATABASE_ENGINE", "sqlite3")

if DATABASE_ENGINE == "sqlite3":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": os.environ.get("DATABASE_NAME", str(BASE_DIR / "db.sqlite3")),
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": f"django.db.backends.{DATABASE_ENGINE}",
            "NAME": os.environ.get("DATABASE_NAME", "cafe_pos"),
            "USER": os.environ.get("DATABASE_USER", "postgres"),
            "PASSWORD": os.environ.get("DATABASE_PASSWORD", ""),
            "HOST": os.environ.get("DATABASE_HOST", "localhost"),
            "PORT": os.environ.get("DATABASE_PORT", "5432"),
            "CONN_MAX_AGE": int(os.environ.get("DATABASE_CONN_MAX_AGE", "60")),
        }
    }

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# --- Internationalization ---
LANGUAGE_CODE = "en-us"
TIME_ZONE = os.environ.get("TIME_ZONE", "Asia/Kolkata")
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# --- Django REST Framework ---
REST_FRAMEWORK = {
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "DEFAULT_FILTER_BACKENDS": [
        "django_filters.rest_framework.DjangoFilterBackend",
    ],
    "DEFAULT_PAGINATION_CLASS": "core_backend.base.pagination.StandardPagination",
    "PAGE_SIZE": 50,
    "EXCEPTION_HANDLER": "core_backend.exceptions.api_exception_handler",
}

# --- Celery ---
CELERY_BROKER_URL = os.environ.get("CELERY_BROKER_URL", "redis://localhost:6379/0")
CELERY_RESULT_BACKEND = os.environ.get("CELERY_RESULT_BACKEND", None)
CELERY_TASK_ALWAYS_EAGER = env_bool("CELERY_TASK_ALWAYS_EAGER", False)
CELERY_TASK_EAGER_PROPAGATES = False
CELERY_ACCEPT_CONTENT = ["json"]
CELERY_TASK_SERIALIZER = "json"
CELERY_RESULT_SERIALIZER = "json"
CELERY_TIMEZONE = TIME_ZONE

# --- Café POS engine ---
CAFE_POS = {
    "CURRENCY": os.environ.get("CAFE_POS_CURRENCY", "INR"),
    "LOYALTY_RULE": "customers.loyalty.ProportionalAccrualRule",
    "LOYALTY_RUPEES_PER_POINT": int(os.environ.get("CAFE_POS_RUPEES_PER_POINT", "10")),
    "PRINTER_BACKEND": os.environ.get(
        "CAFE_POS_PRINTER_BACKEND", "printing.backends.ConsolePrinterBackend"
    ),
    "PRINTER_OPTIONS": {
        "host": os.environ.get("CAFE_POS_PRINTER_HOST", ""),
        "port": int(os.environ.get("CAFE_POS_PRINTER_PORT", "9100")),
    },
    "NOTIFICATION_BACKEND": os.environ.get(
        "CAFE_POS_NOTIFICATION_BACKEND", "notifications.backends.LoggingNotificationBackend"
    ),
    "WHATSAPP": {
        "API_URL": os.environ.get("WHATSAPP_API_URL", ""),
        "API_KEY": os.environ.get("WHATSAPP_API_KEY", ""),
        "TIMEOUT": 10,
    },
    "PRINT": {
        "CAFE_NAME": os.environ.get("CAFE_POS_NAME", "MIR CAFE"),
        "ADDRESS_LINES": ["123 Main Street, City", "Phone: +91 98765 43210"],
        "BILL_FOOTER": "Thank you for visiting! We hope to see you again soon!",
        "KOT_FOOTER": "",
        "KOT_SHOW_TABLE": True,
        "KOT_SHOW_TIME": True,
        "KOT_SHOW_SERVER": True,
        "BILL_ITEMIZED": True,
        "BILL_SHOW_CUSTOMER": True,
    },
}

# --- Logging ---
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{asctime} {levelname} {name} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": os.environ.get("DJANGO_LOG_LEVEL", "INFO"),
    },
    "loggers": {
        "django.db.backends": {
            "handlers": ["console"],
            "level": "WARNING",
            "propagate": False,
        },
    },
}

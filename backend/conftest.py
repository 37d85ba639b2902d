"""
Root conftest.py for all backend tests.

This file makes fixtures available to all test files across all apps.
"""
import pytest

from core_backend.celery import app as celery_app
from core_backend.config import app_settings


# ============================================================================
# AUTO-USE FIXTURES (Run automatically for every test)
# ============================================================================

@pytest.fixture(autouse=True)
def reset_app_settings():
    """
    Drop cached CAFE_POS values and built backends after each test.

    The printer backend is a shared instance; without this a test that
    disconnects it would leak into the next one.
    """
    app_settings.reload()
    yield
    app_settings.reload()


@pytest.fixture(autouse=True)
def celery_eager():
    """
    Run Celery tasks inline so post-commit notification delivery can be
    asserted without a broker.
    """
    previous = celery_app.conf.task_always_eager
    celery_app.conf.CELERY_TASK_ALWAYS_EAGER = True
    yield
    celery_app.conf.CELERY_TASK_ALWAYS_EAGER = previous


# ============================================================================
# API CLIENT FIXTURES
# ============================================================================

@pytest.fixture
def api_client():
    """
    Provide DRF API client for API tests.

    Usage:
        def test_my_api(api_client):
            response = api_client.get('/api/orders/')
            assert response.status_code == 200
    """
    from rest_framework.test import APIClient
    return APIClient()


# ============================================================================
# IMPORT ALL FIXTURES FROM core_backend/tests/fixtures.py
# ============================================================================
from core_backend.tests.fixtures import *  # noqa

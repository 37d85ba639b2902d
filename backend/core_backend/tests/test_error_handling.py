"""
Global Error Handling & Framework-Level Tests

How engine errors are rendered by the API, and how a lost database
connection surfaces as StoreUnavailable.
"""
from unittest.mock import patch

import pytest
from django.db import IntegrityError, InterfaceError, OperationalError

from core_backend.exceptions import CafePOSError, StoreUnavailable, store_guard
from orders.exceptions import EmptyCart
from orders.models import Order
from orders.services import OrderService
from payments.exceptions import PaymentMismatch
from payments.money import Money


class TestCafePOSError:

    def test_as_dict_includes_kind_and_details(self):
        error = PaymentMismatch(Money(7000, "INR"))

        assert error.as_dict() == {
            "error": "PaymentMismatch",
            "detail": "Payment is short by ₹70.00",
            "deficit": "70.00",
        }

    def test_default_message(self):
        assert EmptyCart().message == "Cannot check out an empty cart"
        assert str(CafePOSError()) == CafePOSError.default_message


class TestStoreGuard:

    @pytest.mark.parametrize("error", [OperationalError("database is locked"), InterfaceError("closed")])
    def test_connection_errors_become_store_unavailable(self, error):
        with pytest.raises(StoreUnavailable) as exc_info:
            with store_guard("test"):
                raise error

        assert exc_info.value.__cause__ is error

    def test_integrity_errors_pass_through(self):
        with pytest.raises(IntegrityError):
            with store_guard("test"):
                raise IntegrityError("duplicate")


@pytest.mark.django_db
class TestStoreUnavailable:

    def test_failed_write_leaves_order_unchanged(self, pending_order):
        with patch.object(Order.objects, "select_for_update", side_effect=OperationalError("gone away")):
            with pytest.raises(StoreUnavailable):
                OrderService.cancel_order(pending_order.pk)

        assert Order.objects.get(pk=pending_order.pk).status == Order.OrderStatus.PENDING

    def test_rendered_as_503(self, api_client, pending_order):
        with patch.object(Order.objects, "select_for_update", side_effect=OperationalError("gone away")):
            response = api_client.post(f"/api/orders/{pending_order.id}/cancel/")

        assert response.status_code == 503
        assert response.data["error"] == "StoreUnavailable"


@pytest.mark.django_db
class TestGlobalAPIErrorResponses:

    def test_health_check(self, api_client):
        response = api_client.get("/api/health/")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_malformed_json_request_returns_400(self, api_client):
        response = api_client.post(
            "/api/orders/checkout/",
            data="{not json",
            content_type="application/json",
        )

        assert response.status_code == 400

    def test_drf_validation_errors_keep_default_shape(self, api_client):
        response = api_client.post("/api/orders/checkout/", {}, format="json")

        assert response.status_code == 400
        assert "staff_id" in response.data
        assert "error" not in response.data

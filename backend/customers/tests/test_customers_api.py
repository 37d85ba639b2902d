import uuid

import pytest

from customers.models import Customer


@pytest.mark.django_db
class TestCustomersAPI:

    def test_create_customer(self, api_client):
        response = api_client.post(
            "/api/customers/",
            {"name": "Kavya", "phone": "+919812345678", "loyalty_points": 500},
            format="json",
        )

        assert response.status_code == 201
        assert response.data["loyalty_points"] == 0
        assert Customer.objects.get(name="Kavya").loyalty_points == 0

    def test_lookup_by_phone(self, api_client, customer):
        response = api_client.get("/api/customers/", {"phone": customer.phone})

        assert response.status_code == 200
        assert [c["name"] for c in response.data["results"]] == ["Ravi"]

    def test_balance(self, api_client, customer):
        response = api_client.get(f"/api/customers/{customer.id}/balance/")

        assert response.status_code == 200
        assert response.data["loyalty_points"] == 0

    def test_balance_unknown_customer(self, api_client):
        response = api_client.get(f"/api/customers/{uuid.uuid4()}/balance/")

        assert response.status_code == 404
        assert response.data["error"] == "CustomerNotFound"

    def test_redeem(self, api_client, customer):
        Customer.objects.filter(pk=customer.pk).update(loyalty_points=25)

        response = api_client.post(f"/api/customers/{customer.id}/redeem/", {"points": 10}, format="json")

        assert response.status_code == 200
        assert response.data["loyalty_points"] == 15

    def test_redeem_insufficient(self, api_client, customer):
        response = api_client.post(f"/api/customers/{customer.id}/redeem/", {"points": 10}, format="json")

        assert response.status_code == 409
        assert response.data["error"] == "InsufficientPoints"
        assert response.data["available"] == "0"

    def test_redeem_zero_rejected(self, api_client, customer):
        response = api_client.post(f"/api/customers/{customer.id}/redeem/", {"points": 0}, format="json")

        assert response.status_code == 400

from rest_framework import serializers

from orders.models import Order
from payments.serializers import TenderSerializer


class CheckoutSerializer(serializers.Serializer):
    """
    Request body format:
    {
        "staff_id": "S-001",
        "staff_name": "Asha",
        "order_type": "dine-in",
        "table_number": "5",
        "customer_id": "uuid",
        "notes": "Less sugar"
    }

    Table and cart rules are checked by OrderService so the UI gets the
    MissingTable/EmptyCart kinds.
    """

    staff_id = serializers.CharField(max_length=64)
    staff_name = serializers.CharField(max_length=150)
    order_type = serializers.ChoiceField(choices=Order.OrderType.choices)
    table_number = serializers.CharField(max_length=10, required=False, allow_blank=True, default="")
    customer_id = serializers.UUIDField(required=False, allow_null=True, default=None)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class UpdateOrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.OrderStatus.choices)


class CompleteOrderSerializer(TenderSerializer):
    """Tendered amounts; change is worked out against the order's stored total."""


class UpdateNotesSerializer(serializers.Serializer):
    notes = serializers.CharField(allow_blank=True)

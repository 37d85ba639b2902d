from rest_framework import serializers

from orders.models import Order, OrderLine
from payments.serializers import MoneyAmountField


class OrderLineSerializer(serializers.ModelSerializer):
    unit_price = MoneyAmountField(read_only=True)
    line_total = MoneyAmountField(read_only=True)

    class Meta:
        model = OrderLine
        fields = ["id", "item_id", "name", "category", "unit_price", "quantity", "line_total"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """
    Read-only order representation for the till and kitchen screens.
    """

    lines = OrderLineSerializer(many=True, read_only=True)
    customer_name = serializers.SerializerMethodField()
    subtotal_amount = MoneyAmountField(read_only=True)
    discount_amount = MoneyAmountField(read_only=True)
    total_amount = MoneyAmountField(read_only=True)
    payment_details = serializers.SerializerMethodField()
    notification = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "status",
            "order_type",
            "table_number",
            "customer",
            "customer_name",
            "staff_id",
            "staff_name",
            "lines",
            "subtotal_amount",
            "discount_amount",
            "total_amount",
            "payment_details",
            "notification",
            "kot_printed",
            "bill_printed",
            "notes",
            "created_at",
            "updated_at",
            "completed_at",
        ]
        read_only_fields = fields

    def get_customer_name(self, obj):
        return obj.customer.name if obj.customer else None

    def get_notification(self, obj):
        """Status of the completion notice, shown to staff as a warning when it failed."""
        notification = obj.notifications.first()
        if notification is None:
            return None
        return {"status": notification.status, "error": notification.error}

    def get_payment_details(self, obj):
        details = obj.payment_details
        if details is None:
            return None
        return {
            "method": details.method,
            "cash_amount": str(details.cash_amount.to_decimal()),
            "upi_amount": str(details.upi_amount.to_decimal()),
            "total": str(details.total.to_decimal()),
        }

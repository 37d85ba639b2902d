from decimal import InvalidOperation

from rest_framework import serializers

from .money import Money
from .settlement import PaymentMethod


class MoneyAmountField(serializers.Field):
    """
    Money in and out of the API as a major-unit decimal string ("270.00").

    Input goes through Money.from_decimal, so floats from JSON are converted
    via str and rounded half-to-even to paise.
    """

    default_error_messages = {
        "invalid": "A valid amount is required.",
        "negative": "Amount cannot be negative.",
    }

    def __init__(self, allow_negative=False, **kwargs):
        self.allow_negative = allow_negative
        super().__init__(**kwargs)

    def to_representation(self, value):
        return str(value.to_decimal())

    def to_internal_value(self, data):
        if isinstance(data, bool):
            self.fail("invalid")
        try:
            amount = Money.from_decimal(data)
        except (InvalidOperation, TypeError, ValueError):
            self.fail("invalid")
        if amount.is_negative() and not self.allow_negative:
            self.fail("negative")
        return amount


class TenderSerializer(serializers.Serializer):
    """
    What the cashier entered at payment time.

    Request body format:
    {
        "method": "split",
        "cash_amount": "100.00",
        "upi_amount": "170.00"
    }
    """

    method = serializers.ChoiceField(choices=PaymentMethod.choices)
    cash_amount = MoneyAmountField(required=False)
    upi_amount = MoneyAmountField(required=False)

    def validate(self, attrs):
        method = attrs["method"]
        if method == PaymentMethod.CASH and "cash_amount" not in attrs:
            raise serializers.ValidationError({"cash_amount": "Cash amount is required."})
        if method == PaymentMethod.UPI and "upi_amount" not in attrs:
            raise serializers.ValidationError({"upi_amount": "UPI amount is required."})
        if method == PaymentMethod.SPLIT and ("cash_amount" not in attrs or "upi_amount" not in attrs):
            raise serializers.ValidationError("Split payments need both cash and UPI amounts.")
        return attrs

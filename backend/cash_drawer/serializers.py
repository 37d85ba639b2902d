from rest_framework import serializers

from payments.serializers import MoneyAmountField

from .models import CashDrawerEntry


class CashDrawerEntrySerializer(serializers.ModelSerializer):
    opening_amount = MoneyAmountField(read_only=True)
    closing_amount = MoneyAmountField(read_only=True, allow_null=True)

    class Meta:
        model = CashDrawerEntry
        fields = [
            "id",
            "staff_id",
            "staff_name",
            "date",
            "opening_amount",
            "closing_amount",
            "reason",
            "opened_at",
            "closed_at",
        ]
        read_only_fields = fields


class OpenDrawerSerializer(serializers.Serializer):
    staff_id = serializers.CharField(max_length=64)
    staff_name = serializers.CharField(max_length=150)
    opening_amount = MoneyAmountField()
    reason = serializers.CharField(required=False, allow_blank=True, default="")


class CloseDrawerSerializer(serializers.Serializer):
    staff_id = serializers.CharField(max_length=64)
    closing_amount = MoneyAmountField()

from rest_framework import serializers

from payments.serializers import MoneyAmountField

from .models import MenuItem


class MenuItemSerializer(serializers.ModelSerializer):
    price = MoneyAmountField(read_only=True)

    class Meta:
        model = MenuItem
        fields = ["id", "name", "category", "price", "is_available"]
        read_only_fields = fields

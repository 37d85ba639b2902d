"""
Serializers for the till cart.

Money values are rendered as decimal strings ("270.00"); lines carry the
snapshot taken from the menu when they were added.
"""
from rest_framework import serializers

from payments.serializers import MoneyAmountField

from .models import Cart, CartLine
from .services import CartService


class CartLineSerializer(serializers.ModelSerializer):
    unit_price = MoneyAmountField(read_only=True)
    line_total = MoneyAmountField(read_only=True)

    class Meta:
        model = CartLine
        fields = ["id", "item_id", "name", "category", "unit_price", "quantity", "line_total"]
        read_only_fields = fields


class CartSerializer(serializers.ModelSerializer):
    """Cart with lines and calculated totals."""

    lines = CartLineSerializer(many=True, read_only=True)
    discount_fixed = MoneyAmountField(read_only=True, allow_null=True)
    totals = serializers.SerializerMethodField()

    class Meta:
        model = Cart
        fields = [
            "id",
            "staff_id",
            "lines",
            "discount_type",
            "discount_percent",
            "discount_fixed",
            "totals",
            "updated_at",
        ]
        read_only_fields = fields

    def get_totals(self, obj):
        totals = CartService.get_totals(obj)
        return {
            "subtotal": str(totals["subtotal"].to_decimal()),
            "discount": str(totals["discount"].to_decimal()),
            "total": str(totals["total"].to_decimal()),
            "item_count": totals["item_count"],
        }


class StaffSerializer(serializers.Serializer):
    staff_id = serializers.CharField(max_length=64)


class AddLineSerializer(StaffSerializer):
    """
    Request body format:
    {
        "staff_id": "S-001",
        "item_id": "uuid",
        "quantity": 1
    }
    """

    item_id = serializers.UUIDField()
    quantity = serializers.IntegerField(default=1, min_value=1)


class SetQuantitySerializer(StaffSerializer):
    """A quantity of zero or less removes the line."""

    quantity = serializers.IntegerField()


class ApplyDiscountSerializer(StaffSerializer):
    kind = serializers.ChoiceField(
        choices=[Cart.DiscountType.PERCENTAGE, Cart.DiscountType.FIXED]
    )
    value = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)

    def validate(self, attrs):
        if attrs["kind"] == Cart.DiscountType.PERCENTAGE and attrs["value"] > 100:
            raise serializers.ValidationError({"value": "Percentage must be between 0 and 100."})
        return attrs

from rest_framework import serializers

from .models import Customer


class CustomerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = [
            "id",
            "name",
            "phone",
            "loyalty_points",
            "visit_count",
            "first_visit",
            "last_visit",
        ]
        read_only_fields = ["loyalty_points", "visit_count", "first_visit", "last_visit"]


class RedeemPointsSerializer(serializers.Serializer):
    points = serializers.IntegerField(min_value=1)

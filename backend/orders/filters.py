import django_filters

from core_backend.base.filters import BaseFilterSet
from .models import Order


class OrderFilter(BaseFilterSet):
    """
    Filter for the order list.

    `day` matches the local calendar day an order was placed on;
    `completed_on` the day it was paid (the cash drawer's notion of a day).
    """

    day = django_filters.DateFilter(field_name="created_at", lookup_expr="date")
    completed_on = django_filters.DateFilter(field_name="completed_at", lookup_expr="date")
    active = django_filters.BooleanFilter(method="filter_active")

    def filter_active(self, queryset, name, value):
        if value:
            return queryset.filter(status__in=Order.ACTIVE_STATUSES)
        return queryset.filter(status__in=Order.TERMINAL_STATUSES)

    class Meta:
        model = Order
        fields = {
            "status": ["exact"],
            "order_type": ["exact"],
            "staff_id": ["exact"],
            "payment_method": ["exact"],
        }

from django.contrib import admin

from .models import Order, OrderLine


class OrderLineInline(admin.TabularInline):
    model = OrderLine
    extra = 0
    can_delete = False
    readonly_fields = ("item_id", "name", "unit_price", "quantity", "category", "position")


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Orders are read-only here: lines and totals are snapshots, and status
    and payment only move through OrderService.
    """

    list_display = (
        "order_number",
        "status",
        "order_type",
        "table_number",
        "staff_name",
        "total_amount",
        "payment_method",
        "created_at",
    )
    list_filter = ("status", "order_type", "payment_method")
    search_fields = ("order_number", "staff_name", "customer__name", "customer__phone")
    inlines = [OrderLineInline]
    readonly_fields = [field.name for field in Order._meta.fields]

    def has_add_permission(self, request):
        return False

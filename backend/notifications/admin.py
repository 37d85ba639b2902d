from django.contrib import admin

from .models import OrderNotification


@admin.register(OrderNotification)
class OrderNotificationAdmin(admin.ModelAdmin):
    list_display = ("order", "kind", "recipient", "status", "created_at", "sent_at")
    list_filter = ("status", "kind")
    readonly_fields = ("order", "kind", "recipient", "status", "error", "created_at", "attempted_at", "sent_at")

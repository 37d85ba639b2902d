from django.contrib import admin

from .models import CashDrawerEntry


@admin.register(CashDrawerEntry)
class CashDrawerEntryAdmin(admin.ModelAdmin):
    list_display = ("staff_name", "date", "opening_amount", "closing_amount", "closed_at")
    list_filter = ("date",)
    search_fields = ("staff_name", "staff_id")
    readonly_fields = ("opened_at", "closed_at")

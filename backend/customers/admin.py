from django.contrib import admin

from .models import Customer


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("name", "phone", "loyalty_points", "visit_count", "last_visit")
    search_fields = ("name", "phone")
    readonly_fields = ("loyalty_points", "visit_count", "first_visit", "last_visit")

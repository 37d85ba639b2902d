from django.contrib import admin

from .models import Cart, CartLine


class CartLineInline(admin.TabularInline):
    model = CartLine
    extra = 0
    readonly_fields = ("item_id", "name", "unit_price", "quantity", "category")


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ("staff_id", "discount_type", "updated_at")
    inlines = [CartLineInline]

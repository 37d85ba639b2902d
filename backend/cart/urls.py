"""
URL configuration for cart app.
"""

from django.urls import path

from .views import CartViewSet

app_name = "cart"

urlpatterns = [
    path("", CartViewSet.as_view({"get": "retrieve"}), name="cart-detail"),
    path("add-item/", CartViewSet.as_view({"post": "add_item"}), name="cart-add-item"),
    path(
        "items/<uuid:item_id>/",
        CartViewSet.as_view({"patch": "update_item", "delete": "remove_item"}),
        name="cart-item",
    ),
    path(
        "discount/",
        CartViewSet.as_view({"post": "apply_discount", "delete": "remove_discount"}),
        name="cart-discount",
    ),
    path("clear/", CartViewSet.as_view({"post": "clear"}), name="cart-clear"),
]

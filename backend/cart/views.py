"""
Cart API views for the till.

The cart is keyed by staff member: every request names its staff_id (query
string for reads, body for writes).
"""

import logging

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from .serializers import (
    AddLineSerializer,
    ApplyDiscountSerializer,
    CartSerializer,
    SetQuantitySerializer,
    StaffSerializer,
)
from .services import CartService

logger = logging.getLogger(__name__)


class CartViewSet(viewsets.ViewSet):
    """
    ViewSet for cart operations.

    Endpoints:
    - GET /api/cart/?staff_id= - Retrieve current cart
    - POST /api/cart/add-item/ - Add item to cart
    - PATCH /api/cart/items/{item_id}/ - Set item quantity (<= 0 removes)
    - DELETE /api/cart/items/{item_id}/?staff_id= - Remove item from cart
    - POST /api/cart/discount/ - Apply a percentage or fixed discount
    - DELETE /api/cart/discount/?staff_id= - Remove the discount
    - POST /api/cart/clear/ - Clear all items and the discount
    """

    def _cart_for(self, data):
        serializer = StaffSerializer(data={"staff_id": data.get("staff_id")})
        serializer.is_valid(raise_exception=True)
        return CartService.get_or_create_cart(serializer.validated_data["staff_id"])

    def _render(self, cart, status_code=status.HTTP_200_OK):
        return Response(CartSerializer(CartService.refresh(cart)).data, status=status_code)

    def retrieve(self, request):
        return self._render(self._cart_for(request.query_params))

    @action(detail=False, methods=["post"], url_path="add-item")
    def add_item(self, request):
        serializer = AddLineSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cart = CartService.get_or_create_cart(serializer.validated_data["staff_id"])
        CartService.add_line(
            cart,
            serializer.validated_data["item_id"],
            serializer.validated_data["quantity"],
        )
        return self._render(cart, status.HTTP_201_CREATED)

    def update_item(self, request, item_id=None):
        serializer = SetQuantitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cart = CartService.get_or_create_cart(serializer.validated_data["staff_id"])
        CartService.set_quantity(cart, item_id, serializer.validated_data["quantity"])
        return self._render(cart)

    def remove_item(self, request, item_id=None):
        cart = self._cart_for(request.query_params)
        CartService.remove_line(cart, item_id)
        return self._render(cart)

    def apply_discount(self, request):
        serializer = ApplyDiscountSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cart = CartService.get_or_create_cart(serializer.validated_data["staff_id"])
        try:
            CartService.apply_discount(
                cart, serializer.validated_data["kind"], serializer.validated_data["value"]
            )
        except ValueError as e:
            raise ValidationError({"value": str(e)})
        return self._render(cart)

    def remove_discount(self, request):
        cart = self._cart_for(request.query_params)
        CartService.remove_discount(cart)
        return self._render(cart)

    @action(detail=False, methods=["post"], url_path="clear")
    def clear(self, request):
        cart = self._cart_for(request.data)
        CartService.clear(cart)
        return self._render(cart)

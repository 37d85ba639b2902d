import logging

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from cart.services import CartService
from orders.filters import OrderFilter
from orders.models import Order
from orders.serializers import CheckoutSerializer, OrderSerializer
from orders.services import OrderService

from .print_actions import PrintActionsMixin
from .status_actions import StatusActionsMixin

logger = logging.getLogger(__name__)


class OrderViewSet(StatusActionsMixin, PrintActionsMixin, viewsets.ReadOnlyModelViewSet):
    """
    Orders API.

    Orders are created only by checking out a staff member's cart, and change
    only through the lifecycle actions; there is no generic update.
    """

    queryset = Order.objects.select_related("customer").prefetch_related("lines")
    serializer_class = OrderSerializer
    filterset_class = OrderFilter

    @action(detail=False, methods=["post"], url_path="checkout")
    def checkout(self, request: Request) -> Response:
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        cart = CartService.get_or_create_cart(data["staff_id"])
        order = OrderService.checkout(
            cart,
            order_type=data["order_type"],
            staff_id=data["staff_id"],
            staff_name=data["staff_name"],
            table_number=data["table_number"],
            customer_id=data["customer_id"],
            notes=data["notes"],
        )
        return Response(
            self.get_serializer(OrderService.sync(order)).data,
            status=status.HTTP_201_CREATED,
        )

    @action(detail=False, methods=["get"], url_path="current")
    def current(self, request: Request) -> Response:
        orders = OrderService.current_orders()
        return Response(self.get_serializer(orders, many=True).data)

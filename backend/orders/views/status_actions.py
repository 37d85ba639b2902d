import logging

from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from orders.serializers import (
    CompleteOrderSerializer,
    UpdateNotesSerializer,
    UpdateOrderStatusSerializer,
)
from orders.services import OrderService
from payments.settlement import PaymentDetails

logger = logging.getLogger(__name__)


class StatusActionsMixin:
    """
    Mixin for order status transition actions

    This mixin provides action methods for OrderViewSet. Engine errors
    propagate to the API exception handler, which renders their kind.
    """

    @action(detail=True, methods=["post"], url_path="status")
    def update_status(self, request: Request, pk=None) -> Response:
        serializer = UpdateOrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = OrderService.update_status(pk, serializer.validated_data["status"])
        return Response(self.get_serializer(OrderService.sync(order)).data)

    @action(detail=True, methods=["post"], url_path="complete")
    def complete(self, request: Request, pk=None) -> Response:
        """
        Take payment for the order.

        Returns the completed order plus the change to hand back for cash.
        """
        serializer = CompleteOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderService.get_order(pk)
        OrderService.ensure_completable(order)
        details, change_due = PaymentDetails.from_tender(
            serializer.validated_data["method"],
            order.total_amount,
            cash_tendered=serializer.validated_data.get("cash_amount"),
            upi_tendered=serializer.validated_data.get("upi_amount"),
        )
        order = OrderService.complete_order(order.pk, details)

        data = self.get_serializer(OrderService.sync(order)).data
        data["change_due"] = str(change_due.to_decimal())
        return Response(data)

    @action(detail=True, methods=["post"], url_path="cancel")
    def cancel(self, request: Request, pk=None) -> Response:
        order = OrderService.cancel_order(pk)
        return Response(self.get_serializer(OrderService.sync(order)).data)

    @action(detail=True, methods=["patch"], url_path="notes")
    def notes(self, request: Request, pk=None) -> Response:
        serializer = UpdateNotesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = OrderService.update_notes(pk, serializer.validated_data["notes"])
        return Response(self.get_serializer(OrderService.sync(order)).data)

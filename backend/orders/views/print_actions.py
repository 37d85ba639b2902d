from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from orders.services import FulfillmentService, OrderService


class PrintActionsMixin:
    """KOT/bill printing actions for OrderViewSet."""

    def get_fulfillment_service(self) -> FulfillmentService:
        return FulfillmentService()

    @action(detail=True, methods=["post"], url_path="print-kot")
    def print_kot(self, request: Request, pk=None) -> Response:
        order = self.get_fulfillment_service().print_kot(pk)
        return Response(self.get_serializer(OrderService.sync(order)).data)

    @action(detail=True, methods=["post"], url_path="print-bill")
    def print_bill(self, request: Request, pk=None) -> Response:
        order = self.get_fulfillment_service().print_bill(pk)
        return Response(self.get_serializer(OrderService.sync(order)).data)

    @action(detail=False, methods=["get"], url_path="printer-status")
    def printer_status(self, request: Request) -> Response:
        return Response(self.get_fulfillment_service().printer_status())

import logging

from rest_framework import serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from .serializers import CashDrawerEntrySerializer, CloseDrawerSerializer, OpenDrawerSerializer
from .services import CashDrawerService

logger = logging.getLogger(__name__)


class CashDrawerViewSet(viewsets.ViewSet):
    """
    Endpoints:
    - GET /api/cash-drawer/?date=YYYY-MM-DD - All drawers for a day (today by default)
    - GET /api/cash-drawer/today/?staff_id= - Staff drawer with expected cash so far
    - POST /api/cash-drawer/open/ - Open today's drawer
    - POST /api/cash-drawer/close/ - Count and reconcile today's drawer
    """

    def list(self, request: Request) -> Response:
        day = None
        if request.query_params.get("date"):
            day = serializers.DateField().run_validation(request.query_params["date"])
        entries = CashDrawerService.entries_for_day(day)
        return Response(CashDrawerEntrySerializer(entries, many=True).data)

    @action(detail=False, methods=["get"], url_path="today")
    def today(self, request: Request) -> Response:
        staff_id = serializers.CharField().run_validation(request.query_params.get("staff_id"))
        reconciliation = CashDrawerService.preview(staff_id)
        return Response(
            {
                "entry": CashDrawerEntrySerializer(reconciliation.entry).data,
                "reconciliation": reconciliation.as_dict(),
            }
        )

    @action(detail=False, methods=["post"], url_path="open")
    def open(self, request: Request) -> Response:
        serializer = OpenDrawerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = CashDrawerService.open_drawer(**serializer.validated_data)
        return Response(CashDrawerEntrySerializer(entry).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"], url_path="close")
    def close(self, request: Request) -> Response:
        serializer = CloseDrawerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        reconciliation = CashDrawerService.close_drawer(**serializer.validated_data)
        return Response(
            {
                "entry": CashDrawerEntrySerializer(reconciliation.entry).data,
                "reconciliation": reconciliation.as_dict(),
            }
        )

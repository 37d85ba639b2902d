import logging

from rest_framework import mixins, viewsets
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from .models import Customer
from .serializers import CustomerSerializer, RedeemPointsSerializer
from .services import LoyaltyService

logger = logging.getLogger(__name__)


class CustomerViewSet(
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.ListModelMixin,
    viewsets.GenericViewSet,
):
    """
    Customer lookup for the till plus the two loyalty actions.

    Points are never written through the serializer; they only move via
    order completion and the redeem action.
    """

    queryset = Customer.objects.all()
    serializer_class = CustomerSerializer
    filterset_fields = ["phone"]

    @action(detail=True, methods=["get"], url_path="balance")
    def balance(self, request: Request, pk=None) -> Response:
        return Response({"customer_id": pk, "loyalty_points": LoyaltyService.balance(pk)})

    @action(detail=True, methods=["post"], url_path="redeem")
    def redeem(self, request: Request, pk=None) -> Response:
        serializer = RedeemPointsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        balance = LoyaltyService.redeem_points(pk, serializer.validated_data["points"])
        return Response({"customer_id": pk, "loyalty_points": balance})

from .order_serializers import OrderLineSerializer, OrderSerializer
from .action_serializers import (
    CheckoutSerializer,
    CompleteOrderSerializer,
    UpdateNotesSerializer,
    UpdateOrderStatusSerializer,
)

__all__ = [
    "OrderLineSerializer",
    "OrderSerializer",
    "CheckoutSerializer",
    "CompleteOrderSerializer",
    "UpdateNotesSerializer",
    "UpdateOrderStatusSerializer",
]

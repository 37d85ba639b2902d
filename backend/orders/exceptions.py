"""
Order lifecycle errors.

All are caller-facing and raised before anything is written, so the order
is exactly as it was when one of these comes back.
"""
from rest_framework import status

from core_backend.exceptions import CafePOSError


class OrderError(CafePOSError):
    """Base exception for order lifecycle errors."""

    kind = "OrderError"


class EmptyCart(OrderError):
    """Raised when checking out a cart with no lines."""

    kind = "EmptyCart"
    default_message = "Cannot check out an empty cart"


class MissingTable(OrderError):
    """Raised when a dine-in order has no table number."""

    kind = "MissingTable"
    default_message = "A table number is required for dine-in orders"


class OrderNotFound(OrderError):
    kind = "OrderNotFound"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, order_id, message=None):
        self.order_id = order_id
        if message is None:
            message = f"Order '{order_id}' does not exist"
        super().__init__(message, order_id=order_id)


class InvalidTransition(OrderError):
    """Raised for a status change the state machine does not allow."""

    kind = "InvalidTransition"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, order, target, message=None):
        self.order = order
        self.target = target
        if message is None:
            message = f"Order {order.order_number} cannot move from '{order.status}' to '{target}'"
        super().__init__(message, order_id=order.pk, status=order.status, target=target)


class OrderNotActive(OrderError):
    """Raised when acting on an order that has been cancelled (or otherwise closed)."""

    kind = "OrderNotActive"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, order, message=None):
        self.order = order
        if message is None:
            message = f"Order {order.order_number} is {order.status} and can no longer be changed"
        super().__init__(message, order_id=order.pk, status=order.status)


class AlreadyCompleted(OrderError):
    """Raised on a second completion attempt; the first payment stands."""

    kind = "AlreadyCompleted"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, order, message=None):
        self.order = order
        if message is None:
            message = f"Order {order.order_number} has already been completed"
        super().__init__(message, order_id=order.pk, completed_at=order.completed_at)

"""
Loyalty errors.
"""
from rest_framework import status

from core_backend.exceptions import CafePOSError


class CustomerNotFound(CafePOSError):
    """Raised when a customer id does not resolve to a record."""

    kind = "CustomerNotFound"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, customer_id, message=None):
        self.customer_id = customer_id
        if message is None:
            message = f"Customer '{customer_id}' does not exist"
        super().__init__(message, customer_id=customer_id)


class InsufficientPoints(CafePOSError):
    """Raised when a redemption asks for more points than the balance holds."""

    kind = "InsufficientPoints"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, requested, available, message=None):
        self.requested = requested
        self.available = available
        if message is None:
            message = f"Cannot redeem {requested} points; balance is {available}"
        super().__init__(message, requested=requested, available=available)

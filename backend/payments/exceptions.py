"""
Payment settlement errors.
"""

from rest_framework import status

from core_backend.exceptions import CafePOSError


class PaymentMismatch(CafePOSError):
    """
    Raised when the recorded payment parts do not add up to the order total.

    `deficit` is total minus paid: positive for an under-payment, negative when
    more was recorded than the order is worth.
    """

    kind = "PaymentMismatch"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, deficit, message=None):
        self.deficit = deficit
        if message is None:
            if deficit.is_negative():
                message = f"Payment exceeds the order total by {abs(deficit)}"
            else:
                message = f"Payment is short by {deficit}"
        super().__init__(message, deficit=deficit.to_decimal())

from rest_framework import status

from core_backend.exceptions import CafePOSError


class PrinterNotConnected(CafePOSError):
    """Raised when a print is requested while the printer is disconnected."""

    kind = "PrinterNotConnected"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Printer is not connected"


class PrintFailed(CafePOSError):
    """Raised when a connected printer did not accept the ticket."""

    kind = "PrintFailed"
    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, ticket, order_number, message=None):
        self.ticket = ticket
        self.order_number = order_number
        if message is None:
            message = f"Printing the {ticket.upper()} for order {order_number} failed"
        super().__init__(message, ticket=ticket, order_number=order_number)

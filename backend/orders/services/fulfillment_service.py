"""
Caller-triggered printing on top of the order state machine.

Printing is never automatic: the till asks for a KOT or a bill. The order's
kot_printed/bill_printed flags only record "printed at least once" for the
UI; they never block a reprint.
"""
import logging

from core_backend.config import app_settings
from orders.models import Order
from printing.exceptions import PrintFailed, PrinterNotConnected

from .order_service import OrderService

logger = logging.getLogger(__name__)


class FulfillmentService:
    """
    Print dispatcher bound to one printer backend.

    If no printer is given the configured one (CAFE_POS["PRINTER_BACKEND"])
    is used.
    """

    def __init__(self, printer=None):
        self.printer = printer or app_settings.get_printer()

    def printer_status(self) -> dict:
        return {
            "connected": self.printer.is_connected(),
            "backend": type(self.printer).__name__,
        }

    def _print(self, order_id, kind: str) -> Order:
        order = OrderService.get_order(order_id)

        if not self.printer.is_connected():
            logger.warning(f"{kind.upper()} for order {order.order_number} not printed: printer not connected")
            raise PrinterNotConnected()

        send = self.printer.print_kot if kind == "kot" else self.printer.print_bill
        if not send(order):
            logger.error(f"Printer rejected {kind.upper()} for order {order.order_number}")
            raise PrintFailed(kind, order.order_number)

        logger.info(f"{kind.upper()} printed for order {order.order_number}")
        if kind == "kot":
            return OrderService.set_kot_printed(order.pk)
        return OrderService.set_bill_printed(order.pk)

    def print_kot(self, order_id) -> Order:
        """
        Print the kitchen ticket and mark kot_printed.

        Raises:
            OrderNotFound, PrinterNotConnected, PrintFailed (flag left untouched)
        """
        return self._print(order_id, "kot")

    def print_bill(self, order_id) -> Order:
        """
        Print the customer bill and mark bill_printed.

        Raises:
            OrderNotFound, PrinterNotConnected, PrintFailed (flag left untouched)
        """
        return self._print(order_id, "bill")

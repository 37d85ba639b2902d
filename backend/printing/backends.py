"""
Printer backends.

The active backend is chosen by dotted path in CAFE_POS["PRINTER_BACKEND"]
and built once with CAFE_POS["PRINTER_OPTIONS"]. A backend reports whether
it is connected and sends rendered tickets; it returns False instead of
raising when the device rejects a ticket.
"""

import logging
import socket
from collections import deque

from .formatting import render_bill, render_kot

logger = logging.getLogger(__name__)

# ESC/POS: initialise printer, and full cut after feed
ESC_POS_INIT = b"\x1b@"
ESC_POS_CUT = b"\x1dV\x00"


class PrinterBackend:
    """Base class for printer backends."""

    def __init__(self, **options):
        self.options = options

    def is_connected(self) -> bool:
        raise NotImplementedError

    def send(self, ticket: str, kind: str) -> bool:
        """Deliver one rendered ticket. Returns True if the device accepted it."""
        raise NotImplementedError

    def print_kot(self, order) -> bool:
        return self.send(render_kot(order), "kot")

    def print_bill(self, order) -> bool:
        return self.send(render_bill(order), "bill")


class ConsolePrinterBackend(PrinterBackend):
    """
    Writes tickets to the log instead of paper. Used in development and
    tests; connect()/disconnect() simulate a printer going away.

    The last `history` tickets are kept in `printed`, oldest first.
    """

    def __init__(self, connected=True, history=50, **options):
        super().__init__(**options)
        self.connected = connected
        self.printed = deque(maxlen=history)

    def connect(self):
        self.connected = True

    def disconnect(self):
        self.connected = False

    def is_connected(self) -> bool:
        return self.connected

    def send(self, ticket: str, kind: str) -> bool:
        self.printed.append((kind, ticket))
        logger.info(f"[{kind.upper()}]\n{ticket}")
        return True


class NetworkPrinterBackend(PrinterBackend):
    """
    Raw TCP thermal printer (the usual port 9100 "JetDirect" protocol).
    """

    def __init__(self, host="", port=9100, timeout=5, encoding="utf-8", **options):
        super().__init__(**options)
        self.host = host
        self.port = int(port)
        self.timeout = timeout
        self.encoding = encoding

    def is_connected(self) -> bool:
        if not self.host:
            return False
        try:
            with socket.create_connection((self.host, self.port), timeout=self.timeout):
                return True
        except OSError as e:
            logger.warning(f"Printer {self.host}:{self.port} unreachable: {e}")
            return False

    def send(self, ticket: str, kind: str) -> bool:
        payload = ESC_POS_INIT + ticket.encode(self.encoding, errors="replace") + ESC_POS_CUT
        try:
            with socket.create_connection((self.host, self.port), timeout=self.timeout) as conn:
                conn.sendall(payload)
            return True
        except OSError as e:
            logger.error(f"Error printing {kind} on {self.host}:{self.port}: {e}", exc_info=True)
            return False


class NullPrinterBackend(PrinterBackend):
    """No printer attached: always disconnected."""

    def is_connected(self) -> bool:
        return False

    def send(self, ticket: str, kind: str) -> bool:
        return False

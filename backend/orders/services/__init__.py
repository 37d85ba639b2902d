"""
Orders services package.

- OrderService: order lifecycle (checkout, status, completion, cancellation)
- FulfillmentService: KOT and bill printing with print-flag tracking
"""

from .order_service import OrderService
from .fulfillment_service import FulfillmentService

__all__ = [
    'OrderService',
    'FulfillmentService',
]

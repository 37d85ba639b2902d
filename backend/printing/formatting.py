"""
Plain-text layouts for the kitchen order ticket (KOT) and the customer bill.

Both render from the order's stored snapshot (lines, totals, payment), never
from the live menu. Layout switches come from CAFE_POS["PRINT"].
"""

from django.utils import timezone

from core_backend.config import app_settings
from payments.settlement import PaymentMethod

RULE = "-" * 32
FEED = "\n\n\n"  # Extra lines for cutting


def _timestamp(value):
    return timezone.localtime(value).strftime("%d/%m/%Y %I:%M %p")


def render_kot(order, options=None):
    """
    Generate the kitchen ticket: what to make, for which table, and who took it.
    """
    options = options or app_settings.PRINT

    lines = ["", "KITCHEN ORDER TICKET", ""]
    lines.append(f"Order #: {order.order_number}")
    lines.append(f"Type: {order.order_type.upper()}")

    if (
        options["KOT_SHOW_TABLE"]
        and order.order_type == order.OrderType.DINE_IN
        and order.table_number
    ):
        lines.append(f"Table: {order.table_number}")
    if options["KOT_SHOW_TIME"]:
        lines.append(f"Date: {_timestamp(order.created_at)}")
    if options["KOT_SHOW_SERVER"] and order.staff_name:
        lines.append(f"Server: {order.staff_name}")

    lines.append("")
    lines.append("ITEMS:")
    for line in order.lines.all():
        lines.append(f"{line.quantity}x {line.name}")

    if order.notes:
        lines.append("")
        lines.append(f"Notes: {order.notes}")

    if options["KOT_FOOTER"]:
        lines.append("")
        lines.append(options["KOT_FOOTER"])

    return "\n".join(lines) + FEED


def render_bill(order, options=None):
    """
    Generate the customer bill.

    Amounts are the order's stored snapshots, so a reprint after a menu price
    change shows exactly what was charged.
    """
    options = options or app_settings.PRINT

    lines = [""]
    if options["CAFE_NAME"]:
        lines.append(options["CAFE_NAME"].upper())
        lines.append("")

    lines.append("INVOICE")
    lines.append(f"Order #: {order.order_number}")
    lines.append(f"Date: {_timestamp(order.created_at)}")
    if order.staff_name:
        lines.append(f"Staff: {order.staff_name}")

    if options["ADDRESS_LINES"]:
        lines.append("")
        lines.extend(options["ADDRESS_LINES"])

    customer = order.customer
    if options["BILL_SHOW_CUSTOMER"] and customer is not None:
        lines.append("")
        lines.append(f"Customer: {customer.name}")
        if customer.phone:
            lines.append(f"Phone: {customer.phone}")

    lines.append("")
    lines.append("ITEMS:")
    lines.append(RULE)
    for line in order.lines.all():
        lines.append(f"{line.quantity}x {line.name}")
        if options["BILL_ITEMIZED"]:
            lines.append(f"  {line.unit_price} each: {line.line_total}")
    lines.append(RULE)

    lines.append(f"Subtotal: {order.subtotal_amount}")
    if not order.discount_amount.is_zero():
        lines.append(f"Discount: -{order.discount_amount}")
    lines.append(f"TOTAL: {order.total_amount}")

    details = order.payment_details
    if details is not None:
        lines.append("")
        lines.append(f"Payment Method: {details.method.upper()}")
        if details.method == PaymentMethod.SPLIT:
            lines.append(f"Cash: {details.cash_amount}")
            lines.append(f"UPI: {details.upi_amount}")

    if options["BILL_FOOTER"]:
        lines.append("")
        lines.append(options["BILL_FOOTER"])

    return "\n".join(lines) + FEED

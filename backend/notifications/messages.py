"""
Order summary and message text for customer notifications.
"""


def build_order_summary(order):
    """Plain-data snapshot of a completed order for a notification backend."""
    return {
        "order_id": str(order.pk),
        "order_number": order.order_number,
        "order_type": order.order_type,
        "table_number": order.table_number,
        "customer_name": order.customer.name if order.customer else "",
        "items": [
            {
                "name": line.name,
                "quantity": line.quantity,
                "line_total": str(line.line_total),
            }
            for line in order.lines.all()
        ],
        "total": str(order.total_amount),
    }


def render_completion_message(summary, cafe_name):
    items = "\n".join(
        f"{item['quantity']}x {item['name']} - {item['line_total']}" for item in summary["items"]
    )
    table = f" (Table {summary['table_number']})" if summary["table_number"] else ""

    return (
        "🛒 *Order Confirmation*\n"
        f"Order #{summary['order_number']}\n"
        f"Type: {summary['order_type']}{table}\n"
        "\n"
        "*Items:*\n"
        f"{items}\n"
        "\n"
        f"*Total: {summary['total']}*\n"
        "\n"
        f"Thank you for your order at {cafe_name}! Your order has been completed. "
        "Please visit again!"
    )

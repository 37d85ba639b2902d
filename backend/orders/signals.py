from django.dispatch import Signal

# Custom signals that other apps can listen to.

# Sent after the completion transaction has committed, never before.
# kwargs: order_id, order_number
order_completed = Signal()

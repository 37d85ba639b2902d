from django.dispatch import Signal

# Sent once per successful CartService.add_line call.
# kwargs: cart, line, quantity
cart_item_added = Signal()

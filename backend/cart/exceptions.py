from rest_framework import status

from core_backend.exceptions import CafePOSError


class InvalidItem(CafePOSError):
    """Raised for an item id that is not on the menu, not available, or not in the cart."""

    kind = "InvalidItem"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, item_id, message=None):
        self.item_id = item_id
        if message is None:
            message = f"Item '{item_id}' is not available"
        super().__init__(message, item_id=item_id)

from rest_framework import status

from core_backend.exceptions import CafePOSError


class DrawerAlreadyOpen(CafePOSError):
    kind = "DrawerAlreadyOpen"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, staff_id, day, message=None):
        self.staff_id = staff_id
        self.day = day
        if message is None:
            message = f"A cash drawer is already open for {staff_id} on {day}"
        super().__init__(message, staff_id=staff_id, date=day)


class NoOpenDrawer(CafePOSError):
    kind = "NoOpenDrawer"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, staff_id, day, message=None):
        self.staff_id = staff_id
        self.day = day
        if message is None:
            message = f"No cash drawer was opened for {staff_id} on {day}"
        super().__init__(message, staff_id=staff_id, date=day)


class AlreadyClosed(CafePOSError):
    kind = "AlreadyClosed"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, entry, message=None):
        self.entry = entry
        if message is None:
            message = f"The cash drawer for {entry.staff_id} on {entry.date} is already closed"
        super().__init__(message, staff_id=entry.staff_id, date=entry.date)

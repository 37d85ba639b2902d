from rest_framework import viewsets

from .models import MenuItem
from .serializers import MenuItemSerializer


class MenuItemViewSet(viewsets.ReadOnlyModelViewSet):
    """Catalog for the till. Menu editing is done in the admin."""

    queryset = MenuItem.objects.all()
    serializer_class = MenuItemSerializer
    filterset_fields = ["category", "is_available"]

from django.urls import include, path
from rest_framework import routers

from .views import CashDrawerViewSet

app_name = "cash_drawer"

router = routers.DefaultRouter()
router.register(r"cash-drawer", CashDrawerViewSet, basename="cash-drawer")

urlpatterns = [
    path("", include(router.urls)),
]

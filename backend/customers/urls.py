from django.urls import include, path
from rest_framework import routers

from .views import CustomerViewSet

app_name = "customers"

router = routers.DefaultRouter()
router.register(r"customers", CustomerViewSet, basename="customer")

urlpatterns = [
    path("", include(router.urls)),
]

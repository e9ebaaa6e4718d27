"""
URL configuration for push notification API.

Mounted at /api/v1/notifications/ by config/urls.py.

Endpoints:
    /register-token/    POST
    /unregister-token/  POST
"""

from rest_framework.routers import SimpleRouter

from notifications.views import DeviceTokenViewSet

router = SimpleRouter()
router.register(r"", DeviceTokenViewSet, basename="device-token")

app_name = "notifications"
urlpatterns = router.urls

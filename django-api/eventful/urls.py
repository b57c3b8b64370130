from django.contrib import admin
from django.urls import include, path

from eventful.views import HealthView

api_patterns = [
    path("", include("accounts.urls")),
    path("", include("events.urls")),
    path("", include("tickets.urls")),
    path("", include("payments.urls")),
    path("", include("notifications.urls")),
    path("", include("analytics.urls")),
]

urlpatterns = [
    path("health", HealthView.as_view(), name="health"),
    path("api/", include(api_patterns)),
    path("admin/", admin.site.urls),
]

handler404 = "eventful.views.not_found"
handler500 = "eventful.views.server_error"

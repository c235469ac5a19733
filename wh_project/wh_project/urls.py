from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    # JSON API consumed by the admin dashboard
    path("api/", include("warehouse_core.urls")),
]

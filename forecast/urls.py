"""Root URL configuration: HTML pages at the top level, JSON under /api."""
from __future__ import annotations

from django.urls import include, path

urlpatterns = [
    path("api/", include("forecast.api.urls")),
    path("", include("forecast.pages.urls")),
]

"""API URL configuration."""
from __future__ import annotations

from django.urls import path

from forecast.api.views import HealthView, SearchHistoryView, WeatherView

urlpatterns = [
    path("weather", WeatherView.as_view(), name="api-weather"),
    path("searches", SearchHistoryView.as_view(), name="api-searches"),
    path("health", HealthView.as_view(), name="api-health"),
]

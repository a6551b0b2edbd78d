"""HTML page URL configuration."""
from __future__ import annotations

from django.urls import path

from forecast.pages import views

urlpatterns = [
    path("", views.index, name="index"),
    path("weather", views.weather, name="weather"),
    path("weather/fragment", views.weather_fragment, name="weather-fragment"),
    path("stats", views.stats, name="stats"),
]

"""Builds the shared :class:`WeatherService` from Django settings."""
from __future__ import annotations

import threading
from typing import Optional

from django.conf import settings

from forecast.core.health import HealthRegistry
from forecast.core.history import SearchHistory
from forecast.core.providers import OpenMeteoProvider, RequestConfig
from forecast.core.services import WeatherService


_service: Optional[WeatherService] = None
_service_lock = threading.Lock()


def _build_weather_service() -> WeatherService:
    provider = OpenMeteoProvider(
        geocoding_url=settings.GEOCODING_API_URL,
        forecast_url=settings.FORECAST_API_URL,
        request_config=RequestConfig(timeout=settings.WEATHER_HTTP_TIMEOUT),
    )
    return WeatherService(
        provider=provider,
        history=SearchHistory.from_url(settings.DATABASE_URL),
        health=HealthRegistry(),
    )


def get_weather_service() -> WeatherService:
    """Return the process wide service, building it on first use."""
    global _service
    service = _service
    if service is None:
        with _service_lock:
            if _service is None:
                _service = _build_weather_service()
            service = _service
    return service


def reset_weather_service() -> None:
    """Drop the shared service so the next call picks up current settings."""
    global _service
    with _service_lock:
        service, _service = _service, None
    if service is not None:
        service.provider.close()


__all__ = ["get_weather_service", "reset_weather_service"]

"""Errors raised by the weather lookup pipeline.

Views translate these into HTTP status codes; nothing below the view layer
knows about HTTP responses.
"""
from __future__ import annotations


class ServiceError(RuntimeError):
    """Base class for lookup failures."""

    prefix = ""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.prefix}{self.message}"


class CityNotFound(ServiceError):
    """The city name is empty or the geocoder returned no candidates."""


class UpstreamError(ServiceError):
    """An external API call failed or returned something unusable."""

    source = "upstream"


class GeocodingError(UpstreamError):
    prefix = "Failed to fetch coordinates: "
    source = "geocoding"


class WeatherError(UpstreamError):
    prefix = "Failed to fetch weather: "
    source = "forecast"


class InvalidResponse(UpstreamError):
    """Upstream JSON decoded fine but violates the expected structure."""

    prefix = "Failed to process response: "

    def __init__(self, source: str, message: str) -> None:
        super().__init__(message)
        self.source = source


__all__ = [
    "ServiceError",
    "CityNotFound",
    "UpstreamError",
    "GeocodingError",
    "WeatherError",
    "InvalidResponse",
]

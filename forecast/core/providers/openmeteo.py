"""Open-Meteo geocoding and forecast client."""
from __future__ import annotations

from typing import Optional

from forecast.core.abstractions import Coordinate, HourlySeries
from forecast.core.exceptions import CityNotFound, GeocodingError, InvalidResponse, WeatherError

from .base import HTTPProvider


class OpenMeteoProvider(HTTPProvider):
    name = "openmeteo"
    geocoding_url = "https://geocoding-api.open-meteo.com/v1/search"
    forecast_url = "https://api.open-meteo.com/v1/forecast"

    def __init__(
        self,
        geocoding_url: Optional[str] = None,
        forecast_url: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.geocoding_url = geocoding_url or self.geocoding_url
        self.forecast_url = forecast_url or self.forecast_url

    def resolve_coordinates(self, city: str) -> Coordinate:
        """Geocode ``city`` and return the first candidate.

        Raises :class:`CityNotFound` for a blank name (without calling the
        API) or when the geocoder has no candidates, and
        :class:`GeocodingError` when the call or its JSON body fails.
        """
        name = (city or "").strip()
        if not name:
            self._log.warning("Empty city name provided")
            raise CityNotFound("City name cannot be empty")

        params = {"name": name, "count": 1, "language": "en", "format": "json"}
        self._log.debug("Fetching coordinates for city: %s", name)
        data = self._get_json(self.geocoding_url, params, GeocodingError)
        if not isinstance(data, dict):
            raise GeocodingError("Failed to parse JSON: expected an object")

        results = data.get("results")
        if not results:
            self._log.warning("No coordinates found for city: %s", name)
            raise CityNotFound(f"No coordinates found for {name}")

        try:
            first = results[0]
            coords = Coordinate(latitude=float(first["latitude"]), longitude=float(first["longitude"]))
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            self._log.error("Malformed geocoding candidate for %s: %r", name, exc)
            raise GeocodingError(f"Failed to parse JSON: {exc!r}") from exc

        self._log.info("Found coordinates for %s: %s", name, coords)
        return coords

    def resolve_forecast(self, coords: Coordinate) -> HourlySeries:
        params = {
            "latitude": coords.latitude,
            "longitude": coords.longitude,
            "hourly": "temperature_2m",
        }
        self._log.debug(
            "Fetching weather for coordinates: lat=%s, lon=%s", coords.latitude, coords.longitude
        )
        data = self._get_json(self.forecast_url, params, WeatherError)

        try:
            hourly = data["hourly"]
            times = tuple(str(value) for value in hourly["time"])
            temperatures = tuple(float(value) for value in hourly["temperature_2m"])
        except (KeyError, TypeError, ValueError) as exc:
            self._log.error("Malformed forecast payload: %r", exc)
            raise WeatherError(f"Failed to parse JSON: {exc!r}") from exc

        try:
            series = HourlySeries(times=times, temperatures=temperatures)
        except ValueError as exc:
            self._log.error("Inconsistent forecast payload: %s", exc)
            raise InvalidResponse(WeatherError.source, str(exc)) from exc

        self._log.info("Successfully fetched weather data (%d hours)", len(series))
        return series


__all__ = ["OpenMeteoProvider"]

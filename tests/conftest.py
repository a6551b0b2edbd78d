from __future__ import annotations

import pytest
from django.test import Client, override_settings

from forecast.core.context import reset_weather_service
from forecast.core.history import SearchHistory


GEOCODING_URL = "https://geocoding.test/v1/search"
FORECAST_URL = "https://forecast.test/v1/forecast"


@pytest.fixture()
def database_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'weather.db'}"


@pytest.fixture(autouse=True)
def service_settings(database_url):
    with override_settings(
        DATABASE_URL=database_url,
        GEOCODING_API_URL=GEOCODING_URL,
        FORECAST_API_URL=FORECAST_URL,
    ):
        reset_weather_service()
        yield
    reset_weather_service()


@pytest.fixture()
def broken_database(tmp_path):
    """Point the service at a database file that cannot be opened."""
    with override_settings(DATABASE_URL=f"sqlite:///{tmp_path / 'missing' / 'weather.db'}"):
        reset_weather_service()
        yield
    reset_weather_service()


@pytest.fixture()
def unnamed_database():
    """Point the service at a SQLite URL that names no file."""
    with override_settings(DATABASE_URL="sqlite://"):
        reset_weather_service()
        yield
    reset_weather_service()


@pytest.fixture()
def history(database_url) -> SearchHistory:
    return SearchHistory.from_url(database_url)


@pytest.fixture()
def client() -> Client:
    return Client()


@pytest.fixture()
def london_geocoding() -> dict:
    return {
        "results": [
            {
                "id": 2643743,
                "name": "London",
                "latitude": 51.50853,
                "longitude": -0.12574,
                "country": "United Kingdom",
            }
        ],
        "generationtime_ms": 0.61,
    }


@pytest.fixture()
def london_forecast() -> dict:
    return {
        "latitude": 51.5,
        "longitude": -0.12,
        "hourly_units": {"time": "iso8601", "temperature_2m": "°C"},
        "hourly": {
            "time": [
                "2024-02-23T00:00",
                "2024-02-23T01:00",
                "2024-02-23T02:00",
                "2024-02-23T03:00",
            ],
            "temperature_2m": [5.2, 3.1, 9.8, 7.4],
        },
    }


@pytest.fixture()
def mock_london(requests_mock, london_geocoding, london_forecast):
    requests_mock.get(GEOCODING_URL, json=london_geocoding)
    requests_mock.get(FORECAST_URL, json=london_forecast)
    return requests_mock

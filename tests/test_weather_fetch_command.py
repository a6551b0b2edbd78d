from __future__ import annotations

import json
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError


GEOCODING_URL = "https://geocoding.test/v1/search"


def test_weather_fetch_prints_report(mock_london, history) -> None:
    out = StringIO()

    call_command("weather_fetch", city="London", stdout=out)

    payload = json.loads(out.getvalue())
    assert payload["city"] == "London"
    assert payload["temperature"] == {"min": 3.1, "max": 9.8}
    assert history.recent_searches(10) == []


def test_weather_fetch_can_record(mock_london, history) -> None:
    call_command("weather_fetch", city="London", record=True, stdout=StringIO())

    assert [search.name for search in history.recent_searches(10)] == ["London"]


def test_weather_fetch_unknown_city(requests_mock) -> None:
    requests_mock.get(GEOCODING_URL, json={"results": []})

    with pytest.raises(CommandError, match="No coordinates found for Atlantis"):
        call_command("weather_fetch", city="Atlantis", stdout=StringIO())

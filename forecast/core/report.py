"""Turn an hourly series into the shape served by the HTML and JSON views."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from forecast.core.abstractions import HourlySeries


@dataclass(frozen=True)
class HourlyForecast:
    time: str
    label: str
    temperature: float


@dataclass(frozen=True)
class WeatherReport:
    """Temperature summary for one city.

    ``min_temperature`` and ``max_temperature`` are ``inf`` and ``-inf`` when
    the forecast has no hours; :attr:`has_data` tells views which case they
    are rendering.
    """

    city: str
    min_temperature: float
    max_temperature: float
    hourly: List[HourlyForecast] = field(default_factory=list)

    @property
    def has_data(self) -> bool:
        return bool(self.hourly)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "city": self.city,
            "temperature": {
                "min": _finite_or_none(self.min_temperature),
                "max": _finite_or_none(self.max_temperature),
            },
            "hourly_forecast": [
                {"time": entry.time, "temperature": entry.temperature} for entry in self.hourly
            ],
        }


def format_time(value: str) -> str:
    """Return the hour label of an ISO-like timestamp.

    ``2024-02-23T12:00`` becomes ``12`` and ``2024-02-23T15:30`` becomes
    ``15:30``. Strings without a ``T`` separator keep their text.
    """
    parts = value.split("T")
    if len(parts) < 2:
        return value
    label = parts[1]
    while label.endswith(":00"):
        label = label[: -len(":00")]
    return label


def build_report(city: str, series: HourlySeries) -> WeatherReport:
    temperatures = series.temperatures
    return WeatherReport(
        city=city,
        min_temperature=min(temperatures, default=math.inf),
        max_temperature=max(temperatures, default=-math.inf),
        hourly=[
            HourlyForecast(time=time, label=format_time(time), temperature=temperature)
            for time, temperature in zip(series.times, temperatures)
        ],
    )


def _finite_or_none(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


__all__ = ["HourlyForecast", "WeatherReport", "build_report", "format_time"]

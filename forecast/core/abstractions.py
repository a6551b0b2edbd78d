"""Core value types for the weather lookup domain."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol, Sequence, Tuple


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A geocoded location."""

    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class HourlySeries:
    """Index aligned forecast timestamps and temperatures.

    ``times[i]`` is the raw ISO-like timestamp reported by the forecast API
    for ``temperatures[i]`` (degrees Celsius).
    """

    times: Tuple[str, ...]
    temperatures: Tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.times) != len(self.temperatures):
            raise ValueError(
                f"hourly series length mismatch: {len(self.times)} times, "
                f"{len(self.temperatures)} temperatures"
            )

    def __len__(self) -> int:
        return len(self.times)


@dataclass(frozen=True, slots=True)
class SearchRecord:
    """A persisted city lookup."""

    id: int
    name: str
    latitude: float
    longitude: float
    created_at: datetime


class WeatherProvider(Protocol):
    """A data source able to geocode a city and forecast its temperature."""

    name: str

    def resolve_coordinates(self, city: str) -> Coordinate:
        """Return the best candidate coordinates for ``city``."""
        ...

    def resolve_forecast(self, coords: Coordinate) -> HourlySeries:
        """Return the hourly temperature forecast for ``coords``."""
        ...


class SearchStore(Protocol):
    """Append-only storage for resolved lookups."""

    def record(self, name: str, coords: Coordinate, at: Optional[datetime] = None) -> SearchRecord:
        ...

    def recent_searches(self, limit: int) -> Sequence[SearchRecord]:
        ...


__all__ = ["Coordinate", "HourlySeries", "SearchRecord", "WeatherProvider", "SearchStore"]

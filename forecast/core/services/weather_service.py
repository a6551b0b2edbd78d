"""City weather lookup: geocode, remember the search, forecast, summarise."""
from __future__ import annotations

import logging
from typing import List, Optional

from forecast.core.abstractions import Coordinate, SearchRecord, SearchStore, WeatherProvider
from forecast.core.exceptions import UpstreamError
from forecast.core.health import HealthRegistry
from forecast.core.history import PersistenceError
from forecast.core.report import WeatherReport, build_report


logger = logging.getLogger(__name__)


class WeatherService:
    """Request independent context shared by every view.

    Owns the provider (and with it the pooled HTTP session), the search
    history store and the health counters. Holds no per-request state.
    """

    def __init__(
        self,
        provider: WeatherProvider,
        history: SearchStore,
        health: Optional[HealthRegistry] = None,
    ) -> None:
        self.provider = provider
        self.history = history
        self.health = health or HealthRegistry()

    def lookup(self, city: str, *, record: bool = True) -> WeatherReport:
        name = (city or "").strip()
        try:
            coords = self.provider.resolve_coordinates(name)
            if record:
                self._record_search(name, coords)
            series = self.provider.resolve_forecast(coords)
        except UpstreamError as exc:
            self.health.record_error(exc.source)
            raise
        return build_report(name, series)

    def recent_searches(self, limit: int) -> List[SearchRecord]:
        try:
            return list(self.history.recent_searches(limit))
        except PersistenceError:
            self.health.record_history_error()
            raise

    def _record_search(self, name: str, coords: Coordinate) -> Optional[SearchRecord]:
        # History is best-effort: a failed write is logged and the lookup goes on.
        try:
            return self.history.record(name, coords)
        except PersistenceError as exc:
            logger.warning("Failed to save search history: %s", exc)
            self.health.record_history_error()
            return None


__all__ = ["WeatherService"]

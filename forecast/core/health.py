"""In-memory failure counters exposed by the health endpoint.

Counters live for the lifetime of the process; they are not persisted and
reset on restart.
"""
from __future__ import annotations

from datetime import datetime, timezone
from threading import Lock
from typing import Dict, Optional


class HealthRegistry:
    """Counts upstream and search history failures."""

    HISTORY = "history"

    def __init__(self) -> None:
        self._errors: Dict[str, int] = {}
        self._last_error_at: Dict[str, str] = {}
        self._lock = Lock()

    def record_error(self, source: str, when: Optional[datetime] = None) -> None:
        if not source:
            raise ValueError("source must be provided")
        when = when or datetime.now(timezone.utc)
        with self._lock:
            self._errors[source] = self._errors.get(source, 0) + 1
            self._last_error_at[source] = self._format_datetime(when)

    def record_history_error(self, when: Optional[datetime] = None) -> None:
        self.record_error(self.HISTORY, when)

    def snapshot(self) -> Dict[str, object]:
        with self._lock:
            errors = dict(self._errors)
            last_error_at = dict(self._last_error_at)
        return {"errors": errors, "last_error_at": last_error_at}

    @staticmethod
    def _format_datetime(value: datetime) -> str:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat()


__all__ = ["HealthRegistry"]

"""Search history store backed by the ``cities`` table."""
from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import List, Optional

from forecast.core import models
from forecast.core.abstractions import Coordinate, SearchRecord


logger = logging.getLogger(__name__)

# A URL naming no database file only fails once a connection is opened.
STORE_ERRORS = models.DATABASE_ERRORS + (ValueError,)


class PersistenceError(RuntimeError):
    """Raised when the history database cannot be read or written."""


class SearchHistory:
    """Append and read resolved city lookups.

    The schema is created on first use. Every storage failure, including a
    database that cannot be opened, surfaces as :class:`PersistenceError`
    with the driver error chained.
    """

    def __init__(self, session_factory: models.SessionFactory) -> None:
        self._session_factory = session_factory
        self._schema_ready = False
        self._schema_lock = threading.Lock()

    @classmethod
    def from_url(cls, url: Optional[str] = None) -> "SearchHistory":
        return cls(models.SessionFactory.from_url(url or models.default_database_url()))

    @property
    def session_factory(self) -> models.SessionFactory:
        return self._session_factory

    def ensure_schema(self) -> None:
        if self._schema_ready:
            return
        with self._schema_lock:
            if self._schema_ready:
                return
            try:
                models.run_migrations(self._session_factory)
            except STORE_ERRORS as exc:
                raise PersistenceError(f"Failed to prepare search history: {exc}") from exc
            self._schema_ready = True

    def record(
        self,
        name: str,
        coords: Coordinate,
        at: Optional[datetime] = None,
    ) -> SearchRecord:
        self.ensure_schema()
        try:
            with models.session_scope(self._session_factory) as session:
                saved = models.insert_search(
                    session,
                    name=name,
                    latitude=coords.latitude,
                    longitude=coords.longitude,
                    created_at=at,
                )
        except STORE_ERRORS as exc:
            raise PersistenceError(f"Failed to save search for {name}: {exc}") from exc
        logger.debug("Saved search %s for %s", saved.id, name)
        return saved

    def recent_searches(self, limit: int) -> List[SearchRecord]:
        if limit < 0:
            raise ValueError("limit must be non-negative")
        if limit == 0:
            return []
        self.ensure_schema()
        try:
            with models.session_scope(self._session_factory) as session:
                return models.fetch_recent_searches(session, limit)
        except STORE_ERRORS as exc:
            raise PersistenceError(f"Failed to fetch searches: {exc}") from exc


__all__ = ["PersistenceError", "SearchHistory"]

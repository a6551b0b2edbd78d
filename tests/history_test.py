from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone

import pytest

from forecast.core import models
from forecast.core.abstractions import Coordinate
from forecast.core.history import PersistenceError, SearchHistory


LONDON = Coordinate(latitude=51.5074, longitude=-0.1278)
PARIS = Coordinate(latitude=48.8566, longitude=2.3522)
BASE_TIME = datetime(2024, 11, 4, 2, 39, 19, tzinfo=timezone.utc)


def test_save_and_retrieve_search(history: SearchHistory) -> None:
    saved = history.record("London", LONDON, BASE_TIME + timedelta(seconds=10))
    history.record("Paris", PARIS, BASE_TIME + timedelta(seconds=20))

    assert saved.id > 0
    assert saved.name == "London"
    assert saved.latitude == pytest.approx(LONDON.latitude)
    assert saved.longitude == pytest.approx(LONDON.longitude)
    assert saved.created_at == BASE_TIME + timedelta(seconds=10)

    recent = history.recent_searches(10)

    assert [search.name for search in recent] == ["Paris", "London"]
    assert recent[1] == saved


def test_recent_searches_respects_limit(history: SearchHistory) -> None:
    for i in range(5):
        history.record(f"City{i}", Coordinate(0.0, 0.0), BASE_TIME + timedelta(seconds=i))

    recent = history.recent_searches(3)

    assert [search.name for search in recent] == ["City4", "City3", "City2"]


def test_recent_searches_are_ordered_by_creation_time(history: SearchHistory) -> None:
    offsets = [30, 5, 50, 0, 20, 45]
    for offset in offsets:
        history.record(f"City{offset}", Coordinate(1.0, 2.0), BASE_TIME + timedelta(minutes=offset))

    recent = history.recent_searches(4)

    assert len(recent) == 4
    stamps = [search.created_at for search in recent]
    assert stamps == sorted(stamps, reverse=True)
    assert recent[0].name == "City50"


def test_ties_are_broken_by_insertion_order(history: SearchHistory) -> None:
    first = history.record("First", LONDON, BASE_TIME)
    second = history.record("Second", PARIS, BASE_TIME)

    recent = history.recent_searches(2)

    assert [search.id for search in recent] == [second.id, first.id]


def test_record_defaults_to_now(history: SearchHistory) -> None:
    before = datetime.now(timezone.utc)
    saved = history.record("London", LONDON)
    after = datetime.now(timezone.utc)

    assert before <= saved.created_at <= after
    assert saved.created_at.tzinfo == timezone.utc


def test_naive_timestamps_are_treated_as_utc(history: SearchHistory) -> None:
    history.record("London", LONDON, datetime(2024, 1, 10, 12, 30))

    (stored,) = history.recent_searches(1)

    assert stored.created_at == datetime(2024, 1, 10, 12, 30, tzinfo=timezone.utc)


def test_limit_zero_and_negative(history: SearchHistory) -> None:
    history.record("London", LONDON)

    assert history.recent_searches(0) == []
    with pytest.raises(ValueError):
        history.recent_searches(-1)


def test_schema_is_created_once_and_shared(database_url: str) -> None:
    SearchHistory.from_url(database_url).record("London", LONDON, BASE_TIME)
    other = SearchHistory.from_url(database_url)

    assert [search.name for search in other.recent_searches(10)] == ["London"]

    models.run_migrations(other.session_factory)
    assert len(other.recent_searches(10)) == 1


def test_unopenable_database_raises_persistence_error(tmp_path) -> None:
    history = SearchHistory.from_url(f"sqlite:///{tmp_path / 'missing' / 'weather.db'}")

    with pytest.raises(PersistenceError):
        history.record("London", LONDON)
    with pytest.raises(PersistenceError):
        history.recent_searches(10)


def test_unnamed_sqlite_file_raises_persistence_error() -> None:
    history = SearchHistory.from_url("sqlite://")

    with pytest.raises(PersistenceError):
        history.record("London", LONDON)
    with pytest.raises(PersistenceError):
        history.recent_searches(10)


def test_check_database_url() -> None:
    models.check_database_url("sqlite:///weather.db")
    with pytest.raises(ValueError):
        models.check_database_url("sqlite:///")
    with pytest.raises(ValueError):
        models.check_database_url("postgres://localhost/weather")


def test_sqlite_url_paths() -> None:
    assert models.sqlite_path("sqlite:////var/lib/weather.db") == "/var/lib/weather.db"
    assert models.sqlite_path("sqlite:///weather.db") == os.path.abspath("weather.db")
    assert models.sqlite_path("sqlite://weather.db") == os.path.abspath("weather.db")
    with pytest.raises(ValueError):
        models.sqlite_path("sqlite://")


def test_detect_driver() -> None:
    assert models.detect_driver("sqlite:///weather.db") == ("sqlite", "?")
    with pytest.raises(ValueError):
        models.detect_driver("postgres://localhost/weather")


def test_mysql_schema_keeps_double_precision_coordinates() -> None:
    (create_table,) = models._MYSQL_SCHEMA

    assert "lat DOUBLE NOT NULL" in create_table
    assert "`long` DOUBLE NOT NULL" in create_table

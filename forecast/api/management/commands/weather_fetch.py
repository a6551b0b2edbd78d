"""Management command to fetch weather using the same stack as the API."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from forecast.core.context import get_weather_service
from forecast.core.exceptions import ServiceError


class Command(BaseCommand):
    help = "Fetch the hourly temperature forecast for a city and print it as JSON"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--city", type=str, required=True, help="City name")
        parser.add_argument(
            "--record",
            action="store_true",
            help="Save the lookup in the search history",
        )

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        city = options["city"]
        try:
            report = get_weather_service().lookup(city, record=options["record"])
        except ServiceError as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(json.dumps(report.as_dict()))

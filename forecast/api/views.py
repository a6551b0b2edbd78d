"""REST API views for weather lookups and search history."""
from __future__ import annotations

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from forecast.core.context import get_weather_service
from forecast.core.exceptions import CityNotFound, InvalidResponse, UpstreamError
from forecast.core.history import PersistenceError


logger = logging.getLogger(__name__)


def _error(message: str, code: int) -> Response:
    return Response({"error": message}, status=code)


class WeatherView(APIView):
    """Hourly temperature forecast for a city, as JSON."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return the forecast summary for ``?city=``."""
        city = request.query_params.get("city")
        if city is None:
            return _error("Missing required query parameter 'city'", status.HTTP_400_BAD_REQUEST)

        try:
            report = get_weather_service().lookup(city)
        except CityNotFound as exc:
            return _error(exc.message, status.HTTP_404_NOT_FOUND)
        except InvalidResponse as exc:
            return _error(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
        except UpstreamError as exc:
            return _error(str(exc), status.HTTP_502_BAD_GATEWAY)

        return Response(report.as_dict(), status=status.HTTP_200_OK)


class SearchHistoryView(APIView):
    """Most recent searches, newest first."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return up to ``?limit=`` recent searches."""
        raw_limit = request.query_params.get("limit", str(settings.RECENT_SEARCHES_LIMIT))
        try:
            limit = int(raw_limit)
        except ValueError:
            return _error("limit must be an integer", status.HTTP_400_BAD_REQUEST)
        if limit < 0:
            return _error("limit must be non-negative", status.HTTP_400_BAD_REQUEST)
        limit = min(limit, settings.MAX_SEARCHES_LIMIT)

        try:
            searches = get_weather_service().recent_searches(limit)
        except PersistenceError as exc:
            logger.error("Failed to fetch searches: %s", exc)
            return _error("Failed to fetch searches", status.HTTP_500_INTERNAL_SERVER_ERROR)

        payload = [
            {
                "id": search.id,
                "name": search.name,
                "latitude": search.latitude,
                "longitude": search.longitude,
                "created_at": search.created_at.isoformat().replace("+00:00", "Z"),
            }
            for search in searches
        ]
        return Response(payload, status=status.HTTP_200_OK)


class HealthView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):
        payload = {"status": "ok"}
        payload.update(get_weather_service().health.snapshot())
        return Response(payload, status=status.HTTP_200_OK)

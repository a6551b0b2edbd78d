"""HTML views: index, weather page and fragment, search stats."""
from __future__ import annotations

import logging

from django.conf import settings
from django.http import HttpRequest, HttpResponse, HttpResponseBadRequest
from django.shortcuts import render

from forecast.core.context import get_weather_service
from forecast.core.exceptions import CityNotFound, ServiceError
from forecast.core.history import PersistenceError


logger = logging.getLogger(__name__)

TEXT = "text/plain; charset=utf-8"
MISSING_CITY = "Missing required query parameter 'city'"


def index(request: HttpRequest) -> HttpResponse:
    return render(request, "pages/index.html")


def weather(request: HttpRequest) -> HttpResponse:
    return _render_weather(request, "pages/weather.html", record=True)


def weather_fragment(request: HttpRequest) -> HttpResponse:
    """Forecast block only, for embedding into an already loaded page."""
    return _render_weather(request, "pages/_forecast.html", record=False)


def stats(request: HttpRequest) -> HttpResponse:
    try:
        searches = get_weather_service().recent_searches(settings.RECENT_SEARCHES_LIMIT)
    except PersistenceError as exc:
        logger.error("Failed to fetch searches: %s", exc)
        return HttpResponse("Failed to fetch searches", status=500, content_type=TEXT)
    return render(request, "pages/stats.html", {"searches": searches})


def _render_weather(request: HttpRequest, template: str, *, record: bool) -> HttpResponse:
    city = request.GET.get("city")
    if city is None:
        return HttpResponseBadRequest(MISSING_CITY, content_type=TEXT)

    try:
        report = get_weather_service().lookup(city, record=record)
    except CityNotFound as exc:
        return HttpResponse(exc.message, status=404, content_type=TEXT)
    except ServiceError as exc:
        return HttpResponse(str(exc), status=500, content_type=TEXT)

    return render(request, template, {"report": report})

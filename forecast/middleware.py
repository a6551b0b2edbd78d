"""Request/response access logging."""
from __future__ import annotations

import logging
import time
from typing import Callable

from django.http import HttpRequest, HttpResponse


logger = logging.getLogger(__name__)


class RequestLoggingMiddleware:
    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        logger.info("Request: %s %s", request.method, request.get_full_path())
        started = time.perf_counter()
        response = self.get_response(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        if response.status_code >= 500:
            logger.error("Response: %s completed in %.0fms", response.status_code, elapsed_ms)
        else:
            logger.info("Response: %s completed in %.0fms", response.status_code, elapsed_ms)
        return response

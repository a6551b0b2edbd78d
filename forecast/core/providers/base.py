from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Type

import requests
from requests import Response

from forecast.core.exceptions import UpstreamError


@dataclass
class RequestConfig:
    timeout: Optional[float] = 10.0


class HTTPProvider:
    """Base class for providers talking JSON over HTTP.

    A provider keeps one :class:`requests.Session` for its lifetime so
    connections to the upstream API are pooled across requests. Every call
    is a single attempt.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()
        self._log = logging.getLogger(self.__class__.__name__)

    def close(self) -> None:
        self.session.close()

    def _handle_response(self, response: Response, error_cls: Type[UpstreamError]) -> Response:
        if response.status_code >= 400:
            self._log.error("Provider returned %s: %s", response.status_code, response.text[:200])
            raise error_cls(f"HTTP {response.status_code} from {response.url}")
        return response

    def _request(
        self,
        url: str,
        params: Mapping[str, Any],
        error_cls: Type[UpstreamError],
    ) -> Response:
        try:
            response = self.session.get(url, params=params, timeout=self.request_config.timeout)
        except requests.RequestException as exc:
            self._log.error("Request to %s failed: %s", url, exc)
            raise error_cls(str(exc)) from exc
        self._log.debug("GET %s -> %s", response.url, response.status_code)
        return self._handle_response(response, error_cls)

    def _get_json(
        self,
        url: str,
        params: Mapping[str, Any],
        error_cls: Type[UpstreamError],
    ) -> Any:
        response = self._request(url, params, error_cls)
        try:
            return response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON from %s", url, exc_info=exc)
            raise error_cls(f"Failed to parse JSON: {exc}") from exc


__all__ = ["HTTPProvider", "RequestConfig"]

from .base import HTTPProvider, RequestConfig
from .openmeteo import OpenMeteoProvider

__all__ = ["HTTPProvider", "RequestConfig", "OpenMeteoProvider"]

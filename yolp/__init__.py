"""Client for the Yahoo! Open Local Platform (YOLP) map APIs."""
from __future__ import annotations

from .client import YOLPClient
from .config import ClientConfig, RequestConfig
from .entities import Document, Feature, Geometry, GeometryType, Weather, WeatherType, ZERO_TIME
from .errors import ConfigurationError, DecodeError, RequestError, ValidationError, YOLPError
from .static import MapMode, Overlay, OverlayType, Pin, PinColor, PinStyle, StaticOptions

__all__ = [
    "ClientConfig",
    "ConfigurationError",
    "DecodeError",
    "Document",
    "Feature",
    "Geometry",
    "GeometryType",
    "MapMode",
    "Overlay",
    "OverlayType",
    "Pin",
    "PinColor",
    "PinStyle",
    "RequestConfig",
    "RequestError",
    "StaticOptions",
    "ValidationError",
    "Weather",
    "WeatherType",
    "YOLPClient",
    "YOLPError",
    "ZERO_TIME",
]

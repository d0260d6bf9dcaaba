"""YDF (Yahoo! Data Format) document model.

The weather and zip code search endpoints answer with a YDF document encoded
as JSON. Keys are PascalCase (``ResultInfo``, ``Feature``, ``Dictionary``);
every entity below is decoded from its JSON object by ``from_dict``. Missing
keys fall back to empty values, values of the wrong shape raise
:class:`~yolp.errors.DecodeError`. Geometry types must be known; other tags
(datum, style type, weather type, ...) keep unrecognised values as plain
strings.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple, Type, TypeVar, Union

from .errors import DecodeError

# Returned by Weather.time() when the date string cannot be parsed.
ZERO_TIME = datetime.min

_WEATHER_DATE = re.compile(r"(\d{4})(\d{2})(\d{2})(\d{2})(\d{2})")

E = TypeVar("E", bound=Enum)


class GeometryType(str, Enum):
    POINT = "point"
    LINE_STRING = "linestring"
    POLYGON = "polygon"
    CIRCLE = "circle"
    ELLIPSE = "ellipse"
    MULTI_GEOMETRY = "multigeometry"


class Datum(str, Enum):
    WGS = "wgs"
    TKY = "tky"


class WeatherType(str, Enum):
    OBSERVATION = "observation"
    FORECAST = "forecast"


class VertexType(str, Enum):
    START = "Start"
    END = "End"


class StyleType(str, Enum):
    ICON = "icon"
    LINE = "line"
    FILL = "fill"


class LineEnd(str, Enum):
    ARROW = "arrow"


@dataclass(frozen=True)
class Result:
    """Information about the response as a whole."""

    count: int = 0
    total: int = 0
    start: int = 0
    latency: float = 0.0
    status: int = 0
    description: str = ""
    copyright: str = ""

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Result":
        return cls(
            count=_int(payload, "Count"),
            total=_int(payload, "Total"),
            start=_int(payload, "Start"),
            latency=_float(payload, "Latency"),
            status=_int(payload, "Status"),
            description=_str(payload, "Description"),
            copyright=_str(payload, "Copyright"),
        )


@dataclass(frozen=True)
class Weather:
    """A single rainfall observation or forecast."""

    type: Union[WeatherType, str, None] = None
    date: str = ""
    rainfall: float = 0.0

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Weather":
        return cls(
            type=_tag(WeatherType, payload, "Type"),
            date=_str(payload, "Date"),
            rainfall=_float(payload, "Rainfall"),
        )

    def is_observation(self) -> bool:
        return self.type is WeatherType.OBSERVATION

    def is_forecast(self) -> bool:
        return self.type is WeatherType.FORECAST

    def is_raining(self) -> bool:
        return self.rainfall > 0

    def time(self) -> datetime:
        """Return ``date`` (``YYYYMMDDHHmm``) as a naive local datetime.

        Malformed dates give :data:`ZERO_TIME` instead of raising.
        """
        match = _WEATHER_DATE.match(self.date or "")
        if match is None:
            return ZERO_TIME
        try:
            return datetime(*(int(part) for part in match.groups()))
        except ValueError:
            return ZERO_TIME


@dataclass(frozen=True)
class WeatherList:
    weather: Tuple[Weather, ...] = ()

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "WeatherList":
        return cls(weather=tuple(Weather.from_dict(item) for item in _objects(payload, "Weather")))

    def observations(self) -> List[Weather]:
        return [item for item in self.weather if item.is_observation()]

    def forecasts(self) -> List[Weather]:
        return [item for item in self.weather if item.is_forecast()]


@dataclass(frozen=True)
class Property:
    """Area details attached to a feature, route, edge or vertex."""

    weather_area_code: int = 0
    weather_list: WeatherList = field(default_factory=WeatherList)
    address: str = ""
    country_code: str = ""

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Property":
        return cls(
            weather_area_code=_int(payload, "WeatherAreaCode"),
            weather_list=WeatherList.from_dict(_object(payload, "WeatherList")),
            address=_str(payload, "Address"),
            country_code=_str(payload, "CountryCode"),
        )


@dataclass(frozen=True)
class Polygon:
    coordinates: str = ""

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Polygon":
        return cls(coordinates=_str(payload, "Coordinates"))


@dataclass(frozen=True)
class Geometry:
    """Shape of a feature.

    ``type`` tags the variant. Only a multigeometry carries child
    ``geometries``; circles and ellipses use ``radius``, polygons may use
    ``exterior``/``interior`` rings.
    """

    type: Optional[GeometryType] = None
    id: str = ""
    target: str = ""
    coordinates: str = ""
    bounding_box: str = ""
    compress: str = ""
    compress_type: str = ""
    datum: Union[Datum, str, None] = None
    exterior: Polygon = field(default_factory=Polygon)
    interior: Polygon = field(default_factory=Polygon)
    radius: str = ""
    geometries: Tuple["Geometry", ...] = ()

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Geometry":
        geometry_type = _enum(GeometryType, payload, "Type")
        children = tuple(cls.from_dict(item) for item in _objects(payload, "Geometry"))
        if children and geometry_type is not GeometryType.MULTI_GEOMETRY:
            raise DecodeError(f"geometry of type {geometry_type} can not contain child geometries")
        return cls(
            type=geometry_type,
            id=_str(payload, "Id"),
            target=_str(payload, "Target"),
            coordinates=_str(payload, "Coordinates"),
            bounding_box=_str(payload, "BoundingBox"),
            compress=_str(payload, "Compress"),
            compress_type=_str(payload, "CompressType"),
            datum=_tag(Datum, payload, "Datum"),
            exterior=Polygon.from_dict(_object(payload, "Exterior")),
            interior=Polygon.from_dict(_object(payload, "Interior")),
            radius=_str(payload, "Radius"),
            geometries=children,
        )

    def points(self) -> List[Tuple[float, float]]:
        """Return ``coordinates`` as ``(latitude, longitude)`` pairs.

        YDF writes coordinates as space separated ``longitude,latitude``
        pairs.
        """
        points: List[Tuple[float, float]] = []
        for pair in self.coordinates.split():
            try:
                longitude, latitude = (float(value) for value in pair.split(","))
            except ValueError as exc:
                raise DecodeError(f"invalid coordinate pair {pair!r}") from exc
            points.append((latitude, longitude))
        return points


@dataclass(frozen=True)
class Vertex:
    type: Union[VertexType, str, None] = None
    property: Property = field(default_factory=Property)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Vertex":
        return cls(
            type=_tag(VertexType, payload, "Type"),
            property=Property.from_dict(_object(payload, "Property")),
        )


@dataclass(frozen=True)
class Edge:
    id: str = ""
    vertices: Tuple[Vertex, ...] = ()
    property: Property = field(default_factory=Property)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Edge":
        return cls(
            id=_str(payload, "Id"),
            vertices=tuple(Vertex.from_dict(item) for item in _objects(payload, "Vertex")),
            property=Property.from_dict(_object(payload, "Property")),
        )


@dataclass(frozen=True)
class Route:
    edges: Tuple[Edge, ...] = ()
    property: Property = field(default_factory=Property)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Route":
        return cls(
            edges=tuple(Edge.from_dict(item) for item in _objects(payload, "Edge")),
            property=Property.from_dict(_object(payload, "Property")),
        )


@dataclass(frozen=True)
class Style:
    """Rendering hint for an icon, line or fill, referenced by ``id``."""

    id: str = ""
    target: str = ""
    type: Union[StyleType, str, None] = None
    image: str = ""
    size: str = ""
    anchor: str = ""
    opacity: float = 0.0
    color: str = ""
    start_line: Union[LineEnd, str, None] = None
    end_line: Union[LineEnd, str, None] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Style":
        return cls(
            id=_str(payload, "Id"),
            target=_str(payload, "Target"),
            type=_tag(StyleType, payload, "Type"),
            image=_str(payload, "Image"),
            size=_str(payload, "Size"),
            anchor=_str(payload, "Anchor"),
            opacity=_float(payload, "Opacity"),
            color=_str(payload, "Color"),
            start_line=_tag(LineEnd, payload, "StartLine"),
            end_line=_tag(LineEnd, payload, "EndLine"),
        )


@dataclass(frozen=True)
class Dictionary:
    styles: Tuple[Style, ...] = ()

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Dictionary":
        return cls(styles=tuple(Style.from_dict(item) for item in _objects(payload, "Style")))

    def style(self, style_id: str) -> Optional[Style]:
        for style in self.styles:
            if style.id == style_id:
                return style
        return None


@dataclass(frozen=True)
class Feature:
    """A place, area or route in the document."""

    id: str = ""
    name: str = ""
    category: Tuple[str, ...] = ()
    description: str = ""
    geometry: Geometry = field(default_factory=Geometry)
    property: Property = field(default_factory=Property)
    style: Style = field(default_factory=Style)
    route_info: Tuple[Route, ...] = ()

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Feature":
        category = payload.get("Category") or ()
        if isinstance(category, str):
            category = (category,)
        elif not isinstance(category, (list, tuple)):
            raise DecodeError(f"Category must be a list, got {type(category).__name__}")
        return cls(
            id=_str(payload, "Id"),
            name=_str(payload, "Name"),
            category=tuple(str(item) for item in category),
            description=_str(payload, "Description"),
            geometry=Geometry.from_dict(_object(payload, "Geometry")),
            property=Property.from_dict(_object(payload, "Property")),
            style=Style.from_dict(_object(payload, "Style")),
            route_info=tuple(Route.from_dict(item) for item in _objects(payload, "RouteInfo")),
        )


@dataclass(frozen=True)
class Document:
    """Root node of a YDF response."""

    result_info: Result = field(default_factory=Result)
    features: Tuple[Feature, ...] = ()
    dictionary: Dictionary = field(default_factory=Dictionary)

    @classmethod
    def from_dict(cls, payload: Any) -> "Document":
        if not isinstance(payload, Mapping):
            raise DecodeError(f"document must be a JSON object, got {type(payload).__name__}")
        return cls(
            result_info=Result.from_dict(_object(payload, "ResultInfo")),
            features=tuple(Feature.from_dict(item) for item in _objects(payload, "Feature")),
            dictionary=Dictionary.from_dict(_object(payload, "Dictionary")),
        )


# decoding helpers -------------------------------------------------------
def _object(payload: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = payload.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise DecodeError(f"{key} must be an object, got {type(value).__name__}")
    return value


def _objects(payload: Mapping[str, Any], key: str) -> List[Mapping[str, Any]]:
    value = payload.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(f"{key} must be a list, got {type(value).__name__}")
    for item in value:
        if not isinstance(item, Mapping):
            raise DecodeError(f"{key} items must be objects, got {type(item).__name__}")
    return value


def _str(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise DecodeError(f"{key} must be a scalar, got {type(value).__name__}")
    return str(value)


def _int(payload: Mapping[str, Any], key: str) -> int:
    value = payload.get(key)
    if value is None or value == "":
        return 0
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise DecodeError(f"{key} must be an integer, got {value!r}") from exc


def _float(payload: Mapping[str, Any], key: str) -> float:
    value = payload.get(key)
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise DecodeError(f"{key} must be a number, got {value!r}") from exc


def _enum(enum_cls: Type[E], payload: Mapping[str, Any], key: str) -> Optional[E]:
    value = payload.get(key)
    if value is None or value == "":
        return None
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise DecodeError(f"unknown {key} {value!r}") from exc


def _tag(enum_cls: Type[E], payload: Mapping[str, Any], key: str) -> Union[E, str, None]:
    """Like ``_enum`` but unknown values are kept as the raw string."""
    value = payload.get(key)
    if value is None or value == "":
        return None
    if isinstance(value, (dict, list)):
        raise DecodeError(f"{key} must be a scalar, got {type(value).__name__}")
    try:
        return enum_cls(value)
    except ValueError:
        return str(value)


__all__ = [
    "ZERO_TIME",
    "Datum",
    "Dictionary",
    "Document",
    "Edge",
    "Feature",
    "Geometry",
    "GeometryType",
    "LineEnd",
    "Polygon",
    "Property",
    "Result",
    "Route",
    "Style",
    "StyleType",
    "Vertex",
    "VertexType",
    "Weather",
    "WeatherList",
    "WeatherType",
]

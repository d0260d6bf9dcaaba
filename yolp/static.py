"""Static map options and their query string encoding.

API document: https://developer.yahoo.co.jp/webapi/map/openlocalplatform/v1/static.html
"""
from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Type, TypeVar
from urllib.parse import quote_plus

from .errors import ValidationError

DEFAULT_ZOOM_RANGE = (1, 20)
RAINFALL_MAX_ZOOM = 15
PIN_NUMBER_RANGE = (0, 99)

C = TypeVar("C", bound=Enum)


class MapMode(str, Enum):
    NORMAL = ""
    PHOTO = "photo"
    UNDERGROUND = "map-b1"
    HD = "hd"
    HYBRID = "hybrid"
    BLANK = "blankmap"
    OSM = "osm"


_ZOOM_RANGES = {
    MapMode.UNDERGROUND: (19, 21),
    MapMode.BLANK: (11, 20),
}


class PinStyle(Enum):
    NORMAL = "normal"
    NUMBER = "number"
    ALPHABET = "alphabet"
    STAR = "star"


class PinColor(str, Enum):
    DEFAULT = ""
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"


class OverlayType(str, Enum):
    NONE = ""
    RAINFALL = "rainfall"


def format_coordinate(value: float) -> str:
    return f"{value:f}"


def _choice(enum_cls: Type[C], value: object, name: str) -> C:
    try:
        return enum_cls(value)
    except ValueError as exc:
        allowed = ", ".join(repr(member.value) for member in enum_cls)
        raise ValidationError(f"{name} must be one of {allowed}, got {value!r}") from exc


@dataclass
class Pin:
    """A marker drawn on the map.

    ``number`` is used by :attr:`PinStyle.NUMBER` pins and ``alphabet`` by
    :attr:`PinStyle.ALPHABET` pins; other styles ignore both.
    """

    latitude: float
    longitude: float
    label: str = ""
    color: PinColor = PinColor.DEFAULT
    style: PinStyle = PinStyle.NORMAL
    number: int = 0
    alphabet: str = "a"

    def validate(self) -> None:
        style = _choice(PinStyle, self.style, "Pin.style")
        _choice(PinColor, self.color, "Pin.color")
        if style is PinStyle.NUMBER and not self._number_in_range():
            low, high = PIN_NUMBER_RANGE
            raise ValidationError(f"Pin.number must be between {low} to {high} if the style is number, got {self.number}")
        if style is PinStyle.ALPHABET and not self._alphabet_in_range():
            raise ValidationError(
                f"Pin.alphabet must be between 'a' to 'z' if the style is alphabet, got {self.alphabet!r}"
            )

    def query_key(self) -> str:
        # Unknown styles and out of range values fall back to a plain pin.
        try:
            style = PinStyle(self.style)
        except ValueError:
            return "pin"
        if style is PinStyle.NUMBER and self._number_in_range():
            return f"pin{self.number}"
        if style is PinStyle.ALPHABET and self._alphabet_in_range():
            return f"pin{self.alphabet}"
        if style is PinStyle.STAR:
            return "pindefault"
        return "pin"

    def query_value(self) -> str:
        values = [format_coordinate(self.latitude), format_coordinate(self.longitude)]
        if self.label:
            values.append(quote_plus(self.label))
        color = PinColor(self.color)
        if color is not PinColor.DEFAULT:
            values.append(quote_plus(color.value))
        return ",".join(values)

    def _number_in_range(self) -> bool:
        low, high = PIN_NUMBER_RANGE
        return low <= self.number <= high

    def _alphabet_in_range(self) -> bool:
        return len(self.alphabet) == 1 and "a" <= self.alphabet <= "z"


@dataclass
class Overlay:
    """A layer drawn over the map. Only rainfall is offered by the API."""

    type: OverlayType = OverlayType.NONE
    date: Optional[datetime.date] = None
    date_label: bool = False

    def effective_type(self) -> OverlayType:
        overlay_type = OverlayType(self.type)
        if overlay_type is OverlayType.NONE:
            return OverlayType.RAINFALL
        return overlay_type

    def query_value(self) -> str:
        parts = [f"type:{quote_plus(self.effective_type().value)}"]
        if self.date is not None:
            parts.append(f"date:{self.date.strftime('%Y%m%d')}")
        parts.append(f"datelabel:{'on' if self.date_label else 'off'}")
        return "|".join(parts)


@dataclass
class StaticOptions:
    """Rendering options of a static map request.

    Zero ``width``, ``height`` and ``zoom`` leave the value to the API
    default.
    """

    mode: MapMode = MapMode.NORMAL
    width: int = 0
    height: int = 0
    pointer: bool = False
    zoom: int = 0
    pins: List[Pin] = field(default_factory=list)
    overlay: Optional[Overlay] = None

    def zoom_range(self) -> Tuple[int, int]:
        return _ZOOM_RANGES.get(MapMode(self.mode), DEFAULT_ZOOM_RANGE)

    def validate(self) -> None:
        """Raise :class:`ValidationError` for the first violated constraint."""
        if self.width < 0:
            raise ValidationError(f"Width must be greater than 0 if it isn't 0, got {self.width}")
        if self.height < 0:
            raise ValidationError(f"Height must be greater than 0 if it isn't 0, got {self.height}")
        mode = _choice(MapMode, self.mode, "Mode")
        if self.zoom != 0:
            zoom_min, zoom_max = self.zoom_range()
            if not zoom_min <= self.zoom <= zoom_max:
                raise ValidationError(
                    f"Zoom must be between {zoom_min} to {zoom_max} if it isn't 0 in mode "
                    f"{mode.name.lower()}, got {self.zoom}"
                )
        for pin in self.pins:
            pin.validate()
        if self.overlay is not None:
            _choice(OverlayType, self.overlay.type, "Overlay.type")
            if self.overlay.effective_type() is OverlayType.RAINFALL and self.zoom > RAINFALL_MAX_ZOOM:
                raise ValidationError(
                    f"Zoom must be {RAINFALL_MAX_ZOOM} or less with the rainfall overlay, got {self.zoom}"
                )

    def query_params(self) -> Dict[str, str]:
        query: Dict[str, str] = {}
        mode = MapMode(self.mode)
        if mode is not MapMode.NORMAL:
            query["mode"] = quote_plus(mode.value)
        if self.width > 0:
            query["width"] = str(self.width)
        if self.height > 0:
            query["height"] = str(self.height)
        if self.pointer:
            query["pointer"] = "on"
        if self.zoom > 0:
            query["z"] = str(self.zoom)
        for pin in self.pins:
            query[pin.query_key()] = pin.query_value()
        if self.overlay is not None:
            query["overlay"] = self.overlay.query_value()
        return query


__all__ = [
    "DEFAULT_ZOOM_RANGE",
    "RAINFALL_MAX_ZOOM",
    "MapMode",
    "Overlay",
    "OverlayType",
    "Pin",
    "PinColor",
    "PinStyle",
    "StaticOptions",
    "format_coordinate",
]

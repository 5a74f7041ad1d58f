"""Sinks that receive serialized geometries, properties and features."""

from __future__ import annotations

import abc
import json
import math
from decimal import Decimal
from typing import Any, TextIO


def _format_number(value: float) -> str:
    """Shortest positional text for a number, without a trailing ``.0``."""
    if isinstance(value, int):
        return repr(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        if value == 0 and math.copysign(1.0, value) < 0:
            return "-0"
        return repr(int(value))
    text = repr(value)
    if "e" in text:
        text = format(Decimal(text), "f")
    return text


class GeometrySink(abc.ABC):
    """Receives the events of one geometry."""

    @abc.abstractmethod
    def coord(self, index: int, x: float, y: float) -> None:
        """Receive the coordinate at ``index`` of the current run."""

    @abc.abstractmethod
    def point_start(self, index: int) -> None:
        """Open a point."""

    @abc.abstractmethod
    def point_end(self, index: int) -> None:
        """Close a point."""

    @abc.abstractmethod
    def linestring_start(self, is_child: bool, index: int, coord_len: int) -> None:
        """Open a line string; ``is_child`` marks a polygon ring."""

    @abc.abstractmethod
    def linestring_end(self, is_child: bool, index: int) -> None:
        """Close a line string."""

    @abc.abstractmethod
    def polygon_start(self, is_child: bool, index: int) -> None:
        """Open a polygon."""

    @abc.abstractmethod
    def polygon_end(self, is_child: bool, index: int) -> None:
        """Close a polygon."""

    @abc.abstractmethod
    def geometry_start(self) -> None:
        """Open the geometry."""

    @abc.abstractmethod
    def geometry_end(self) -> None:
        """Close the geometry."""


class PropertySink(abc.ABC):
    """Receives property columns."""

    @abc.abstractmethod
    def int(self, index: int, key: str, value: int) -> None:
        """Receive an integer column."""

    @abc.abstractmethod
    def float(self, index: int, key: str, value: float) -> None:
        """Receive a floating point column."""

    @abc.abstractmethod
    def bytes(self, index: int, key: str, value: bytes) -> None:
        """Receive a binary column."""

    @abc.abstractmethod
    def bool(self, index: int, key: str, value: bool) -> None:
        """Receive a boolean column."""

    @abc.abstractmethod
    def str(self, index: int, key: str, value: str) -> None:
        """Receive a text column."""


class FeatureSink(GeometrySink, PropertySink):
    """Receives whole features: a geometry plus properties."""

    @abc.abstractmethod
    def properties_start(self) -> None:
        """Open the property block of the current feature."""

    @abc.abstractmethod
    def properties_end(self) -> None:
        """Close the property block of the current feature."""

    @abc.abstractmethod
    def feature_start(self, index: int) -> None:
        """Open feature number ``index``."""

    @abc.abstractmethod
    def feature_end(self, index: int) -> None:
        """Close feature number ``index``."""


class NullSink(FeatureSink):
    """Accepts every event, discards it and counts how many were discarded."""

    def __init__(self) -> None:
        self.discarded = 0

    def _discard(self, *args: Any) -> None:
        self.discarded += 1

    coord = point_start = point_end = _discard
    linestring_start = linestring_end = polygon_start = polygon_end = _discard
    geometry_start = geometry_end = _discard
    int = float = bytes = bool = str = _discard
    properties_start = properties_end = feature_start = feature_end = _discard


class _TextWriter(NullSink):
    """Base of the text writers: events it does not override are discarded."""

    def __init__(self, out: TextIO) -> None:
        super().__init__()
        self._out = out

    def _comma(self, index: int, separator: str = ",") -> None:
        if index > 0:
            self._out.write(separator)


class WktWriter(_TextWriter):
    """Writes geometries as Well-Known Text; properties are dropped."""

    def __init__(self, out: TextIO) -> None:
        super().__init__(out)
        self._open: list[bool] = []

    def _close(self, *args: Any) -> None:
        if self._open and self._open.pop():
            self._out.write(")")

    point_end = linestring_end = polygon_end = _close

    def coord(self, index, x, y):
        self._comma(index)
        self._out.write(f"{_format_number(x)} {_format_number(y)}")

    def point_start(self, index):
        self._comma(index)
        self._out.write("POINT(")
        self._open.append(True)

    def linestring_start(self, is_child, index, coord_len):
        self._comma(index)
        if not is_child:
            self._out.write("LINESTRING")
        if coord_len == 0:
            self._out.write("EMPTY" if is_child else " EMPTY")
            self._open.append(False)
        else:
            self._out.write("(")
            self._open.append(True)

    def polygon_start(self, is_child, index):
        self._comma(index)
        if not is_child:
            self._out.write("POLYGON")
        self._out.write("(")
        self._open.append(True)

    def feature_start(self, index):
        self._comma(index, "\n")


class GeoJsonWriter(_TextWriter):
    """Writes features as GeoJSON Feature objects separated by ``,\\n``."""

    def __init__(self, out: TextIO) -> None:
        super().__init__(out)

    def _property(self, index: int, key: str, text: str) -> None:
        self._comma(index, ", ")
        self._out.write(f"{json.dumps(key, ensure_ascii=False)}: {text}")

    def _begin(self, is_child: bool, index: int, kind: str) -> None:
        self._comma(index)
        self._out.write("[" if is_child else f'{{"type": "{kind}", "coordinates": [')

    def _finish(self, is_child: bool, *args: Any) -> None:
        self._out.write("]" if is_child else "]}")

    linestring_end = polygon_end = _finish

    def _number(self, index: int, key: str, value: Any) -> None:
        self._property(index, key, _format_number(value))

    int = float = _number

    def coord(self, index, x, y):
        self._comma(index)
        self._out.write(f"[{_format_number(x)},{_format_number(y)}]")

    def point_start(self, index):
        self._comma(index)
        self._out.write('{"type": "Point", "coordinates": ')

    def point_end(self, index):
        self._out.write("}")

    def linestring_start(self, is_child, index, coord_len):
        self._begin(is_child, index, "LineString")

    def polygon_start(self, is_child, index):
        self._begin(is_child, index, "Polygon")

    def geometry_start(self):
        self._out.write(', "geometry": ')

    def bytes(self, index, key, value):
        self._property(index, key, json.dumps(list(value)))

    def bool(self, index, key, value):
        self._property(index, key, "true" if value else "false")

    def str(self, index, key, value):
        self._property(index, key, json.dumps(value, ensure_ascii=False))

    def properties_start(self):
        self._out.write(', "properties": {')

    def properties_end(self):
        self._out.write("}")

    def feature_start(self, index):
        self._comma(index, ",\n")
        self._out.write('{"type": "Feature"')

    def feature_end(self, index):
        self._out.write("}")
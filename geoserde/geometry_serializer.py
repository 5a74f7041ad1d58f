"""A serializer that writes geometry values to a :class:`GeometrySink`."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Sequence, Sized
from dataclasses import dataclass
from typing import Any, Callable, NoReturn, Optional

from geoserde.errors import InvalidGeometryStructureError, InvalidStateError, SinkCausedError
from geoserde.model import Serializer, serialize
from geoserde.sink import GeometrySink


class _Kind(enum.Enum):
    COORD = "Coord"
    POINT = "Point"
    LINE = "Line"
    LINE_STRING = "LineString"
    POLYGON = "Polygon"
    RECT = "Rect"


_STRUCT_KINDS = {
    "Coord": _Kind.COORD,
    "Line": _Kind.LINE,
    "Polygon": _Kind.POLYGON,
    "Rect": _Kind.RECT,
}

_NEWTYPE_KINDS = {
    "LineString": _Kind.LINE_STRING,
    "Point": _Kind.POINT,
}


@dataclass
class _Container:
    kind: _Kind
    length: int = 0
    start: Optional[tuple[float, float]] = None

    @property
    def name(self) -> str:
        return self.kind.value


class GeometrySerializer(Serializer):
    """Serialize one geometry to a :class:`GeometrySink`.

    Points, lines, line strings, polygons and rectangles are understood;
    any other value raises :class:`InvalidGeometryStructureError`.
    """

    def __init__(self, sink: GeometrySink) -> None:
        self._sink = sink
        self._used = False
        self._stack: list[_Container] = []
        self._x: Optional[float] = None
        self._coord_index = 0
        self._point_index = 0
        self._linestring_index = 0
        self._polygon_index = 0

    def is_sink_used(self) -> bool:
        """Whether anything has been written to the sink."""
        return self._used

    # -- stack -------------------------------------------------------------

    def _top(self) -> Optional[_Container]:
        return self._stack[-1] if self._stack else None

    def _pop(self) -> _Container:
        if not self._stack:
            raise InvalidStateError()
        return self._stack.pop()

    def _end_if_outermost(self) -> None:
        if not self._stack:
            self._emit(self._sink.geometry_end)

    @staticmethod
    def _reject(actual: str) -> NoReturn:
        raise InvalidGeometryStructureError(actual)

    # -- sink events -------------------------------------------------------

    def _emit(self, call: Callable[..., Any], *args: Any) -> None:
        self._used = True
        try:
            call(*args)
        except Exception as exc:
            raise SinkCausedError(exc) from exc

    def _write_coord(self, x: float, y: float) -> None:
        self._emit(self._sink.coord, self._coord_index, x, y)
        self._coord_index += 1

    def _start_point_geometry(self) -> None:
        if self._point_index == 0:
            self._emit(self._sink.geometry_start)
        self._emit(self._sink.point_start, self._point_index)

    def _end_point_geometry(self) -> None:
        self._emit(self._sink.point_end, self._point_index)
        self._point_index += 1

    def _start_polygon_geometry(self) -> None:
        if self._polygon_index == 0:
            self._emit(self._sink.geometry_start)
        self._emit(self._sink.polygon_start, False, self._polygon_index)

    def _end_polygon_geometry(self) -> None:
        self._emit(self._sink.polygon_end, False, self._polygon_index)
        self._polygon_index += 1

    def _start_linestring(self, is_child: bool, coord_len: int) -> None:
        """Open a standalone line string, or a polygon ring when ``is_child``."""
        if self._linestring_index == 0:
            if is_child:
                self._start_polygon_geometry()
            else:
                self._emit(self._sink.geometry_start)
        self._emit(self._sink.linestring_start, is_child, self._linestring_index, coord_len)

    def _end_linestring(self, is_child: bool) -> None:
        self._emit(self._sink.linestring_end, is_child, self._linestring_index)
        self._linestring_index += 1
        self._coord_index = 0

    def _start_run(self) -> None:
        first = self._stack[0]
        second = self._stack[1] if len(self._stack) > 1 else None
        if first.kind is _Kind.POINT:
            self._start_point_geometry()
        elif first.kind is _Kind.LINE:
            self._start_linestring(False, 2)
        elif first.kind is _Kind.LINE_STRING:
            self._start_linestring(False, first.length)
        elif first.kind is _Kind.POLYGON and second is not None and second.kind is _Kind.LINE_STRING:
            self._start_linestring(True, second.length)
        elif first.kind is _Kind.RECT:
            self._start_linestring(True, 5)
        else:
            path = " > ".join(c.name for c in self._stack)
            raise InvalidGeometryStructureError(path, "geometry type")

    # -- scalars -----------------------------------------------------------

    def serialize_bool(self, value: bool) -> None:
        self._reject("bool")

    def serialize_int(self, value: int) -> None:
        self.serialize_float(float(value))

    def serialize_float(self, value: float) -> None:
        top = self._top()
        if top is None or top.kind is not _Kind.COORD:
            raise InvalidGeometryStructureError(top.name if top else "None", "Coord")

        value = float(value)
        if self._x is None:
            self._x = value
            return
        x, y = self._x, value

        if self._coord_index == 0:
            self._start_run()

        first = self._stack[0]
        if first.kind is _Kind.RECT:
            if self._coord_index == 0:
                first.start = (x, y)
                self._write_coord(x, y)
            elif self._coord_index == 1:
                if first.start is None:
                    raise InvalidStateError()
                x0, y0 = first.start
                for cx, cy in ((x0, y), (x, y), (x, y0), (x0, y0)):
                    self._write_coord(cx, cy)
            else:
                raise InvalidGeometryStructureError("more than 2", "2 coords")
        else:
            self._write_coord(x, y)

        self._x = None

    def serialize_str(self, value: str) -> None:
        self._reject("str")

    def serialize_bytes(self, value: bytes) -> None:
        self._reject("bytes")

    def serialize_none(self) -> None:
        self._reject("None")

    def serialize_unit(self) -> None:
        self._reject("unit")

    def serialize_unit_variant(self, name: str, variant: str) -> None:
        self._reject("unit variant")

    # -- containers --------------------------------------------------------

    def serialize_newtype_struct(self, name: str, value: Any) -> None:
        kind = _NEWTYPE_KINDS.get(name)
        if kind is None:
            raise InvalidGeometryStructureError(name, "geometry type")
        self._stack.append(_Container(kind))

        serialize(value, self)

        container = self._pop()
        if container.kind is _Kind.POINT:
            self._end_point_geometry()
        elif container.kind is _Kind.LINE_STRING:
            parent = self._top()
            if parent is None:
                self._end_linestring(False)
            elif parent.kind is _Kind.POLYGON:
                self._end_linestring(True)
            else:
                raise InvalidGeometryStructureError(f"LineString in {parent.name}", "geometry type")
        else:
            raise InvalidStateError()

        self._end_if_outermost()

    def serialize_newtype_variant(self, name: str, variant: str, value: Any) -> None:
        raise InvalidGeometryStructureError(name, "Geometry variant")

    def serialize_seq(self, items: Iterable[Any]) -> None:
        top = self._top()
        if top is None:
            raise InvalidGeometryStructureError("raw sequence", "sequence in container")
        if top.kind is _Kind.LINE_STRING:
            if not isinstance(items, Sized):
                raise InvalidGeometryStructureError("unknown length", "known length seq")
            top.length = len(items)
        elif top.kind is not _Kind.POLYGON:
            raise InvalidGeometryStructureError(f"sequence in {top.name}", "sequence container")
        for item in items:
            serialize(item, self)

    def serialize_tuple(self, items: Sequence[Any]) -> None:
        self._reject("tuple")

    def serialize_tuple_struct(self, name: str, items: Sequence[Any]) -> None:
        self._reject("tuple struct")

    def serialize_map(self, items: Sequence[tuple[Any, Any]]) -> None:
        self._reject("map")

    def serialize_struct(self, name: str, fields: Sequence[tuple[str, Any]]) -> None:
        kind = _STRUCT_KINDS.get(name)
        if kind is None:
            raise InvalidGeometryStructureError(name)
        self._stack.append(_Container(kind))

        for _key, value in fields:
            serialize(value, self)

        container = self._pop()
        if container.kind is _Kind.COORD:
            if self._coord_index == 0:
                raise InvalidGeometryStructureError("Coord end", "x y")
        elif container.kind is _Kind.LINE:
            if self._coord_index != 2:
                raise InvalidGeometryStructureError("Line end", "2 coords")
            self._end_linestring(False)
        elif container.kind is _Kind.RECT:
            if self._coord_index != 5:
                raise InvalidGeometryStructureError("Rect end", "2 coords")
            self._end_linestring(True)
            self._end_polygon_geometry()
        elif container.kind is _Kind.POLYGON:
            if self._linestring_index == 0:
                raise InvalidGeometryStructureError("Polygon end", "LineString")
            self._end_polygon_geometry()
        else:
            raise InvalidStateError()

        self._end_if_outermost()
"""Planar geometry types that describe themselves to a serializer."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any


def _to_coord(value: Any) -> "Coord":
    if isinstance(value, Coord):
        return value
    if isinstance(value, Point):
        return value.coord
    x, y = value
    return Coord(x, y)


def _assign(obj: Any, **values: Any) -> None:
    """Set normalised field values on a frozen dataclass instance."""
    for name, value in values.items():
        object.__setattr__(obj, name, value)


@dataclass(frozen=True)
class Coord:
    """A single x/y position."""

    x: float
    y: float

    def serialize(self, serializer: Any) -> Any:
        return serializer.serialize_struct("Coord", [("x", self.x), ("y", self.y)])


@dataclass(frozen=True)
class Point:
    """A point geometry."""

    x: float
    y: float

    @property
    def coord(self) -> Coord:
        return Coord(self.x, self.y)

    def serialize(self, serializer: Any) -> Any:
        return serializer.serialize_newtype_struct("Point", self.coord)


@dataclass(frozen=True)
class Line:
    """A segment between two coordinates."""

    start: Coord
    end: Coord

    def __post_init__(self) -> None:
        _assign(self, start=_to_coord(self.start), end=_to_coord(self.end))

    def serialize(self, serializer: Any) -> Any:
        return serializer.serialize_struct("Line", [("start", self.start), ("end", self.end)])


@dataclass(frozen=True)
class LineString:
    """An ordered run of coordinates."""

    coords: tuple[Coord, ...] = ()

    def __post_init__(self) -> None:
        _assign(self, coords=tuple(_to_coord(c) for c in self.coords))

    def __len__(self) -> int:
        return len(self.coords)

    def __iter__(self) -> Iterator[Coord]:
        return iter(self.coords)

    def serialize(self, serializer: Any) -> Any:
        return serializer.serialize_newtype_struct("LineString", list(self.coords))


def _closed_ring(ring: Any) -> LineString:
    line = ring if isinstance(ring, LineString) else LineString(ring)
    coords = line.coords
    if coords and coords[0] != coords[-1]:
        return LineString(coords + (coords[0],))
    return line


@dataclass(frozen=True)
class Polygon:
    """An exterior ring with optional holes; rings are closed on creation."""

    exterior: LineString
    interiors: tuple[LineString, ...] = ()

    def __post_init__(self) -> None:
        _assign(
            self,
            exterior=_closed_ring(self.exterior),
            interiors=tuple(_closed_ring(r) for r in self.interiors),
        )

    def serialize(self, serializer: Any) -> Any:
        return serializer.serialize_struct(
            "Polygon",
            [("exterior", self.exterior), ("interiors", list(self.interiors))],
        )


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle; corners are normalised to min and max."""

    min: Coord
    max: Coord

    def __post_init__(self) -> None:
        a = _to_coord(self.min)
        b = _to_coord(self.max)
        _assign(
            self,
            min=Coord(min(a.x, b.x), min(a.y, b.y)),
            max=Coord(max(a.x, b.x), max(a.y, b.y)),
        )

    def serialize(self, serializer: Any) -> Any:
        return serializer.serialize_struct("Rect", [("min", self.min), ("max", self.max)])
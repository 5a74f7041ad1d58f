"""Reading features back into Python objects: a geometry plus typed properties."""

from __future__ import annotations

import abc
import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, TypeVar

from geoserde.geometry import LineString, Point

_GEOMETRY_KEY = "geoserde_geometry"
_SUPPORTED_GEOMETRIES = (Point, LineString)

_KNOWN_TYPES: dict[str, Any] = {
    "bool": bool,
    "int": int,
    "float": float,
    "str": str,
    "bytes": bytes,
    "Any": Any,
    "Point": Point,
    "LineString": LineString,
}

T = TypeVar("T")


def _resolve(annotation: Any) -> Any:
    """Turn a field annotation, possibly a string, into a type."""
    if not isinstance(annotation, str):
        return annotation
    name = annotation.strip()
    if name in _KNOWN_TYPES:
        return _KNOWN_TYPES[name]
    return _KNOWN_TYPES.get(name.rsplit(".", 1)[-1], Any)


class FeatureProperties(abc.ABC):
    """A source of named property values, read through a processor."""

    @abc.abstractmethod
    def process_properties(self, processor: Any) -> bool:
        """Call ``processor.property(index, name, value)`` for each property.

        Stop as soon as the processor returns ``True`` and report whether
        processing was stopped early.
        """


@dataclass
class _PropertyFinder:
    name: str
    value: Any = None
    found: bool = False

    def property(self, index: int, name: str, value: Any) -> bool:
        if name != self.name:
            return False
        self.value = value
        self.found = True
        return True


def _coerce(hint: Any, value: Any, name: str) -> Any:
    if hint is bool:
        if isinstance(value, bool):
            return value
    elif hint is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif hint is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    elif hint is str:
        if isinstance(value, str):
            return value
    else:
        return value
    raise TypeError(
        f"property {name!r} holds {type(value).__name__}, expected {hint.__name__}"
    )


class PropertiesAdapter:
    """Reads the properties of one feature into a dataclass.

    The source is either a mapping of names to values or a
    :class:`FeatureProperties`. Each field of the target dataclass is
    looked up by name and checked against its annotated type.
    """

    def __init__(self, source: Any) -> None:
        self._source = source

    def _value(self, name: str) -> Any:
        if isinstance(self._source, Mapping):
            return self._source[name]
        finder = _PropertyFinder(name)
        self._source.process_properties(finder)
        if not finder.found:
            raise KeyError(name)
        return finder.value

    def deserialize(self, cls: Any) -> Any:
        """Build an instance of ``cls``; ``None`` ignores the properties."""
        if cls is None or cls is type(None):
            return None
        if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
            raise TypeError(f"properties must be read into a dataclass, not {cls!r}")
        values = {
            f.name: _coerce(_resolve(f.type), self._value(f.name), f.name)
            for f in dataclasses.fields(cls)
            if f.init
        }
        return cls(**values)


def deserialize_geometry(geometry_type: Optional[type], geometry: Any) -> Any:
    """Check ``geometry`` against ``geometry_type``; ``None`` ignores it."""
    if geometry_type is None:
        return None
    if geometry_type not in _SUPPORTED_GEOMETRIES:
        raise TypeError(f"{geometry_type!r} cannot be read as a geometry")
    if not isinstance(geometry, geometry_type):
        raise TypeError(
            f"expected a {geometry_type.__name__} geometry, found {type(geometry).__name__}"
        )
    return geometry


def deserialize_properties(properties_type: Any, source: Any) -> Any:
    """Read the properties in ``source`` into ``properties_type``."""
    adapter = source if isinstance(source, PropertiesAdapter) else PropertiesAdapter(source)
    return adapter.deserialize(properties_type)


@dataclass(frozen=True)
class FeatureParser:
    """One feature read from a format: its geometry and its property source."""

    geometry: Any
    properties: Any = field(default_factory=dict)

    def parse_feature(self, geometry_type: Optional[type], properties_type: Any) -> tuple[Any, Any]:
        """Return the geometry and properties read into the requested types."""
        geometry = deserialize_geometry(geometry_type, self.geometry)
        properties = deserialize_properties(properties_type, self.properties)
        return geometry, properties


def geometry_field(**kwargs: Any) -> Any:
    """A dataclass field marked as the geometry of a feature."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[_GEOMETRY_KEY] = True
    return dataclasses.field(metadata=metadata, **kwargs)


def geo_deserialize(cls: type[T]) -> type[T]:
    """Give a dataclass a ``deserialize_feature(parser)`` class method.

    The field made with :func:`geometry_field` receives the geometry;
    every other field is read from the feature's properties.
    """
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise TypeError("only dataclasses can be read as features")
    geometry_name: Optional[str] = None
    geometry_type: Optional[type] = None
    props: list[tuple[str, Any]] = []
    for f in dataclasses.fields(cls):
        if not f.init:
            continue
        if f.metadata.get(_GEOMETRY_KEY):
            if geometry_name is not None:
                raise TypeError("a feature may have only one geometry field")
            geometry_name = f.name
            geometry_type = _resolve(f.type)
        else:
            props.append((f.name, _resolve(f.type)))

    if geometry_name is not None and geometry_type not in _SUPPORTED_GEOMETRIES:
        raise TypeError(f"geometry field {geometry_name!r} must be a Point or LineString")

    properties_type = dataclasses.make_dataclass(f"{cls.__name__}Properties", props)

    def deserialize_feature(klass: type[T], parser: Any) -> T:
        geometry, properties = parser.parse_feature(geometry_type, properties_type)
        values = {name: getattr(properties, name) for name, _ in props}
        if geometry_name is not None:
            values[geometry_name] = geometry
        return klass(**values)

    setattr(cls, "deserialize_feature", classmethod(deserialize_feature))
    return cls


def deserialize_feature(cls: type[T], parser: Any) -> T:
    """Read one feature from ``parser`` into ``cls``.

    Bare ``Point`` and ``LineString`` take the geometry only; other
    classes must have been decorated with :func:`geo_deserialize`.
    """
    if cls in _SUPPORTED_GEOMETRIES:
        return parser.parse_feature(cls, None)[0]
    reader = getattr(cls, "deserialize_feature", None)
    if reader is None or not callable(reader):
        raise TypeError(f"{cls!r} cannot be read as a feature")
    return reader(parser)
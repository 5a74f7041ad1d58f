"""A serializer that writes geographic features to a :class:`FeatureSink`."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Callable

from geoserde.errors import (
    InvalidFeatureStructureError,
    InvalidStateError,
    NoGeometryFieldError,
    SerializeError,
    SinkCausedError,
)
from geoserde.geometry_serializer import GeometrySerializer
from geoserde.model import Serializer, serialize
from geoserde.property_serializer import PropertySerializer
from geoserde.sink import FeatureSink


class FeatureSerializer(Serializer):
    """Serialize geographic features to a :class:`FeatureSink`.

    A feature is a struct. Its first field that serializes as a geometry
    becomes the geometry; every other field is a property. A feature
    without a geometry raises :class:`NoGeometryFieldError`. Sequences of
    features are written one after another.
    """

    def __init__(self, sink: FeatureSink) -> None:
        self._sink = sink
        self._feat_index = 0
        self._remaining_field = 0
        self._has_geom = False
        self._prop_index = 0

    def __len__(self) -> int:
        """The number of features written to the sink."""
        return self._feat_index

    def _emit(self, call: Callable[..., Any], *args: Any) -> None:
        try:
            call(*args)
        except Exception as exc:
            raise SinkCausedError(exc) from exc

    # -- values that cannot be a feature -------------------------------------

    def serialize_bool(self, value: bool) -> None:
        raise InvalidFeatureStructureError()

    def serialize_int(self, value: int) -> None:
        raise InvalidFeatureStructureError()

    def serialize_float(self, value: float) -> None:
        raise InvalidFeatureStructureError()

    def serialize_str(self, value: str) -> None:
        raise InvalidFeatureStructureError()

    def serialize_bytes(self, value: bytes) -> None:
        raise InvalidFeatureStructureError()

    def serialize_none(self) -> None:
        pass

    def serialize_unit(self) -> None:
        raise InvalidFeatureStructureError()

    def serialize_unit_variant(self, name: str, variant: str) -> None:
        raise InvalidFeatureStructureError()

    def serialize_tuple_struct(self, name: str, items: Sequence[Any]) -> None:
        raise InvalidFeatureStructureError()

    def serialize_map(self, items: Sequence[tuple[Any, Any]]) -> None:
        raise InvalidFeatureStructureError()

    # -- wrappers and layers -----------------------------------------------

    def serialize_newtype_struct(self, name: str, value: Any) -> None:
        serialize(value, self)

    def serialize_newtype_variant(self, name: str, variant: str, value: Any) -> None:
        serialize(value, self)

    def serialize_seq(self, items: Iterable[Any]) -> None:
        for item in items:
            serialize(item, self)

    def serialize_tuple(self, items: Sequence[Any]) -> None:
        self.serialize_seq(items)

    # -- the feature itself --------------------------------------------------

    def serialize_struct(self, name: str, fields: Sequence[tuple[str, Any]]) -> None:
        fields = list(fields)
        self._remaining_field = len(fields)
        self._emit(self._sink.feature_start, self._feat_index)
        for key, value in fields:
            self._serialize_field(key, value)
        self._end_feature()

    def _serialize_field(self, key: str, value: Any) -> None:
        if self._remaining_field == 0:
            raise InvalidStateError()
        self._remaining_field -= 1

        if not self._has_geom:
            geom = GeometrySerializer(self._sink)
            try:
                serialize(value, geom)
            except SerializeError:
                if geom.is_sink_used():
                    raise
            else:
                self._has_geom = True
                return

        if self._prop_index == 0:
            self._emit(self._sink.properties_start)

        prop = PropertySerializer(self._prop_index, key, self._sink)
        serialize(value, prop)
        self._prop_index = len(prop)

        if self._remaining_field == (0 if self._has_geom else 1):
            self._emit(self._sink.properties_end)

    def _end_feature(self) -> None:
        if not self._has_geom:
            raise NoGeometryFieldError()
        self._emit(self._sink.feature_end, self._feat_index)
        self._feat_index += 1
        self._remaining_field = 0
        self._has_geom = False
        self._prop_index = 0
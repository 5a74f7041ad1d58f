"""A serializer that writes property values to a :class:`PropertySink`."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Callable

from geoserde.errors import SinkCausedError, UnsupportedPropertyStructureError
from geoserde.model import Serializer, serialize
from geoserde.sink import PropertySink

_MISSING = object()


class PropertySerializer(Serializer):
    """Serialize properties to a :class:`PropertySink`.

    Each scalar becomes one column named by the current key. Fields of a
    nested struct are flattened, each under its own key. Sequences, tuples
    and maps with elements are not supported and raise
    :class:`UnsupportedPropertyStructureError`.
    """

    def __init__(self, index: int, key: str, sink: PropertySink) -> None:
        self._index = index
        self._key = key
        self._sink = sink

    def __len__(self) -> int:
        """The index of the next property, i.e. how many have been written."""
        return self._index

    def _emit(self, call: Callable[..., Any], *args: Any) -> None:
        try:
            call(*args)
        except Exception as exc:
            raise SinkCausedError(exc) from exc

    def _column(self, call: Callable[..., Any], value: Any) -> None:
        self._emit(call, self._index, self._key, value)
        self._index += 1

    @staticmethod
    def _require_empty(items: Iterable[Any], actual: str) -> None:
        """Accept an empty container; any element is unsupported."""
        if next(iter(items), _MISSING) is not _MISSING:
            raise UnsupportedPropertyStructureError(actual)

    # -- scalars -----------------------------------------------------------

    def serialize_bool(self, value: bool) -> None:
        self._column(self._sink.bool, value)

    def serialize_int(self, value: int) -> None:
        self._column(self._sink.int, value)

    def serialize_float(self, value: float) -> None:
        self._column(self._sink.float, value)

    def serialize_str(self, value: str) -> None:
        self._column(self._sink.str, value)

    def serialize_bytes(self, value: bytes) -> None:
        self._column(self._sink.bytes, value)

    def serialize_none(self) -> None:
        self._index += 1

    def serialize_unit(self) -> None:
        # A unit is the empty tuple: there is nothing to write.
        self.serialize_tuple(())

    def serialize_unit_variant(self, name: str, variant: str) -> None:
        self._emit(self._sink.str, self._index, name, variant)

    # -- wrappers ----------------------------------------------------------

    def serialize_newtype_struct(self, name: str, value: Any) -> None:
        serialize(value, self)

    def serialize_newtype_variant(self, name: str, variant: str, value: Any) -> None:
        self.serialize_unit_variant(name, variant)
        self._index += 1

    # -- containers --------------------------------------------------------

    def serialize_seq(self, items: Iterable[Any]) -> None:
        self._require_empty(items, "seq")

    def serialize_tuple(self, items: Sequence[Any]) -> None:
        self.serialize_seq(items)

    def serialize_tuple_struct(self, name: str, items: Sequence[Any]) -> None:
        self._require_empty(items, "tuple")

    def serialize_map(self, items: Sequence[tuple[Any, Any]]) -> None:
        self._require_empty(items, "map")

    def serialize_struct(self, name: str, fields: Sequence[tuple[str, Any]]) -> None:
        for key, value in fields:
            self._key = key
            serialize(value, self)
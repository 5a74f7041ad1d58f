"""Errors raised while serializing features, geometries and properties."""

from __future__ import annotations

from typing import Optional


class SerializeError(Exception):
    """Base class of every error raised by the serializers."""

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class SourceCausedError(SerializeError):
    """The value being serialized reported a problem of its own."""


class SinkCausedError(SerializeError):
    """The sink refused a write; the original exception is kept as ``cause``."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(cause)
        self.cause = cause
        self.__cause__ = cause

    def __str__(self) -> str:
        return str(self.cause)


class NoGeometryFieldError(SerializeError):
    """A feature ended without any field that could be written as a geometry."""

    def __init__(self) -> None:
        super().__init__("feature has no geometry field")


class InvalidFeatureStructureError(SerializeError):
    """A feature was not shaped as a struct."""

    def __init__(self) -> None:
        super().__init__("feature must be a struct")


class InvalidGeometryStructureError(SerializeError):
    """A value met inside a geometry did not fit the geometry model."""

    def __init__(self, actual: str, expected: Optional[str] = None) -> None:
        super().__init__(actual, expected)
        self.actual = actual
        self.expected = expected

    def __str__(self) -> str:
        if self.expected is None:
            return f"unexpected {self.actual} in geometry container"
        return f"expected {self.expected} but found {self.actual} in geometry container"


class UnsupportedPropertyStructureError(SerializeError):
    """A property value has a shape that cannot be written as a single column."""

    def __init__(self, actual: str) -> None:
        super().__init__(actual)
        self.actual = actual

    def __str__(self) -> str:
        return f"{self.actual} is not supported property"


class InvalidStateError(SerializeError):
    """A serializer was driven in an order it cannot follow."""

    def __init__(self) -> None:
        super().__init__("invalid internal state")
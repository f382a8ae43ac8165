"""Custom exception hierarchy for jsonq.

All exceptions inherit from QueryError so callers can catch broadly
or narrowly as needed. Every error carries a ``kind`` so callers that
prefer to branch on a value instead of a class can do so.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    NOT_AN_ARRAY = "not_an_array"
    INDEX_OUT_OF_BOUNDS = "index_out_of_bounds"
    NOT_AN_OBJECT = "not_an_object"
    KEY_NOT_FOUND = "key_not_found"
    NIL_VALUE = "nil_value"
    TYPE_MISMATCH = "type_mismatch"
    LOAD_FAILED = "load_failed"


def describe(value: Any) -> str:
    """Short human-readable rendering of a dynamic value for error messages."""
    text = repr(value)
    if len(text) > 80:
        text = text[:77] + "..."
    return f"{type(value).__name__} {text}"


class QueryError(Exception):
    """Base for all jsonq errors."""

    kind: ErrorKind


# ── Resolution ────────────────────────────────────────────────────


class ResolutionError(QueryError):
    """Walking the path from the root failed."""

    def __init__(self, segment: str, value: Any, message: str) -> None:
        self.segment = segment
        self.value = value
        super().__init__(message)


class NotAnArrayError(ResolutionError):
    kind = ErrorKind.NOT_AN_ARRAY

    def __init__(self, segment: str, value: Any) -> None:
        super().__init__(
            segment, value, f"Array index {segment} on non-array {describe(value)}"
        )


class IndexOutOfBoundsError(ResolutionError):
    kind = ErrorKind.INDEX_OUT_OF_BOUNDS

    def __init__(self, segment: str, value: list[Any]) -> None:
        self.index = int(segment)
        super().__init__(
            segment,
            value,
            f"Array index {self.index} out of bounds for array of length {len(value)}",
        )


class NotAnObjectError(ResolutionError):
    kind = ErrorKind.NOT_AN_OBJECT

    def __init__(self, segment: str, value: Any) -> None:
        super().__init__(
            segment, value, f"Object lookup '{segment}' on non-object {describe(value)}"
        )


class KeyNotFoundError(ResolutionError):
    kind = ErrorKind.KEY_NOT_FOUND

    def __init__(self, segment: str, value: dict[str, Any]) -> None:
        super().__init__(
            segment, value, f"Object {describe(value)} does not contain field '{segment}'"
        )


class NilValueError(ResolutionError):
    """The path resolved, but the value found there is null."""

    kind = ErrorKind.NIL_VALUE

    def __init__(self, segment: str | None) -> None:
        where = f"'{segment}'" if segment is not None else "document root"
        super().__init__(segment or "", None, f"Nil value found at {where}")


# ── Coercion ──────────────────────────────────────────────────────


class CoercionError(QueryError):
    """A resolved value could not be converted to the requested shape."""


class TypeMismatchError(CoercionError):
    kind = ErrorKind.TYPE_MISMATCH

    def __init__(
        self,
        shape: str,
        value: Any,
        expected: str,
        *,
        detail: str | None = None,
    ) -> None:
        self.shape = shape
        self.value = value
        self.index: int | None = None
        self.partial: list[Any] | None = None
        self.length: int | None = None
        message = f"Expected {expected} for {shape}, got {describe(value)}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)

    def at_element(
        self, index: int, partial: list[Any], length: int
    ) -> TypeMismatchError:
        """Record where in an array coercion of *length* elements this happened."""
        self.index = index
        self.partial = partial
        self.length = length
        self.args = (f"{self.args[0]} (array element {index})",)
        return self


# ── Loading ───────────────────────────────────────────────────────


class DocumentLoadError(QueryError):
    """Decoding the input document failed or it had the wrong top-level shape."""

    kind = ErrorKind.LOAD_FAILED

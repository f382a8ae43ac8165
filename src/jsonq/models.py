"""Pydantic models for query configuration and CLI results.

No business logic, just shapes.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from jsonq.errors import ErrorKind


# ── Configuration ────────────────────────────────────────────────


class QueryConfig(BaseModel):
    """Options fixed when a query context is created."""

    model_config = ConfigDict(frozen=True)

    # Raise from the ``as_*`` accessors instead of returning zero values.
    panic_on_error: bool = False
    # Decode numeric literals into JsonNumber tokens.
    use_number: bool = False


# ── Target shapes ────────────────────────────────────────────────


class Shape(str, Enum):
    ANY = "any"
    BOOL = "bool"
    FLOAT = "float"
    INT = "int"
    INT64 = "int64"
    STRING = "string"
    OBJECT = "object"
    ARRAY = "array"
    ARRAY_OF_STRINGS = "array-of-strings"
    ARRAY_OF_INTS = "array-of-ints"
    ARRAY_OF_FLOATS = "array-of-floats"
    ARRAY_OF_BOOLS = "array-of-bools"
    ARRAY_OF_OBJECTS = "array-of-objects"
    ARRAY_OF_ARRAYS = "array-of-arrays"
    MATRIX_2D = "matrix-2d"


# ── Results ──────────────────────────────────────────────────────


class QueryResult(BaseModel):
    path: list[str]
    shape: Shape
    value: Any = None
    error: str | None = None
    kind: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

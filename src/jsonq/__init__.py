"""jsonq: typed path queries over decoded JSON documents."""

from jsonq.coercion import (
    coerce_array,
    coerce_array_of,
    coerce_bool,
    coerce_float,
    coerce_int,
    coerce_int64,
    coerce_object,
    coerce_string,
)
from jsonq.errors import (
    CoercionError,
    DocumentLoadError,
    ErrorKind,
    IndexOutOfBoundsError,
    KeyNotFoundError,
    NilValueError,
    NotAnArrayError,
    NotAnObjectError,
    QueryError,
    ResolutionError,
    TypeMismatchError,
)
from jsonq.loader import new_query, parse, parse_file, parse_text
from jsonq.models import QueryConfig, QueryResult, Shape
from jsonq.paths import normalize_segments, resolve, resolve_path, split_path
from jsonq.query import JsonQuery
from jsonq.query_logger import configure_logging
from jsonq.values import JsonNumber, JsonValue

__all__ = [
    "coerce_array",
    "coerce_array_of",
    "coerce_bool",
    "coerce_float",
    "coerce_int",
    "coerce_int64",
    "coerce_object",
    "coerce_string",
    "configure_logging",
    "new_query",
    "normalize_segments",
    "parse",
    "parse_file",
    "parse_text",
    "resolve",
    "resolve_path",
    "split_path",
    "CoercionError",
    "DocumentLoadError",
    "ErrorKind",
    "IndexOutOfBoundsError",
    "JsonNumber",
    "JsonQuery",
    "JsonValue",
    "KeyNotFoundError",
    "NilValueError",
    "NotAnArrayError",
    "NotAnObjectError",
    "QueryConfig",
    "QueryError",
    "QueryResult",
    "ResolutionError",
    "Shape",
    "TypeMismatchError",
]

"""Conversions from dynamic JSON values to concrete Python types.

Each ``coerce_*`` function tries a fixed, ordered list of source
representations and returns the first that converts. A string that
does not parse as a number falls through to the next case instead of
failing immediately, so the final error is always a TypeMismatchError
naming the shape and the value that was found.

``bool`` is a subclass of ``int`` in Python, so every numeric case
checks for it explicitly: JSON booleans are never numbers.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from decimal import Decimal
from typing import Any, TypeVar

from jsonq.errors import TypeMismatchError
from jsonq.values import JsonNumber

T = TypeVar("T")

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INT_LITERAL = re.compile(r"[+-]?[0-9]+")
_NUMERIC = "numeric value"
_INF_LITERALS = frozenset({"inf", "infinity"})


def _parse_float(text: str) -> float | None:
    # float() also accepts surrounding whitespace and digit separators,
    # which are not valid in a numeric field.
    if not text or text != text.strip() or "_" in text:
        return None
    try:
        result = float(text)
    except ValueError:
        return None
    # Only an explicit "inf" literal may parse as infinity; "1e400" is out of range.
    if math.isinf(result) and text.lstrip("+-").lower() not in _INF_LITERALS:
        return None
    return result


def _parse_int(text: str) -> int | None:
    if not _INT_LITERAL.fullmatch(text):
        return None
    value = int(text, 10)
    if not INT64_MIN <= value <= INT64_MAX:
        return None
    return value


def _in_int64_range(result: int, value: Any, shape: str) -> int:
    if not INT64_MIN <= result <= INT64_MAX:
        raise TypeMismatchError(
            shape, value, _NUMERIC, detail="out of signed 64-bit range"
        )
    return result


def coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    raise TypeMismatchError("bool", value, "boolean value")


def coerce_float(value: Any) -> float:
    """Convert to float.

    Accepts floats, integers (widened), numeric strings, ``JsonNumber``
    tokens and ``Decimal`` values. A malformed ``JsonNumber`` fails with
    the parse error as detail.
    """
    if isinstance(value, bool):
        raise TypeMismatchError("float", value, _NUMERIC)
    if isinstance(value, float):
        return value
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError as e:
            raise TypeMismatchError("float", value, _NUMERIC, detail=str(e)) from e
    if isinstance(value, JsonNumber):
        try:
            return value.to_float()
        except ValueError as e:
            raise TypeMismatchError("float", value, _NUMERIC, detail=str(e)) from e
    if isinstance(value, str):
        parsed = _parse_float(value)
        if parsed is not None:
            return parsed
    if isinstance(value, Decimal):
        return float(value)
    raise TypeMismatchError("float", value, _NUMERIC)


def coerce_int(value: Any, *, shape: str = "int") -> int:
    """Convert to a signed 64-bit int.

    Floats are truncated toward zero. Strings must be base-10 integer
    literals. A ``JsonNumber`` must hold an integer literal; anything
    else fails with the parse error. Every source must land in the
    signed 64-bit range.
    """
    if isinstance(value, bool):
        raise TypeMismatchError(shape, value, _NUMERIC)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise TypeMismatchError(shape, value, _NUMERIC, detail="not a finite number")
        return _in_int64_range(int(value), value, shape)
    if isinstance(value, JsonNumber):
        try:
            return _in_int64_range(value.to_int(), value, shape)
        except ValueError as e:
            raise TypeMismatchError(shape, value, _NUMERIC, detail=str(e)) from e
    if isinstance(value, str):
        parsed = _parse_int(value)
        if parsed is not None:
            return parsed
    if isinstance(value, int):
        return _in_int64_range(value, value, shape)
    if isinstance(value, Decimal) and value.is_finite() and value == value.to_integral_value():
        return _in_int64_range(int(value), value, shape)
    raise TypeMismatchError(shape, value, _NUMERIC)


def coerce_int64(value: Any) -> int:
    """Same as :func:`coerce_int`, reported under the ``int64`` shape."""
    return coerce_int(value, shape="int64")


def coerce_string(value: Any) -> str:
    # A JsonNumber is a str subclass but still a number.
    if isinstance(value, str) and not isinstance(value, JsonNumber):
        return value
    raise TypeMismatchError("string", value, "string value")


def coerce_object(value: Any) -> dict[str, Any]:
    if isinstance(value, dict):
        return value
    raise TypeMismatchError("object", value, "JSON object")


def coerce_array(value: Any) -> list[Any]:
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    raise TypeMismatchError("array", value, "JSON array")


def coerce_array_of(value: Any, coerce: Callable[[Any], T]) -> list[T]:
    """Coerce to an array, then every element with *coerce*.

    Stops at the first element that fails. The raised error carries the
    element ``index``, the ``partial`` list converted before it and the
    source ``length``.
    """
    items = coerce_array(value)
    result: list[T] = []
    for index, item in enumerate(items):
        try:
            result.append(coerce(item))
        except TypeMismatchError as e:
            raise e.at_element(index, result, len(items))
    return result


__all__ = [
    "INT64_MAX",
    "INT64_MIN",
    "coerce_array",
    "coerce_array_of",
    "coerce_bool",
    "coerce_float",
    "coerce_int",
    "coerce_int64",
    "coerce_object",
    "coerce_string",
]

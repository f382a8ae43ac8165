"""Dynamic value types for decoded JSON trees."""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any, TypeAlias


class JsonNumber(str):
    """The literal text of a JSON number, kept unconverted.

    Produced by the loader in ``use_number`` mode so that large integers
    and high-precision decimals survive decoding untouched. Conversion
    happens only when a numeric accessor asks for it.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"JsonNumber({str.__repr__(self)})"

    def to_float(self) -> float:
        """Parse as a float.

        Raises ValueError on malformed text or a literal too large for a float.
        """
        result = float(self)
        if math.isinf(result):
            raise ValueError(f"value out of range: {str(self)}")
        return result

    def to_int(self) -> int:
        """Parse as a base-10 integer. Raises ValueError on non-integral text."""
        return int(self, 10)


JSONScalar: TypeAlias = str | int | float | bool | JsonNumber | Decimal | None
JsonValue: TypeAlias = JSONScalar | list[Any] | dict[str, Any]


__all__ = [
    "JSONScalar",
    "JsonNumber",
    "JsonValue",
]

"""Query contexts over decoded JSON.

A JsonQuery pairs a dynamic value with an error policy. Every accessor
comes in two tiers:

* ``get_*`` resolves the path, coerces the value and raises a
  :class:`~jsonq.errors.QueryError` on failure.
* ``as_*`` wraps the matching ``get_*`` for inline use. On failure it
  either re-raises (``panic_on_error=True``) or returns the shape's zero
  value. The policy is chosen once, when the context is created.

Paths are passed as ``*path``: either one dotted string such as
``"users[0].name"`` or pre-split segments such as ``"users", "0", "name"``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from jsonq import query_logger
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
from jsonq.errors import QueryError, ResolutionError, TypeMismatchError
from jsonq.models import QueryConfig
from jsonq.paths import normalize_segments, resolve
from jsonq.values import JsonValue

T = TypeVar("T")


class JsonQuery:
    """Read-only view over a decoded JSON value.

    The wrapped tree is never modified. Sub-queries share the parent's
    error policy and wrap a narrower part of the same tree.
    """

    __slots__ = ("_data", "_panic_on_error")

    def __init__(self, data: JsonValue, *, panic_on_error: bool = False) -> None:
        self._data = data
        self._panic_on_error = panic_on_error

    @classmethod
    def from_config(cls, data: JsonValue, config: QueryConfig) -> JsonQuery:
        return cls(data, panic_on_error=config.panic_on_error)

    @property
    def data(self) -> JsonValue:
        return self._data

    @property
    def panic_on_error(self) -> bool:
        return self._panic_on_error

    def __repr__(self) -> str:
        return (
            f"JsonQuery({self._data!r}, panic_on_error={self._panic_on_error})"
        )

    # ── Internals ─────────────────────────────────────────────────

    def _resolve(self, path: Sequence[str]) -> JsonValue:
        return resolve(self._data, normalize_segments(path))

    def _child(self, value: JsonValue) -> JsonQuery:
        return JsonQuery(value, panic_on_error=self._panic_on_error)

    def _inline(
        self,
        getter: Callable[..., T],
        path: Sequence[str],
        zero: Callable[[], T],
        pad: Callable[[], Any] | None = None,
    ) -> T:
        try:
            return getter(*path)
        except QueryError as e:
            if self._panic_on_error:
                query_logger.log_query_panic(path, e)
                raise
            query_logger.log_query_failed(path, e)
            # Typed arrays keep the elements converted before the failure and
            # fill the rest with the element's zero value.
            if (
                pad is not None
                and isinstance(e, TypeMismatchError)
                and e.partial is not None
                and e.length is not None
            ):
                filler = [pad() for _ in range(e.length - len(e.partial))]
                return e.partial + filler  # type: ignore[return-value]
            return zero()

    # ── Generic ───────────────────────────────────────────────────

    def get(self, *path: str) -> JsonValue:
        """Return the untyped value at *path*."""
        return self._resolve(path)

    def as_any(self, *path: str) -> JsonValue:
        return self._inline(self.get, path, lambda: None)

    def exists(self, *path: str) -> bool:
        """True when *path* resolves to a non-null value."""
        try:
            self._resolve(path)
        except ResolutionError:
            return False
        return True

    # ── Scalars ───────────────────────────────────────────────────

    def get_bool(self, *path: str) -> bool:
        return coerce_bool(self._resolve(path))

    def as_bool(self, *path: str) -> bool:
        return self._inline(self.get_bool, path, lambda: False)

    def get_float(self, *path: str) -> float:
        """Return the value at *path* as a float.

        Integers are widened and numeric strings are parsed.
        """
        return coerce_float(self._resolve(path))

    def as_float(self, *path: str) -> float:
        return self._inline(self.get_float, path, lambda: 0.0)

    def get_int(self, *path: str) -> int:
        """Return the value at *path* as an int.

        Floats are truncated toward zero and integer strings are parsed.
        """
        return coerce_int(self._resolve(path))

    def as_int(self, *path: str) -> int:
        return self._inline(self.get_int, path, lambda: 0)

    def get_int64(self, *path: str) -> int:
        """Like :meth:`get_int`, restricted to the signed 64-bit range."""
        return coerce_int64(self._resolve(path))

    def as_int64(self, *path: str) -> int:
        return self._inline(self.get_int64, path, lambda: 0)

    def get_string(self, *path: str) -> str:
        return coerce_string(self._resolve(path))

    def as_string(self, *path: str) -> str:
        return self._inline(self.get_string, path, lambda: "")

    # ── Containers ────────────────────────────────────────────────

    def get_object(self, *path: str) -> dict[str, Any]:
        return coerce_object(self._resolve(path))

    def as_object(self, *path: str) -> dict[str, Any]:
        return self._inline(self.get_object, path, dict)

    def get_array(self, *path: str) -> list[Any]:
        return coerce_array(self._resolve(path))

    def as_array(self, *path: str) -> list[Any]:
        return self._inline(self.get_array, path, list)

    def query(self, *path: str) -> JsonQuery:
        """Return a new context rooted at the object found at *path*."""
        return self._child(self.get_object(*path))

    def must_query(self, *path: str) -> JsonQuery:
        """Like :meth:`query`, but failures are logged as panics.

        Always raises on failure, whatever the context's error policy.
        """
        try:
            return self.query(*path)
        except QueryError as e:
            query_logger.log_query_panic(path, e)
            raise

    # ── Typed arrays ──────────────────────────────────────────────

    def get_array_of_strings(self, *path: str) -> list[str]:
        return coerce_array_of(self._resolve(path), coerce_string)

    def as_array_of_strings(self, *path: str) -> list[str]:
        return self._inline(self.get_array_of_strings, path, list, pad=str)

    def get_array_of_ints(self, *path: str) -> list[int]:
        return coerce_array_of(self._resolve(path), coerce_int64)

    def as_array_of_ints(self, *path: str) -> list[int]:
        return self._inline(self.get_array_of_ints, path, list, pad=int)

    def get_array_of_floats(self, *path: str) -> list[float]:
        return coerce_array_of(self._resolve(path), coerce_float)

    def as_array_of_floats(self, *path: str) -> list[float]:
        return self._inline(self.get_array_of_floats, path, list, pad=float)

    def get_array_of_bools(self, *path: str) -> list[bool]:
        return coerce_array_of(self._resolve(path), coerce_bool)

    def as_array_of_bools(self, *path: str) -> list[bool]:
        return self._inline(self.get_array_of_bools, path, list, pad=bool)

    def get_array_of_objects(self, *path: str) -> list[dict[str, Any]]:
        return coerce_array_of(self._resolve(path), coerce_object)

    def as_array_of_objects(self, *path: str) -> list[dict[str, Any]]:
        return self._inline(self.get_array_of_objects, path, list, pad=dict)

    def get_array_of_arrays(self, *path: str) -> list[list[Any]]:
        return coerce_array_of(self._resolve(path), coerce_array)

    def as_array_of_arrays(self, *path: str) -> list[list[Any]]:
        return self._inline(self.get_array_of_arrays, path, list, pad=list)

    def get_matrix_2d(self, *path: str) -> list[list[Any]]:
        """Alias for :meth:`get_array_of_arrays`."""
        return self.get_array_of_arrays(*path)

    def as_matrix_2d(self, *path: str) -> list[list[Any]]:
        return self.as_array_of_arrays(*path)

    def get_array_of_queries(self, *path: str) -> list[JsonQuery]:
        """Wrap each element of the array at *path* in its own context.

        Elements are not coerced; only the array itself must be present.
        """
        return [self._child(item) for item in self.get_array(*path)]

    def as_array_of_queries(self, *path: str) -> list[JsonQuery]:
        return self._inline(self.get_array_of_queries, path, list)


__all__ = ["JsonQuery"]

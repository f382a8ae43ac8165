"""Path resolution over decoded JSON trees.

A path is a sequence of segments applied left to right. A segment made
only of ASCII digits indexes into an array; anything else (negative
numbers included) looks up a key in an object. Dotted/bracketed path
strings such as ``"a.b[2].c"`` are split into the same segments.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from jsonq.errors import (
    IndexOutOfBoundsError,
    KeyNotFoundError,
    NilValueError,
    NotAnArrayError,
    NotAnObjectError,
)
from jsonq.values import JsonValue

_DELIMITERS = re.compile(r"[.\[\]]+")


def split_path(path: str) -> list[str]:
    """Split a path string on runs of ``.``, ``[`` and ``]``.

    Empty tokens are dropped, so ``"a..b"``, ``"a[b]"`` and ``".a.b."``
    all give ``["a", "b"]``.
    """
    return [token for token in _DELIMITERS.split(path) if token]


def normalize_segments(segments: Sequence[str]) -> list[str]:
    """Turn accessor arguments into the effective segment list.

    A single argument containing a delimiter is treated as a path
    string. Anything else is taken verbatim, one segment per argument.
    """
    if len(segments) == 1 and _DELIMITERS.search(segments[0]):
        return split_path(segments[0])
    return list(segments)


def _as_index(segment: str) -> int | None:
    if segment.isascii() and segment.isdigit():
        return int(segment)
    return None


def step(current: JsonValue, segment: str) -> JsonValue:
    """Apply a single segment to *current*."""
    index = _as_index(segment)
    if index is not None:
        if not isinstance(current, (list, tuple)):
            raise NotAnArrayError(segment, current)
        if index >= len(current):
            raise IndexOutOfBoundsError(segment, current)
        return current[index]

    if not isinstance(current, dict):
        raise NotAnObjectError(segment, current)
    if segment not in current:
        raise KeyNotFoundError(segment, current)
    return current[segment]


def resolve(root: JsonValue, segments: Sequence[str]) -> JsonValue:
    """Walk pre-split *segments* from *root* and return the value found.

    Segments are used verbatim; a segment like ``"a.b"`` is a single
    key. Use :func:`resolve_path` for dotted path strings.

    Raises:
        ResolutionError: The first segment that cannot be applied, or
            ``NilValueError`` when the value found is null.
    """
    current = root
    for segment in segments:
        current = step(current, segment)

    if current is None:
        raise NilValueError(segments[-1] if segments else None)
    return current


def resolve_path(root: JsonValue, path: str) -> JsonValue:
    """Resolve a dotted/bracketed path string such as ``"a.b[2]"``."""
    return resolve(root, split_path(path))


__all__ = ["normalize_segments", "resolve", "resolve_path", "split_path", "step"]

"""Structured JSON logging for queries.

Writes JSON-lines to disk so failures swallowed by the silent
accessors can still be traced afterwards. Each log entry is a single
JSON object on one line. Nothing is written until
:func:`configure_logging` is called.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from jsonq.errors import QueryError

_logger = logging.getLogger("jsonq")
_logger.addHandler(logging.NullHandler())


def configure_logging(
    log_dir: str | Path, level: int = logging.DEBUG
) -> None:
    """Set up query logging to write JSON-lines to a file.

    Args:
        log_dir: Directory to write ``query.log`` into.
        level: Logging level (default: DEBUG).
    """
    log_path = Path(log_dir) / "query.log"
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(str(log_path))
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))

    _logger.addHandler(handler)
    _logger.setLevel(level)


def _log(level: int, event: dict[str, Any]) -> None:
    if _logger.isEnabledFor(level):
        _logger.log(level, json.dumps(event, default=str))


def _error_fields(error: QueryError) -> dict[str, Any]:
    return {"kind": error.kind.value, "error": str(error)}


def log_document_loaded(source: str, top_level_type: str) -> None:
    _log(logging.INFO, {
        "event": "document_loaded",
        "source": source,
        "top_level_type": top_level_type,
    })


def log_query_failed(path: Sequence[str], error: QueryError) -> None:
    _log(logging.DEBUG, {"event": "query_failed", "path": list(path), **_error_fields(error)})


def log_query_panic(path: Sequence[str], error: QueryError) -> None:
    _log(logging.WARNING, {"event": "query_panic", "path": list(path), **_error_fields(error)})

"""Document loading: decode JSON (or YAML) into a query context."""

from __future__ import annotations

import json
from pathlib import Path
from typing import IO, Any

import yaml

from jsonq import query_logger
from jsonq.errors import DocumentLoadError
from jsonq.models import QueryConfig
from jsonq.query import JsonQuery
from jsonq.values import JsonNumber, JsonValue

_YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def new_query(data: JsonValue, *, panic_on_error: bool = False) -> JsonQuery:
    """Wrap an already-decoded value. Any JSON value is accepted."""
    return JsonQuery(data, panic_on_error=panic_on_error)


def _decode_json(text: str | bytes, use_number: bool) -> Any:
    if use_number:
        return json.loads(text, parse_int=JsonNumber, parse_float=JsonNumber)
    return json.loads(text)


def _build(data: Any, source: str, config: QueryConfig) -> JsonQuery:
    if not isinstance(data, dict):
        raise DocumentLoadError(
            f"Document in {source} must be an object at the top level, got {type(data).__name__}"
        )
    query_logger.log_document_loaded(source, type(data).__name__)
    return JsonQuery.from_config(data, config)


def parse_text(
    text: str | bytes,
    *,
    config: QueryConfig | None = None,
    source: str = "<text>",
) -> JsonQuery:
    """Decode a JSON document held in memory.

    Raises:
        DocumentLoadError: If the text is not valid JSON or its top level
            is not an object.
    """
    config = config or QueryConfig()
    try:
        data = _decode_json(text, config.use_number)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DocumentLoadError(f"Invalid JSON in {source}: {e}") from e
    return _build(data, source, config)


def parse(stream: IO[Any], *, config: QueryConfig | None = None) -> JsonQuery:
    """Decode a JSON document from a text or binary stream.

    The whole stream is read; its top level must be an object.
    """
    source = getattr(stream, "name", "<stream>")
    try:
        text = stream.read()
    except OSError as e:
        raise DocumentLoadError(f"Could not read {source}: {e}") from e
    return parse_text(text, config=config, source=str(source))


def parse_file(path: str | Path, *, config: QueryConfig | None = None) -> JsonQuery:
    """Load a ``.json`` file, or a ``.yaml``/``.yml`` file via ``yaml.safe_load``.

    ``use_number`` only affects JSON; YAML numbers are decoded by PyYAML.

    Raises:
        DocumentLoadError: If the file doesn't exist, can't be decoded,
            or its top level is not a mapping.
    """
    path = Path(path)
    config = config or QueryConfig()
    if not path.is_file():
        raise DocumentLoadError(f"Document file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentLoadError(f"Could not read {path}: {e}") from e

    if path.suffix.lower() not in _YAML_SUFFIXES:
        return parse_text(text, config=config, source=str(path))

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentLoadError(f"Invalid YAML in {path}: {e}") from e
    return _build(data, str(path), config)

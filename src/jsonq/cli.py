"""Command-line interface for jsonq.

Enables ``jsonq get data.json users[0].name --type string`` from a shell,
or a plain ``jsonq`` command after install.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from jsonq.errors import DocumentLoadError, QueryError
from jsonq.models import QueryConfig, QueryResult, Shape
from jsonq.values import JsonNumber

# ── Human-readable help strings ──────────────────────────────────────────────

_TOP_DESCRIPTION = """\
Query a JSON or YAML document by path and read the value as a typed result.

Paths use dotted keys and bracketed indices ("users[0].name") or can be
given as separate segments ("users 0 name"). The value found is converted
to the requested type (bool, int, float, string, object, array, typed
arrays) using the same rules as the jsonq library.

Use this tool when you need to READ one value out of a document.
Do NOT use it to: edit documents, validate them against a schema, or
pretty-print whole files.
"""

_TOP_EPILOG = """\
For a machine-readable JSON description of this CLI:

  jsonq schema

Quick examples:
  jsonq get config.json server.port --type int
  jsonq get data.yaml items[2] --type object
  jsonq exists config.json features.beta
"""

_GET_DESCRIPTION = """\
Resolve PATH in FILE and print the value, converted to --type, as JSON.
"""

_GET_EPILOG = """\
Output schema (JSON written to stdout, or to the --output file):

  {
    "path":  [<str>, ...]  -- the path segments that were resolved
    "shape": <str>         -- the requested --type
    "value": <any>         -- the converted value (null on error)
    "error": <str|null>    -- error message when the query failed
    "kind":  <str|null>    -- error kind, e.g. "key_not_found", "type_mismatch"
  }

Conversion rules:
  float   accepts floats, integers and numeric strings ("2.5")
  int     accepts integers, integer strings ("42") and floats (truncated)
  string, bool, object and array accept only their own JSON type

With --use-number, exact number tokens are printed as JSON numbers, not
strings. Integers keep every digit.

Error handling (--on-error):
  report  print the error in the result and exit 1 (default)
  zero    print the type's zero value (false, 0, "", {}, []) and exit 0
  panic   abort with a traceback

Examples:
  jsonq get config.json server.port --type int
  jsonq get data.json "matrix[1]" --type array-of-floats
  jsonq get data.json users 0 name --type string
  jsonq get big.json ids --type array-of-ints --use-number
  jsonq get data.json missing.key --on-error zero --log-dir ./logs

Exit codes:
  0 -- value printed
  1 -- query failed (path not found, null value, or type mismatch)
  2 -- FILE could not be loaded
"""

_EXISTS_DESCRIPTION = """\
Check whether PATH resolves to a non-null value in FILE.

Prints "true" or "false". The value's type is not checked.
"""

_EXISTS_EPILOG = """\
Exit codes:
  0 -- path exists
  1 -- path missing or null
  2 -- FILE could not be loaded
"""

_SCHEMA_DESCRIPTION = """\
Print a machine-readable JSON description of this CLI to stdout.
Exits 0 and writes JSON to stdout; nothing is written to stderr.
"""

# Fallible and convenience accessor names per target shape.
_ACCESSORS: dict[Shape, tuple[str, str]] = {
    Shape.ANY: ("get", "as_any"),
    Shape.BOOL: ("get_bool", "as_bool"),
    Shape.FLOAT: ("get_float", "as_float"),
    Shape.INT: ("get_int", "as_int"),
    Shape.INT64: ("get_int64", "as_int64"),
    Shape.STRING: ("get_string", "as_string"),
    Shape.OBJECT: ("get_object", "as_object"),
    Shape.ARRAY: ("get_array", "as_array"),
    Shape.ARRAY_OF_STRINGS: ("get_array_of_strings", "as_array_of_strings"),
    Shape.ARRAY_OF_INTS: ("get_array_of_ints", "as_array_of_ints"),
    Shape.ARRAY_OF_FLOATS: ("get_array_of_floats", "as_array_of_floats"),
    Shape.ARRAY_OF_BOOLS: ("get_array_of_bools", "as_array_of_bools"),
    Shape.ARRAY_OF_OBJECTS: ("get_array_of_objects", "as_array_of_objects"),
    Shape.ARRAY_OF_ARRAYS: ("get_array_of_arrays", "as_array_of_arrays"),
    Shape.MATRIX_2D: ("get_matrix_2d", "as_matrix_2d"),
}

_ON_ERROR_CHOICES = ("report", "zero", "panic")


# ── Structured JSON schema (for `jsonq schema`) ──────────────────────────────

def _cli_schema() -> dict[str, Any]:
    """Return a structured JSON description of the entire CLI."""
    file_arg = {
        "type": "string",
        "format": "file path",
        "required": True,
        "description": "JSON document, or YAML when the suffix is .yaml/.yml.",
    }
    path_arg = {
        "type": "string",
        "required": False,
        "repeatable": True,
        "description": (
            "One dotted/bracketed path string, or several plain segments. "
            "Omit to address the document root."
        ),
        "examples": ["server.port", "items[2].name", "items 2 name"],
    }
    return {
        "tool": "jsonq",
        "description": (
            "Reads one value out of a JSON or YAML document by path and "
            "converts it to a requested type."
        ),
        "not_for": [
            "Editing or writing documents",
            "Validating documents against a JSON Schema",
            "Pretty-printing or reformatting whole files",
        ],
        "commands": [
            {
                "name": "get",
                "description": "Resolve a path and print the converted value as JSON.",
                "arguments": {
                    "file": file_arg,
                    "path": path_arg,
                    "--type": {
                        "short": "-t",
                        "type": "string",
                        "enum": [s.value for s in Shape],
                        "default": Shape.ANY.value,
                        "required": False,
                        "description": "Target type for the value found at the path.",
                    },
                    "--on-error": {
                        "type": "string",
                        "enum": list(_ON_ERROR_CHOICES),
                        "default": "report",
                        "required": False,
                        "description": (
                            "report: print the error and exit 1; zero: print the "
                            "type's zero value; panic: abort with a traceback."
                        ),
                    },
                    "--use-number": {
                        "type": "boolean",
                        "required": False,
                        "description": "Keep JSON numbers as exact literal tokens.",
                    },
                    "--output": {
                        "short": "-o",
                        "type": "string",
                        "format": "file path",
                        "required": False,
                        "description": "Write the JSON result to this file instead of stdout.",
                    },
                    "--log-dir": {
                        "type": "string",
                        "format": "directory path",
                        "required": False,
                        "description": "Write JSONL query logs to DIR/query.log.",
                    },
                },
                "output": {
                    "channel": "stdout (or the file given by --output)",
                    "format": "JSON object",
                    "schema": {
                        "path": "<list of string>",
                        "shape": "<string>",
                        "value": "<any>",
                        "error": "<string or null>",
                        "kind": "<string or null>",
                    },
                },
                "exit_codes": {
                    "0": "value printed",
                    "1": "query failed",
                    "2": "document could not be loaded",
                },
            },
            {
                "name": "exists",
                "description": "Check whether a path resolves to a non-null value.",
                "arguments": {"file": file_arg, "path": path_arg},
                "output": {"channel": "stdout", "format": "true or false"},
                "exit_codes": {
                    "0": "path exists",
                    "1": "path missing or null",
                    "2": "document could not be loaded",
                },
            },
            {
                "name": "schema",
                "description": "Print this machine-readable JSON schema to stdout.",
                "arguments": {},
                "output": {"channel": "stdout", "format": "JSON object"},
                "exit_codes": {"0": "always"},
            },
        ],
        "error_kinds": [
            "not_an_array",
            "index_out_of_bounds",
            "not_an_object",
            "key_not_found",
            "nil_value",
            "type_mismatch",
        ],
    }


# ── Argument parser ───────────────────────────────────────────────────────────

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsonq",
        description=_TOP_DESCRIPTION,
        epilog=_TOP_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command")

    # ── get ──────────────────────────────────────────────────────────────────
    get_p = sub.add_parser(
        "get",
        help="Print the value at a path, converted to a type",
        description=_GET_DESCRIPTION,
        epilog=_GET_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    get_p.add_argument("file", type=Path, help="Path to the JSON or YAML document")
    get_p.add_argument(
        "path",
        nargs="*",
        help="Dotted path string, or separate segments (empty for the root)",
    )
    get_p.add_argument(
        "--type", "-t",
        dest="shape",
        type=Shape,
        default=Shape.ANY,
        choices=list(Shape),
        metavar="TYPE",
        help=f"Target type: {', '.join(s.value for s in Shape)} (default: any)",
    )
    get_p.add_argument(
        "--on-error",
        choices=_ON_ERROR_CHOICES,
        default="report",
        help="What to do when the query fails (default: report)",
    )
    get_p.add_argument(
        "--use-number",
        action="store_true",
        help="Decode JSON numbers as exact literal tokens",
    )
    get_p.add_argument(
        "--output", "-o",
        type=Path,
        metavar="FILE",
        help="Write JSON output to FILE instead of stdout.",
    )
    get_p.add_argument(
        "--log-dir",
        type=Path,
        metavar="DIR",
        help="Write JSONL query logs to DIR/query.log.",
    )

    # ── exists ───────────────────────────────────────────────────────────────
    exists_p = sub.add_parser(
        "exists",
        help="Check whether a path resolves",
        description=_EXISTS_DESCRIPTION,
        epilog=_EXISTS_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    exists_p.add_argument("file", type=Path, help="Path to the JSON or YAML document")
    exists_p.add_argument("path", nargs="*", help="Dotted path string, or separate segments")

    # ── schema ───────────────────────────────────────────────────────────────
    sub.add_parser(
        "schema",
        help="Print a machine-readable JSON schema of this CLI to stdout",
        description=_SCHEMA_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    return parser


# ── Command handlers ──────────────────────────────────────────────────────────

def _plain_numbers(value: Any) -> Any:
    """Replace JsonNumber tokens with int or float so they dump as numbers."""
    if isinstance(value, JsonNumber):
        try:
            return value.to_int()
        except ValueError:
            pass
        try:
            return value.to_float()
        except ValueError:
            return str(value)
    if isinstance(value, dict):
        return {k: _plain_numbers(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain_numbers(v) for v in value]
    return value


def _cmd_get(args: argparse.Namespace) -> int:
    from jsonq import configure_logging, parse_file

    if args.log_dir:
        configure_logging(args.log_dir)

    config = QueryConfig(
        panic_on_error=args.on_error == "panic",
        use_number=args.use_number,
    )
    try:
        query = parse_file(args.file, config=config)
    except DocumentLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    getter, inline = _ACCESSORS[args.shape]
    result = QueryResult(path=args.path, shape=args.shape)
    if args.on_error == "report":
        try:
            result.value = getattr(query, getter)(*args.path)
        except QueryError as e:
            result.error = str(e)
            result.kind = e.kind
    else:
        result.value = getattr(query, inline)(*args.path)

    result.value = _plain_numbers(result.value)
    text = json.dumps(result.model_dump(mode="json"), indent=2)

    if args.output:
        args.output.write_text(text)
        print(f"Output written to {args.output}", file=sys.stderr)
    else:
        print(text)

    return 0 if result.ok else 1


def _cmd_exists(args: argparse.Namespace) -> int:
    from jsonq import parse_file

    try:
        query = parse_file(args.file)
    except DocumentLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    found = query.exists(*args.path)
    print("true" if found else "false")
    return 0 if found else 1


def _cmd_schema() -> int:
    print(json.dumps(_cli_schema(), indent=2))
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "get":
        sys.exit(_cmd_get(args))
    elif args.command == "exists":
        sys.exit(_cmd_exists(args))
    elif args.command == "schema":
        sys.exit(_cmd_schema())


if __name__ == "__main__":
    main()

"""Tests for the CLI: commands, exit codes, help text and schema."""

from __future__ import annotations

import json

import pytest

from jsonq.cli import _build_parser, _cli_schema, main
from jsonq.errors import KeyNotFoundError
from jsonq.models import Shape


@pytest.fixture
def doc_file(tmp_path):
    path = tmp_path / "doc.json"
    path.write_text(json.dumps({
        "server": {"port": 8080, "host": "localhost"},
        "ratios": [1, "2", 3.5],
        "grid": [[1, 2], [3, 4]],
        "big": 9007199254740993,
        "empty": None,
    }))
    return path


def _run(argv, capsys):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    captured = capsys.readouterr()
    return exc.value.code, captured.out, captured.err


# ── get ───────────────────────────────────────────────────────────

class TestGet:
    def test_get_int(self, doc_file, capsys):
        code, out, _ = _run(["get", str(doc_file), "server.port", "--type", "int"], capsys)
        assert code == 0
        result = json.loads(out)
        assert result == {
            "path": ["server.port"],
            "shape": "int",
            "value": 8080,
            "error": None,
            "kind": None,
        }

    def test_get_segments(self, doc_file, capsys):
        code, out, _ = _run(["get", str(doc_file), "server", "host", "-t", "string"], capsys)
        assert code == 0
        assert json.loads(out)["value"] == "localhost"

    def test_get_default_type_is_any(self, doc_file, capsys):
        code, out, _ = _run(["get", str(doc_file), "server"], capsys)
        assert code == 0
        assert json.loads(out)["value"] == {"port": 8080, "host": "localhost"}

    def test_get_root(self, doc_file, capsys):
        code, out, _ = _run(["get", str(doc_file), "--type", "object"], capsys)
        assert code == 0
        assert "server" in json.loads(out)["value"]

    def test_get_typed_array(self, doc_file, capsys):
        code, out, _ = _run(["get", str(doc_file), "ratios", "-t", "array-of-floats"], capsys)
        assert code == 0
        assert json.loads(out)["value"] == [1.0, 2.0, 3.5]

    def test_get_matrix(self, doc_file, capsys):
        code, out, _ = _run(["get", str(doc_file), "grid", "-t", "matrix-2d"], capsys)
        assert json.loads(out)["value"] == [[1, 2], [3, 4]]

    def test_get_reports_error(self, doc_file, capsys):
        code, out, _ = _run(["get", str(doc_file), "server.missing"], capsys)
        assert code == 1
        result = json.loads(out)
        assert result["kind"] == "key_not_found"
        assert "'missing'" in result["error"]
        assert result["value"] is None

    def test_get_reports_type_mismatch(self, doc_file, capsys):
        code, out, _ = _run(["get", str(doc_file), "server.host", "-t", "bool"], capsys)
        assert code == 1
        assert json.loads(out)["kind"] == "type_mismatch"

    def test_get_null_is_nil_value(self, doc_file, capsys):
        code, out, _ = _run(["get", str(doc_file), "empty"], capsys)
        assert code == 1
        assert json.loads(out)["kind"] == "nil_value"

    def test_on_error_zero(self, doc_file, capsys):
        code, out, _ = _run(
            ["get", str(doc_file), "server.missing", "-t", "int", "--on-error", "zero"], capsys
        )
        assert code == 0
        assert json.loads(out)["value"] == 0

    def test_on_error_panic_raises(self, doc_file):
        with pytest.raises(KeyNotFoundError):
            main(["get", str(doc_file), "server.missing", "--on-error", "panic"])

    def test_use_number(self, doc_file, capsys):
        code, out, _ = _run(
            ["get", str(doc_file), "big", "-t", "int", "--use-number"], capsys
        )
        assert code == 0
        assert json.loads(out)["value"] == 9007199254740993

    def test_use_number_any_prints_numbers(self, doc_file, capsys):
        code, out, _ = _run(["get", str(doc_file), "server", "--use-number"], capsys)
        assert code == 0
        value = json.loads(out)["value"]
        assert value == {"port": 8080, "host": "localhost"}
        assert type(value["port"]) is int

    def test_use_number_any_keeps_fractions_numeric(self, doc_file, capsys):
        code, out, _ = _run(["get", str(doc_file), "ratios", "--use-number"], capsys)
        assert code == 0
        assert json.loads(out)["value"] == [1, "2", 3.5]

    def test_output_file(self, doc_file, tmp_path, capsys):
        target = tmp_path / "out.json"
        code, out, err = _run(
            ["get", str(doc_file), "server.port", "-o", str(target)], capsys
        )
        assert code == 0
        assert out == ""
        assert "Output written" in err
        assert json.loads(target.read_text())["value"] == 8080

    def test_log_dir(self, doc_file, tmp_path, capsys):
        log_dir = tmp_path / "logs"
        _run(
            ["get", str(doc_file), "nope", "--on-error", "zero", "--log-dir", str(log_dir)],
            capsys,
        )
        events = [
            json.loads(line)
            for line in (log_dir / "query.log").read_text().splitlines()
        ]
        assert [e["event"] for e in events] == ["document_loaded", "query_failed"]

    def test_missing_file_exits_two(self, tmp_path, capsys):
        code, _, err = _run(["get", str(tmp_path / "nope.json"), "a"], capsys)
        assert code == 2
        assert "not found" in err

    def test_invalid_type_rejected(self, doc_file):
        with pytest.raises(SystemExit) as exc:
            main(["get", str(doc_file), "a", "--type", "uuid"])
        assert exc.value.code == 2

    def test_yaml_document(self, tmp_path, capsys):
        path = tmp_path / "doc.yaml"
        path.write_text("list:\n  - x\n  - y\n")
        code, out, _ = _run(["get", str(path), "list[1]", "-t", "string"], capsys)
        assert code == 0
        assert json.loads(out)["value"] == "y"


# ── exists ────────────────────────────────────────────────────────

class TestExists:
    def test_exists_true(self, doc_file, capsys):
        code, out, _ = _run(["exists", str(doc_file), "grid[1][0]"], capsys)
        assert code == 0
        assert out.strip() == "true"

    def test_exists_false(self, doc_file, capsys):
        code, out, _ = _run(["exists", str(doc_file), "grid[9]"], capsys)
        assert code == 1
        assert out.strip() == "false"

    def test_exists_null_is_false(self, doc_file, capsys):
        code, _, _ = _run(["exists", str(doc_file), "empty"], capsys)
        assert code == 1

    def test_exists_bad_document(self, tmp_path, capsys):
        path = tmp_path / "list.json"
        path.write_text("[1]")
        code, _, err = _run(["exists", str(path), "0"], capsys)
        assert code == 2
        assert "top level" in err


# ── schema ────────────────────────────────────────────────────────

class TestSchema:
    def setup_method(self):
        self.schema = _cli_schema()

    def test_tool_name(self):
        assert self.schema["tool"] == "jsonq"

    def test_commands(self):
        names = {c["name"] for c in self.schema["commands"]}
        assert names == {"get", "exists", "schema"}

    def test_type_enum_lists_every_shape(self):
        get = next(c for c in self.schema["commands"] if c["name"] == "get")
        assert get["arguments"]["--type"]["enum"] == [s.value for s in Shape]

    def test_arguments_have_descriptions(self):
        for command in self.schema["commands"]:
            for name, spec in command["arguments"].items():
                assert "description" in spec, f"{command['name']} {name}"

    def test_schema_subcommand_outputs_json(self, capsys):
        code, out, err = _run(["schema"], capsys)
        assert code == 0
        assert json.loads(out)["tool"] == "jsonq"
        assert err == ""


# ── Help / no command ─────────────────────────────────────────────

class TestHelp:
    def test_no_args_prints_help(self, capsys):
        code, out, _ = _run([], capsys)
        assert code == 0
        assert "jsonq" in out
        assert "get" in out

    def test_top_level_help_mentions_not_for(self, capsys):
        code, out, _ = _run(["--help"], capsys)
        assert code == 0
        assert "Do NOT" in out

    def test_get_help_documents_exit_codes(self, capsys):
        _, out, _ = _run(["get", "--help"], capsys)
        assert "Exit codes" in out
        assert "--on-error" in out

    def test_parser_defaults(self):
        args = _build_parser().parse_args(["get", "f.json"])
        assert args.path == []
        assert args.shape is Shape.ANY
        assert args.on_error == "report"

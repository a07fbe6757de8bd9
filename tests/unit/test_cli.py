"""
Unit tests for the validation CLI.
"""

import json

import pytest

from dtoguard.cli.validate_cli import build_parser, load_records, main


def run_cli(argv):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


@pytest.mark.unit
class TestLoadRecords:
    """Tests for load_records"""

    def test_single_object(self, tmp_path):
        path = tmp_path / "one.json"
        path.write_text('{"name": "Ann"}')

        assert load_records(path) == [{"name": "Ann"}]

    def test_array_of_objects(self, tmp_path):
        path = tmp_path / "many.json"
        path.write_text('[{"name": "Ann"}, {"name": "Bob"}]')

        assert len(load_records(path)) == 2

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")

        with pytest.raises(ValueError):
            load_records(path)

    def test_scalar_payload_rejected(self, tmp_path):
        path = tmp_path / "scalar.json"
        path.write_text("42")

        with pytest.raises(ValueError):
            load_records(path)


@pytest.mark.unit
class TestCheckCommand:
    """Tests for the check subcommand"""

    def test_all_valid_records(self, schema_file, tmp_path, capsys):
        input_path = tmp_path / "users.json"
        input_path.write_text(json.dumps([
            {"name": " Ann ", "age": "33"},
            {"name": "Bob", "age": 40, "role": "member"},
        ]))

        code = run_cli(["check", "--schema", str(schema_file), "--input", str(input_path)])

        report = json.loads(capsys.readouterr().out)
        assert code == 0
        assert report["total_records"] == 2
        assert report["invalid_records"] == 0
        assert report["results"][0] == {"index": 0, "success": True, "data": {"name": "Ann", "age": 33}}

    def test_invalid_records_exit_nonzero(self, schema_file, tmp_path):
        input_path = tmp_path / "users.json"
        input_path.write_text(json.dumps([{"name": "Ann", "age": 33}, {"age": 200, "extra": True}]))
        output_path = tmp_path / "report.json"

        code = run_cli([
            "check",
            "--schema", str(schema_file),
            "--input", str(input_path),
            "--output", str(output_path),
        ])

        report = json.loads(output_path.read_text())
        assert code == 1
        assert report["valid_records"] == 1
        assert report["invalid_records"] == 1
        failed = report["results"][1]
        assert failed["success"] is False
        assert [error["code"] for error in failed["errors"]] == [
            "required_field_missing",
            "above_maximum",
            "unknown_field",
        ]

    def test_missing_schema_file(self, tmp_path):
        input_path = tmp_path / "users.json"
        input_path.write_text("{}")

        code = run_cli(["check", "--schema", str(tmp_path / "nope.yaml"), "--input", str(input_path)])

        assert code == 1

    def test_non_object_record(self, schema_file, tmp_path, capsys):
        input_path = tmp_path / "users.json"
        input_path.write_text('[["Ann", 33]]')

        code = run_cli(["check", "--schema", str(schema_file), "--input", str(input_path)])

        assert code == 1
        assert capsys.readouterr().out == ""

    def test_non_object_record_rejected_before_validation_starts(self, schema_file, tmp_path, monkeypatch):
        input_path = tmp_path / "users.json"
        input_path.write_text('[{"name": "Ann", "age": 33}, "Bob"]')
        monkeypatch.setattr(
            "dtoguard.cli.validate_cli.log_operation",
            lambda *args, **kwargs: pytest.fail("validation started for a malformed input"),
        )

        code = run_cli(["check", "--schema", str(schema_file), "--input", str(input_path)])

        assert code == 1

    def test_metrics_port_starts_server(self, schema_file, tmp_path, monkeypatch):
        input_path = tmp_path / "users.json"
        input_path.write_text('{"name": "Ann", "age": 33}')
        ports = []
        monkeypatch.setattr("dtoguard.cli.validate_cli.start_metrics_server", ports.append)

        code = run_cli([
            "check",
            "--schema", str(schema_file),
            "--input", str(input_path),
            "--metrics-port", "9105",
            "--output", str(tmp_path / "report.json"),
        ])

        assert code == 0
        assert ports == [9105]

    def test_no_metrics_server_by_default(self, schema_file, tmp_path, monkeypatch):
        input_path = tmp_path / "users.json"
        input_path.write_text('{"name": "Ann", "age": 33}')
        monkeypatch.setattr(
            "dtoguard.cli.validate_cli.start_metrics_server",
            lambda port: pytest.fail("metrics server started without --metrics-port"),
        )

        code = run_cli([
            "check",
            "--schema", str(schema_file),
            "--input", str(input_path),
            "--output", str(tmp_path / "report.json"),
        ])

        assert code == 0



@pytest.mark.unit
class TestDescribeCommand:
    """Tests for the describe subcommand"""

    def test_describe(self, schema_file, capsys):
        code = run_cli(["describe", "--schema", str(schema_file)])

        summary = json.loads(capsys.readouterr().out)
        assert code == 0
        assert summary["total_fields"] == 4
        assert summary["required_fields"] == 2
        assert summary["fields"] == ["name", "age", "email", "role"]


@pytest.mark.unit
def test_no_command_prints_help():
    assert run_cli([]) == 1


@pytest.mark.unit
def test_parser_requires_schema():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["check", "--input", "x.json"])

"""
Unit tests for the type-audit command-line interface.
"""

import json

import pytest
from pyspark.sql import Row

from type_audit.cli import audit_cli
from type_audit.cli.audit_cli import main


class TestInspectCommand:
    """Tests for `type-audit inspect`"""

    def test_table_output(self, jsonl_file, capsys):
        main(["inspect", "--input", jsonl_file])

        lines = capsys.readouterr().out.splitlines()

        assert lines[0].split() == ["Name", "Value"]
        assert lines[2].startswith("transaction_id")
        assert lines[2].endswith("{str, int}")
        assert [line.split()[0] for line in lines[2:]] == [
            "transaction_id", "amount", "currency", "notes", "tags",
        ]

    def test_json_output_with_allow_list(self, jsonl_file, capsys):
        main(["inspect", "--input", jsonl_file, "--property", "amount", "--output", "json"])

        report = json.loads(capsys.readouterr().out)

        assert report["properties"] == [
            {"name": "amount", "types": ["float", "str", "int", "null"]},
        ]
        assert report["records_observed"] == 4

    def test_exclude(self, jsonl_file, capsys):
        main(["inspect", "--input", jsonl_file, "--exclude", "tags", "notes", "--output", "json"])

        report = json.loads(capsys.readouterr().out)

        assert [entry["name"] for entry in report["properties"]] == [
            "transaction_id", "amount", "currency",
        ]

    def test_config_file_settings(self, jsonl_file, tmp_path, capsys):
        config_path = tmp_path / "audit.yaml"
        config_path.write_text("audit:\n  properties: [currency]\n  output_format: json\n")

        main(["inspect", "--input", jsonl_file, "--config", str(config_path)])

        report = json.loads(capsys.readouterr().out)
        assert [entry["name"] for entry in report["properties"]] == ["currency"]

    def test_command_line_overrides_config(self, jsonl_file, tmp_path, capsys):
        config_path = tmp_path / "audit.yaml"
        config_path.write_text("audit:\n  properties: [currency]\n  output_format: json\n")

        main([
            "inspect", "--input", jsonl_file,
            "--config", str(config_path),
            "--property", "notes",
        ])

        report = json.loads(capsys.readouterr().out)
        assert [entry["name"] for entry in report["properties"]] == ["notes"]

    def test_invalid_records_fail_without_skip(self, tmp_path, capsys):
        path = tmp_path / "mixed.jsonl"
        path.write_text('{"a": 1}\n42\n{"a": "x"}\n')

        with pytest.raises(SystemExit) as exc_info:
            main(["inspect", "--input", str(path)])

        assert exc_info.value.code == 1
        assert capsys.readouterr().out == ""

    def test_skip_invalid(self, tmp_path, capsys):
        path = tmp_path / "mixed.jsonl"
        path.write_text('{"a": 1}\n42\n{"a": "x"}\n')

        main(["inspect", "--input", str(path), "--skip-invalid", "--output", "json"])

        report = json.loads(capsys.readouterr().out)
        assert report["records_rejected"] == 1
        assert report["properties"] == [{"name": "a", "types": ["int", "str"]}]


class TestCliErrors:
    """Tests for CLI failure modes"""

    def test_missing_input_file(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["inspect", "--input", str(tmp_path / "absent.jsonl")])

        assert exc_info.value.code == 1

    def test_malformed_input(self, tmp_path):
        path = tmp_path / "broken.jsonl"
        path.write_text('{"a": 1}\n{oops\n')

        with pytest.raises(SystemExit) as exc_info:
            main(["inspect", "--input", str(path)])

        assert exc_info.value.code == 1

    def test_invalid_config(self, jsonl_file, tmp_path):
        config_path = tmp_path / "audit.yaml"
        config_path.write_text("settings: {}\n")

        with pytest.raises(SystemExit) as exc_info:
            main(["inspect", "--input", jsonl_file, "--config", str(config_path)])

        assert exc_info.value.code == 1

    def test_no_command_prints_help(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 1
        assert "inspect" in capsys.readouterr().out


class FakeSparkSession:
    def __init__(self):
        self.stopped = False

    def stop(self):
        self.stopped = True


class FakeDataFrame:
    columns = ["city", "population"]

    def toLocalIterator(self):
        return iter([Row(city="Oslo", population=709000), Row(city="Bergen", population=None)])


@pytest.fixture
def fake_spark(monkeypatch):
    """Replace Spark session and file loading with in-memory fakes"""
    calls = {"formats": [], "session": None}

    def create_session(app_name):
        calls["session"] = FakeSparkSession()
        return calls["session"]

    def load(spark, file_path, file_format="csv"):
        calls["formats"].append(file_format)
        return FakeDataFrame()

    monkeypatch.setattr(audit_cli, "create_spark_session", create_session)
    monkeypatch.setattr(audit_cli, "load_dataframe", load)
    return calls


class TestSparkEngine:
    """Tests for `type-audit inspect --engine spark`"""

    def test_format_from_parquet_suffix(self, fake_spark, tmp_path, capsys):
        path = tmp_path / "cities.parquet"
        path.write_bytes(b"")

        main(["inspect", "--input", str(path), "--engine", "spark", "--output", "json"])

        report = json.loads(capsys.readouterr().out)
        assert fake_spark["formats"] == ["parquet"]
        assert fake_spark["session"].stopped
        assert report["properties"] == [
            {"name": "city", "types": ["str"]},
            {"name": "population", "types": ["int", "null"]},
        ]

    def test_jsonl_format_read_as_json(self, fake_spark, jsonl_file, capsys):
        main(["inspect", "--input", jsonl_file, "--engine", "spark", "--format", "jsonl"])

        assert fake_spark["formats"] == ["json"]

    def test_explicit_format_overrides_suffix(self, fake_spark, tmp_path, capsys):
        path = tmp_path / "export.txt"
        path.write_text("city,population\nOslo,709000\n")

        main(["inspect", "--input", str(path), "--engine", "spark", "--format", "csv"])

        assert fake_spark["formats"] == ["csv"]

    def test_unknown_suffix_fails_before_spark_starts(self, fake_spark, tmp_path):
        path = tmp_path / "export.txt"
        path.write_text("city,population\n")

        with pytest.raises(SystemExit) as exc_info:
            main(["inspect", "--input", str(path), "--engine", "spark"])

        assert exc_info.value.code == 1
        assert fake_spark["session"] is None
        assert fake_spark["formats"] == []

"""
Tests for the CLI module.
"""

import json

import pytest
from click.testing import CliRunner

from buildlog.cli.main import app, cli


@pytest.fixture
def event_file(tmp_path):
    """A build event payload on disk."""
    path = tmp_path / "event-42.json"
    path.write_text(
        json.dumps(
            {
                "projectName": "SH_CS_Orders_202402_{Billing}_Build_GN",
                "number": 42,
                "result": "SUCCESS",
                "timestamp": "2024-01-15T10:30:00Z",
                "startTimeInMillis": "2024-01-15T10:30:05Z",
                "buildVariables": {"BRANCH": "main", "PASSWORD": "hunter2"},
                "sensitiveBuildVariables": ["PASSWORD"],
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def settings_file(tmp_path):
    """Settings rendering timestamps in UTC."""
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"time_zone": "UTC"}))
    return path


class TestCLIEnrich:
    """Tests for the enrich command."""

    def test_enrich_to_stdout(self, event_file, settings_file):
        """Test NDJSON records on stdout."""
        runner = CliRunner()
        result = runner.invoke(
            cli,
            [
                "--config", str(settings_file),
                "enrich", str(event_file),
                "--reference-time", "2024-01-15T10:31:05Z",
            ],
        )

        assert result.exit_code == 0
        record = json.loads(result.stdout.strip().splitlines()[0])
        assert record["buildDuration"] == 60000
        assert record["timestamp"] == "2024-01-15T10:30:00+0000"
        assert record["subsys"] == "Billing"
        assert record["jobenv"] == "功能"
        assert "PASSWORD" not in record["buildVariables"]
        assert "sensitiveBuildVariables" not in record

    def test_enrich_include_redacted_keys(self, event_file, settings_file):
        """Test the opt-in redacted key list."""
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["-c", str(settings_file), "enrich", str(event_file), "--include-redacted-keys"],
        )

        assert result.exit_code == 0
        record = json.loads(result.stdout.strip().splitlines()[0])
        assert record["sensitiveBuildVariables"] == ["PASSWORD"]

    def test_enrich_to_file(self, event_file, tmp_path):
        """Test appending to an NDJSON file."""
        output = tmp_path / "builds.ndjson"

        assert app(["enrich", str(event_file), "-o", str(output)]) == 0
        assert len(output.read_text(encoding="utf-8").splitlines()) == 1

    def test_enrich_to_directory(self, event_file, tmp_path):
        """Test one file per record."""
        out_dir = tmp_path / "records"

        assert app(["enrich", str(event_file), "-d", str(out_dir)]) == 0
        assert len(list(out_dir.glob("*.json"))) == 1

    def test_enrich_bad_payload(self, event_file, tmp_path):
        """Test that an unparseable payload gives exit code 1."""
        bad = tmp_path / "bad.json"
        bad.write_text("{")

        assert app(["enrich", str(event_file), str(bad), "-o", str(tmp_path / "o.ndjson")]) == 1

    def test_enrich_nonexistent_file(self):
        """Test enriching a file that doesn't exist."""
        assert app(["enrich", "/nonexistent/event.json"]) == 1

    def test_bad_reference_time(self, event_file):
        """Test an unparseable reference time."""
        assert app(["enrich", str(event_file), "-t", "not-a-time"]) == 1


class TestCLIDecode:
    """Tests for the decode command."""

    def test_decode_json(self):
        """Test JSON output from decode."""
        runner = CliRunner()
        result = runner.invoke(cli, ["decode", "HZ_KF1_Portal_202401", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["location"] == "杭州"
        assert data["department"] == "开发一部"
        assert data["appname"] == "F-Portal"
        assert data["version"] == "202401"
        assert data["jobtype"] == ""

    def test_decode_text(self):
        """Test text output from decode."""
        runner = CliRunner()
        result = runner.invoke(cli, ["decode", "SH_CS_Orders_202402_{Billing}_Build_GN"])

        assert result.exit_code == 0
        assert "jobtype: Build" in result.stdout

    def test_decode_no_match(self):
        """Test decoding a name outside the convention."""
        runner = CliRunner()
        result = runner.invoke(cli, ["decode", "standalone-job"])

        assert result.exit_code == 0
        assert "No match" in result.stdout

    def test_decode_empty_app_segment(self, tmp_path):
        """Test that a decoded name with an empty app name is not reported as unmatched."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"app_name_prefix": ""}))

        runner = CliRunner()
        result = runner.invoke(cli, ["-c", str(path), "decode", "HZ_KF1__v1"])

        assert result.exit_code == 0
        assert "No match" not in result.stdout
        assert "location: 杭州" in result.stdout

    def test_bad_config(self, tmp_path):
        """Test that an invalid settings file gives exit code 1."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"time_zone": "Nowhere/Special"}))

        assert app(["-c", str(path), "decode", "A_B_C_D"]) == 1


class TestCLIValidate:
    """Tests for the validate command."""

    def test_validate_passes(self, event_file):
        """Test validating a good event."""
        result = app(["validate", str(event_file), "-t", "2024-01-15T10:31:05Z"])
        assert result == 0

    def test_validate_negative_duration(self, event_file):
        """Test that a reference time before the start fails validation."""
        result = app(["validate", str(event_file), "-t", "2024-01-01T00:00:00Z"])
        assert result == 1

    def test_validate_json(self, event_file):
        """Test JSON output from validate."""
        runner = CliRunner()
        result = runner.invoke(
            cli, ["validate", str(event_file), "-t", "2024-01-15T10:31:05Z", "--json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["is_valid"] is True
        assert data["records"][0]["build_num"] == 42


class TestCLIVersion:
    """Tests for the version option."""

    def test_version(self):
        """Test --version output."""
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.stdout

"""
Tests for JSON output.
"""

import io
import json
from datetime import datetime, timezone

from buildlog.writers import JSONWriter, record_to_dict, record_to_json, write_records_to_ndjson
from buildlog.workflow import build_record

LATER = datetime(2024, 1, 15, 10, 31, 5, tzinfo=timezone.utc)


class TestSerializers:
    """Tests for record serialization."""

    def test_record_to_json_keeps_utf8(self, settings, make_event):
        """Test that non-ASCII labels are not escaped."""
        record = build_record(make_event(), LATER, settings)
        text = record_to_json(record)

        assert "杭州" in text
        assert json.loads(text) == json.loads(record.to_json())

    def test_record_to_dict(self, settings, make_event):
        """Test the dict form uses wire names."""
        data = record_to_dict(build_record(make_event(), LATER, settings))

        assert data["appname"] == "F-Portal"
        assert data["buildDuration"] == 60000


class TestJSONWriter:
    """Tests for JSONWriter."""

    def test_write_record(self, tmp_path, settings, make_event):
        """Test writing one file per record."""
        writer = JSONWriter(tmp_path / "out")
        record = build_record(make_event(), LATER, settings)

        path = writer.write_record(record)

        assert path.name == "HZ_KF1_Portal_202401-42.json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["projectName"] == "HZ_KF1_Portal_202401"
        assert data["location"] == "杭州"

    def test_unsafe_names_sanitized(self, tmp_path, settings, make_event):
        """Test that path separators in project names are replaced."""
        writer = JSONWriter(tmp_path)
        record = build_record(make_event(project_name="folder/job name"), LATER, settings)

        assert writer.path_for(record).name == "folder_job_name-42.json"

    def test_write_all(self, tmp_path, settings, make_event):
        """Test writing several records."""
        records = [
            build_record(make_event(number=n, id=str(n)), LATER, settings) for n in (1, 2)
        ]
        paths = JSONWriter(tmp_path).write_all(records)

        assert [p.name for p in paths] == [
            "HZ_KF1_Portal_202401-1.json",
            "HZ_KF1_Portal_202401-2.json",
        ]


class TestNDJSON:
    """Tests for newline-delimited output."""

    def test_write_to_stream(self, settings, make_event):
        """Test one compact object per line."""
        records = [build_record(make_event(number=n), LATER, settings) for n in (1, 2, 3)]
        stream = io.StringIO()

        count = write_records_to_ndjson(records, stream)

        lines = stream.getvalue().splitlines()
        assert count == 3
        assert [json.loads(line)["buildNum"] for line in lines] == [1, 2, 3]

    def test_append_to_path(self, tmp_path, settings, make_event):
        """Test that writing to a path appends."""
        path = tmp_path / "builds.ndjson"
        record = build_record(make_event(), LATER, settings)

        write_records_to_ndjson([record], path)
        write_records_to_ndjson([record], path)

        assert len(path.read_text(encoding="utf-8").splitlines()) == 2

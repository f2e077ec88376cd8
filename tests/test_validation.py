"""
Tests for record validation.
"""

from datetime import datetime, timezone

from buildlog.config import EnrichmentSettings
from buildlog.events import TestResultSummary
from buildlog.validation import RecordValidator
from buildlog.workflow import build_record

STARTED = datetime(2024, 1, 15, 10, 30, 5, tzinfo=timezone.utc)
LATER = datetime(2024, 1, 15, 10, 31, 5, tzinfo=timezone.utc)


class TestRecordValidator:
    """Tests for RecordValidator."""

    def test_valid_record(self, settings, make_event):
        """Test that a well-formed record passes with no issues."""
        record = build_record(make_event(), LATER, settings)
        result = RecordValidator().validate(record)

        assert result.is_valid
        assert result.issues == []

    def test_negative_duration(self, settings, make_event):
        """Test that a negative duration is an error."""
        record = build_record(make_event(), datetime(2024, 1, 1, tzinfo=timezone.utc), settings)
        result = RecordValidator().validate(record)

        assert not result.is_valid
        assert [i.field for i in result.errors] == ["buildDuration"]

    def test_redaction_leak(self, settings, make_event):
        """Test that a sensitive key still present is an error."""
        record = build_record(make_event(), LATER, settings).model_copy(
            update={
                "build_variables": {"TOKEN": "t"},
                "sensitive_build_variables": ["TOKEN"],
            }
        )
        result = RecordValidator().validate(record)

        assert not result.is_valid
        assert result.errors[0].field == "buildVariables"

    def test_bad_timestamp(self, settings, make_event):
        """Test that a timestamp outside the ISO pattern is an error."""
        record = build_record(make_event(), LATER, settings).model_copy(
            update={"timestamp": "15/01/2024", "msgdate": "", "msgtime": ""}
        )
        result = RecordValidator().validate(record)

        assert "timestamp" in [i.field for i in result.errors]
        assert "msgdate" in [i.field for i in result.warnings]

    def test_inconsistent_test_counts(self, settings, make_event):
        """Test warnings for inconsistent test summaries."""
        summary = TestResultSummary(total_count=1, skip_count=1, fail_count=1, failed_tests=())
        record = build_record(make_event(test_results=summary), LATER, settings)
        result = RecordValidator().validate(record)

        assert result.is_valid
        assert {i.field for i in result.warnings} == {
            "testResults.totalCount",
            "testResults.failedTests",
        }

    def test_unmatched_name_is_info(self, make_event):
        """Test that a non-conforming project name is reported as info."""
        custom = EnrichmentSettings(time_zone="UTC", include_redacted_keys=True)
        record = build_record(make_event(project_name="standalone-job"), LATER, custom)
        result = RecordValidator().validate(record)

        assert result.is_valid
        assert [i.field for i in result.infos] == ["projectName"]

    def test_empty_app_name_is_not_unmatched(self, make_event):
        """Test that a decoded name with an empty app segment raises no info."""
        custom = EnrichmentSettings(time_zone="UTC", app_name_prefix="")
        record = build_record(make_event(project_name="HZ_KF1__v1"), LATER, custom)
        result = RecordValidator().validate(record)

        assert record.appname == ""
        assert record.naming_matched
        assert result.infos == []

"""
Validation utilities for build records.

Provides consistency and data quality checks on finished records before they
are shipped.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from buildlog.models import BuildRecord
from buildlog.workflow.timestamps import parse_timestamp

logger = logging.getLogger(__name__)


@dataclass
class ValidationIssue:
    """A single validation issue."""

    field: str
    message: str
    severity: str  # "error", "warning", "info"
    value: Optional[Any] = None


@dataclass
class ValidationResult:
    """Result of validating a record."""

    is_valid: bool
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        """Get only error-level issues."""
        return [i for i in self.issues if i.severity == "error"]

    @property
    def warnings(self) -> list[ValidationIssue]:
        """Get only warning-level issues."""
        return [i for i in self.issues if i.severity == "warning"]

    @property
    def infos(self) -> list[ValidationIssue]:
        """Get only info-level issues."""
        return [i for i in self.issues if i.severity == "info"]

    def add_error(self, field: str, message: str, value: Any = None) -> None:
        """Add an error issue."""
        self.issues.append(
            ValidationIssue(field=field, message=message, severity="error", value=value)
        )
        self.is_valid = False

    def add_warning(self, field: str, message: str, value: Any = None) -> None:
        """Add a warning issue."""
        self.issues.append(
            ValidationIssue(field=field, message=message, severity="warning", value=value)
        )

    def add_info(self, field: str, message: str, value: Any = None) -> None:
        """Add an info issue."""
        self.issues.append(
            ValidationIssue(field=field, message=message, severity="info", value=value)
        )


class RecordValidator:
    """
    Validates build records against consistency rules.

    Usage:
        validator = RecordValidator()
        result = validator.validate(record)

        if not result.is_valid:
            for issue in result.errors:
                print(f"ERROR: {issue.field}: {issue.message}")
    """

    def validate(self, record: BuildRecord) -> ValidationResult:
        """
        Validate a build record.

        Args:
            record: The record to validate

        Returns:
            ValidationResult with issues found
        """
        result = ValidationResult(is_valid=True)

        self._validate_timing(record, result)
        self._validate_redaction(record, result)
        self._validate_tests(record, result)

        if not record.naming_matched:
            result.add_info(
                "projectName",
                "Project name does not follow the naming convention",
                record.project_name,
            )

        return result

    def _validate_timing(self, record: BuildRecord, result: ValidationResult) -> None:
        if record.build_duration < 0:
            result.add_error(
                "buildDuration",
                "Duration is negative; reference time precedes build start",
                record.build_duration,
            )

        try:
            parse_timestamp(record.timestamp)
        except ValueError:
            result.add_error("timestamp", "Timestamp is not ISO-8601 with offset", record.timestamp)

        if record.timestamp and not record.msgdate:
            result.add_warning("msgdate", "Message date/time could not be derived")

    def _validate_redaction(self, record: BuildRecord, result: ValidationResult) -> None:
        # Only checkable when the record carries the redacted key list
        for key in record.sensitive_build_variables or ():
            if key in record.build_variables:
                result.add_error("buildVariables", f"Sensitive variable '{key}' was not redacted")

    def _validate_tests(self, record: BuildRecord, result: ValidationResult) -> None:
        tests = record.test_results

        if tests.total_count < tests.skip_count + tests.fail_count:
            result.add_warning(
                "testResults.totalCount",
                f"Total ({tests.total_count}) is less than skipped + failed "
                f"({tests.skip_count + tests.fail_count})",
            )

        if tests.fail_count != len(tests.failed_tests):
            result.add_warning(
                "testResults.failedTests",
                f"failCount ({tests.fail_count}) doesn't match failed test names "
                f"({len(tests.failed_tests)})",
            )

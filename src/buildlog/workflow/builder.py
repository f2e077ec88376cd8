"""
Build record builder.

Turns a build-completion event into an enriched, immutable BuildRecord.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from buildlog.config import EnrichmentSettings, get_settings
from buildlog.enums import normalize_result
from buildlog.events.base import BuildEvent, BuildNode, TestResultSummary
from buildlog.models import BuildRecord, TestData
from buildlog.workflow.naming import decode_project_name
from buildlog.workflow.timestamps import (
    derive_message_times,
    ensure_aware,
    format_timestamp,
)
from buildlog.workflow.variables import merge_build_variables

logger = logging.getLogger(__name__)

ONE_MILLISECOND = timedelta(milliseconds=1)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def compute_duration(start_time: datetime, reference_time: datetime) -> int:
    """Milliseconds from start_time to reference_time (floored)."""
    return (ensure_aware(reference_time) - ensure_aware(start_time)) // ONE_MILLISECOND


def build_test_data(summary: Optional[TestResultSummary]) -> TestData:
    """Convert a test-result summary; no summary gives zero counts."""
    if summary is None:
        return TestData()
    return TestData(
        total_count=max(summary.total_count, 0),
        skip_count=max(summary.skip_count, 0),
        fail_count=max(summary.fail_count, 0),
        failed_tests=tuple(summary.failed_tests),
    )


class BuildRecordBuilder:
    """
    Builds enriched records from build-completion events.

    The builder holds only read-only settings, so one instance can serve
    concurrent callers.

    Usage:
        builder = BuildRecordBuilder()
        record = builder.build(event, datetime.now(timezone.utc))
        ship(record.to_json())
    """

    def __init__(self, settings: Optional[EnrichmentSettings] = None):
        """
        Initialize the builder.

        Args:
            settings: Enrichment settings (process-wide settings if omitted)
        """
        self.settings = settings or get_settings()

    def build(self, event: BuildEvent, reference_time: datetime) -> BuildRecord:
        """
        Build a record for an event.

        Args:
            event: The build-completion event
            reference_time: Notification time; build duration is measured to it

        Returns:
            Immutable BuildRecord
        """
        settings = self.settings

        build_host, build_label = self._node_labels(event.built_on)

        timestamp = format_timestamp(event.timestamp, settings.tzinfo)

        root = event.root_build
        if root is None:
            root_project_name = event.project_name
            root_display_name = event.display_name or ""
            root_number = event.number
        else:
            root_project_name = root.project_name
            root_display_name = root.display_name
            root_number = root.number

        sensitive = sorted(str(k) for k in (event.sensitive_build_variables or ()))
        variables = merge_build_variables(
            event.build_variables,
            event.environments,
            sensitive,
        )

        naming = decode_project_name(event.project_name, settings)
        message_times = derive_message_times(timestamp)

        record = BuildRecord(
            id=str(event.id),
            result=normalize_result(event.result),
            project_name=event.project_name,
            display_name=event.display_name or "",
            full_display_name=event.full_display_name or "",
            description=event.description,
            url=event.url or "",
            build_host=build_host,
            build_label=build_label,
            build_num=event.number,
            build_duration=compute_duration(event.start_time, reference_time),
            timestamp=timestamp,
            root_project_name=root_project_name,
            root_project_display_name=root_display_name,
            root_build_num=root_number,
            build_variables=variables,
            sensitive_build_variables=sensitive if settings.include_redacted_keys else None,
            test_results=build_test_data(event.test_results),
            location=naming.location,
            department=naming.department,
            appname=naming.appname,
            version=naming.version,
            subsys=naming.subsys,
            jobsuffix=naming.jobsuffix,
            jobtype=naming.jobtype,
            jobenv=naming.jobenv,
            msgappname=naming.appname,
            naming_matched=naming.matched,
            msgdate=message_times.msgdate,
            msgtime=message_times.msgtime,
        )

        logger.debug(f"Built record for {event.project_name} #{event.number}")
        return record

    def _node_labels(self, node: Optional[BuildNode]) -> tuple[str, str]:
        """Host and label of the node, each falling back to the sentinel."""
        sentinel = self.settings.default_node_label
        if node is None:
            return sentinel, sentinel

        host = sentinel if _is_blank(node.display_name) else node.display_name
        label = sentinel if _is_blank(node.label_string) else node.label_string
        return host, label


def build_record(
    event: BuildEvent,
    reference_time: datetime,
    settings: Optional[EnrichmentSettings] = None,
) -> BuildRecord:
    """Build one record with a throwaway builder."""
    return BuildRecordBuilder(settings).build(event, reference_time)

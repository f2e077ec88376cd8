"""
buildlog - Build-event enrichment for CI log pipelines.

This package turns build-completion events from an automation host into
enriched, flat JSON records: variables merged and redacted, organisational
metadata decoded from the project naming convention, timestamps normalized.
"""

__version__ = "0.1.0"

from buildlog.config import EnrichmentSettings, get_settings, load_settings
from buildlog.enums import BuildResult
from buildlog.events import (
    BuildEvent,
    BuildNode,
    BuildSnapshot,
    EnvironmentProvider,
    EventParseError,
    EventParser,
    RootBuild,
    StaticEnvironment,
    TestResultSummary,
)
from buildlog.models import BuildRecord, TestData
from buildlog.validation import RecordValidator, ValidationResult
from buildlog.workflow import (
    BuildRecordBuilder,
    EnrichmentResult,
    build_record,
    decode_project_name,
    enrich_files,
)
from buildlog.writers import JSONWriter, write_records_to_ndjson

__all__ = [
    # Configuration
    "EnrichmentSettings",
    "get_settings",
    "load_settings",
    # Events
    "BuildEvent",
    "BuildNode",
    "BuildSnapshot",
    "EnvironmentProvider",
    "RootBuild",
    "StaticEnvironment",
    "TestResultSummary",
    "EventParser",
    "EventParseError",
    # Records
    "BuildResult",
    "BuildRecord",
    "TestData",
    # Workflow
    "BuildRecordBuilder",
    "EnrichmentResult",
    "build_record",
    "decode_project_name",
    "enrich_files",
    # Validation
    "RecordValidator",
    "ValidationResult",
    # Writers
    "JSONWriter",
    "write_records_to_ndjson",
]

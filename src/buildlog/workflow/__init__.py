"""
Workflow module for build record enrichment.

Module structure:
- naming.py: Project naming-convention decoder
- variables.py: Build variable merge and redaction
- timestamps.py: ISO timestamp and message time formatting
- builder.py: BuildRecordBuilder
- result.py: EnrichmentResult dataclass
"""

import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from buildlog.config import EnrichmentSettings

# Re-export builder
from .builder import BuildRecordBuilder, build_record, build_test_data, compute_duration

# Re-export helpers for advanced use
from .naming import NamingFields, decode_project_name
from .result import EnrichmentResult
from .timestamps import (
    ISO_FORMAT,
    MessageTimes,
    derive_message_times,
    format_timestamp,
    parse_timestamp,
)
from .variables import merge_build_variables

logger = logging.getLogger(__name__)

__all__ = [
    # Main classes
    "BuildRecordBuilder",
    "EnrichmentResult",
    "build_record",
    # Helpers (for custom workflows)
    "build_test_data",
    "compute_duration",
    "NamingFields",
    "decode_project_name",
    "merge_build_variables",
    "ISO_FORMAT",
    "MessageTimes",
    "derive_message_times",
    "format_timestamp",
    "parse_timestamp",
    # Convenience function
    "enrich_files",
]


def enrich_files(
    paths: Iterable[str | Path],
    reference_time: Optional[datetime] = None,
    settings: Optional[EnrichmentSettings] = None,
) -> EnrichmentResult:
    """
    Convenience function to enrich event payload files.

    Payloads that fail to parse are reported in ``errors``; the rest are
    built into records.

    Args:
        paths: Event payload JSON files
        reference_time: Notification time (now, UTC, if omitted)
        settings: Enrichment settings (process-wide settings if omitted)

    Returns:
        EnrichmentResult with the built records

    Example:
        result = enrich_files(["event-41.json", "event-42.json"])
        for record in result.records:
            print(record.to_json())
    """
    from buildlog.events import EventParseError, EventParser

    reference_time = reference_time or datetime.now(timezone.utc)
    parser = EventParser()
    builder = BuildRecordBuilder(settings)
    result = EnrichmentResult()

    for path in paths:
        source = str(path)
        try:
            event = parser.parse(path)
        except (FileNotFoundError, EventParseError) as e:
            result.errors.append(str(e))
            logger.error(f"Skipping {source}: {e}")
            continue

        record = builder.build(event, reference_time)
        if record.build_duration < 0:
            result.warnings.append(
                f"{source}: reference time precedes build start ({record.build_duration} ms)"
            )
        result.add(record, source)

    return result

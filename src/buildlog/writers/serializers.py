"""
Serialization utilities for converting build records to JSON documents.
"""

import json
from typing import Any

from buildlog.models import BuildRecord


def record_to_dict(record: BuildRecord) -> dict[str, Any]:
    """
    Convert a BuildRecord to a flat dict for the log pipeline.

    Keys are camelCase; null fields are omitted and the test summary is
    the only nested object.
    """
    return record.to_dict()


def record_to_json(record: BuildRecord, indent: int | None = None) -> str:
    """
    Render a record as JSON text.

    Non-ASCII labels are written as-is (UTF-8), not as escapes.
    """
    return json.dumps(record_to_dict(record), ensure_ascii=False, indent=indent)

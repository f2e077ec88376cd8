"""
Pydantic models for log pipeline records.

These models define the JSON documents shipped for each build:
- BuildRecord (one per build-completion event)
- TestData (embedded test summary)
"""

from buildlog.models.base import RecordModel
from buildlog.models.record import BuildRecord, TestData

__all__ = [
    "RecordModel",
    "BuildRecord",
    "TestData",
]

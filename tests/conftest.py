"""
Shared fixtures for buildlog tests.
"""

from datetime import datetime, timezone

import pytest

from buildlog.config import EnrichmentSettings
from buildlog.events import BuildSnapshot

SCHEDULED = datetime(2024, 1, 15, 10, 30, 0, tzinfo=timezone.utc)
STARTED = datetime(2024, 1, 15, 10, 30, 5, tzinfo=timezone.utc)


@pytest.fixture
def settings():
    """Default tables, timestamps rendered in UTC."""
    return EnrichmentSettings(time_zone="UTC")


@pytest.fixture
def make_event():
    """Factory for BuildSnapshot events with sensible defaults."""

    def _make(**overrides):
        values = {
            "project_name": "HZ_KF1_Portal_202401",
            "number": 42,
            "id": "42",
            "result": "SUCCESS",
            "display_name": "#42",
            "full_display_name": "HZ_KF1_Portal_202401 #42",
            "url": "job/HZ_KF1_Portal_202401/42/",
            "start_time": STARTED,
            "timestamp": SCHEDULED,
        }
        values.update(overrides)
        return BuildSnapshot(**values)

    return _make

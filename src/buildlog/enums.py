"""
Enums for build metadata.

These enums define the known values for build outcomes.
"""

from enum import Enum
from typing import Optional


class BuildResult(str, Enum):
    """Build outcomes reported by the automation host."""

    SUCCESS = "SUCCESS"
    UNSTABLE = "UNSTABLE"
    FAILURE = "FAILURE"
    NOT_BUILT = "NOT_BUILT"
    ABORTED = "ABORTED"


def normalize_result(value: Optional[object]) -> Optional[str]:
    """
    Normalize a host result value to its canonical string.

    Known results are upper-cased to their enum value; anything else
    passes through as ``str(value)``. ``None`` stays ``None`` (build
    still running).
    """
    if value is None:
        return None
    if isinstance(value, BuildResult):
        return value.value
    text = str(value)
    try:
        return BuildResult(text.strip().upper()).value
    except ValueError:
        return text

"""
Enrichment settings.

All organisation-specific lookup tables and policy switches live here so the
rest of the codebase can do ``from buildlog.config import get_settings`` and
retrieve a cached, validated, read-only instance. Values come from (in order
of precedence) explicit keyword arguments, ``BUILDLOG_*`` environment
variables, then the built-in defaults below.
"""

import json
import logging
from datetime import tzinfo
from functools import lru_cache
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Site codes (first project-name segment)
DEFAULT_LOCATIONS: dict[str, str] = {
    "HZ": "杭州",
    "SH": "上海",
    "GZ": "广州",
    "BJ": "北京",
    "ZH": "珠海",
}

# Department codes (second project-name segment)
DEFAULT_DEPARTMENTS: dict[str, str] = {
    "KF1": "开发一部",
    "KF2": "开发二部",
    "KF3": "开发三部",
    "KF4": "开发四部",
    "KF5": "开发五部",
    "CS": "测试部",
    "YFZC": "研发支持部",
}

# Evaluated in order, first match wins. "_analysis_routine" must precede
# "_analysis" or it can never match.
DEFAULT_JOB_TYPES: list[tuple[str, str]] = [
    ("_build", "Build"),
    ("_deploy", "Deploy"),
    ("_analysis_routine", "Analysis_ROUTINE"),
    ("_analysis", "Analysis"),
    ("_plsqlcoverage", "PLSQLCoverage"),
]

DEFAULT_JOB_ENVIRONMENTS: list[tuple[str, str]] = [
    ("_GN", "功能"),
    ("_LC", "流程"),
    ("_YC", "压测"),
    ("_YX", "移行"),
    ("_FB", "封版"),
]


class EnrichmentSettings(BaseSettings):
    """
    Configuration for build record enrichment.

    Attributes:
        default_node_label: Host/label used when a build has no assigned node
        app_name_prefix: Prefix prepended to the decoded application name
        include_redacted_keys: Whether records carry the list of redacted keys
        time_zone: IANA zone for rendered timestamps (None = process local)
        locations: Site code -> location label
        departments: Department code -> department label
        job_types: Ordered (marker, label) pairs, matched case-insensitively
        job_environments: Ordered (suffix, label) pairs, matched case-sensitively
    """

    model_config = SettingsConfigDict(
        env_prefix="BUILDLOG_",
        case_sensitive=False,
        frozen=True,
    )

    default_node_label: str = Field(
        default="master",
        description="Host and label for builds without an assigned node",
    )

    app_name_prefix: str = Field(
        default="F-",
        description="Prefix for the decoded application name",
    )

    include_redacted_keys: bool = Field(
        default=False,
        description="Serialize the names (never the values) of redacted variables",
    )

    time_zone: Optional[str] = Field(
        default=None,
        description="IANA time zone for the ISO timestamp; local zone if unset",
    )

    locations: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_LOCATIONS))

    departments: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_DEPARTMENTS))

    job_types: list[tuple[str, str]] = Field(default_factory=lambda: list(DEFAULT_JOB_TYPES))

    job_environments: list[tuple[str, str]] = Field(
        default_factory=lambda: list(DEFAULT_JOB_ENVIRONMENTS)
    )

    @field_validator("time_zone")
    @classmethod
    def _validate_time_zone(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone: {v!r}") from e
        return v

    @field_validator("job_types")
    @classmethod
    def _lowercase_markers(cls, v: list[tuple[str, str]]) -> list[tuple[str, str]]:
        return [(marker.lower(), label) for marker, label in v]

    @property
    def tzinfo(self) -> Optional[tzinfo]:
        """Resolved time zone, or None for the process-local zone."""
        if self.time_zone is None:
            return None
        return ZoneInfo(self.time_zone)


def load_settings(path: str | Path, **overrides) -> EnrichmentSettings:
    """
    Load settings from a JSON file of overrides.

    Args:
        path: Path to a JSON object whose keys are EnrichmentSettings fields
        **overrides: Extra values taking precedence over the file

    Returns:
        Validated EnrichmentSettings

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not a JSON object or fails validation
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Settings file must contain a JSON object: {path}")

    data.update(overrides)
    logger.debug(f"Loaded settings from {path}: {sorted(data)}")
    return EnrichmentSettings(**data)


@lru_cache(maxsize=1)
def get_settings() -> EnrichmentSettings:
    """Return the process-wide settings instance (cached)."""
    return EnrichmentSettings()

"""
Project naming-convention decoder.

Project names follow ``<site>_<dept>_<app>_<version>[_{<subsys>}][_<suffix>]``,
e.g. ``SH_CS_Orders_202402_{Billing}_Build_GN``. The decoder turns a name into
organisational metadata. Names that don't follow the convention decode to
empty strings, never an error.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from buildlog.config import EnrichmentSettings, get_settings

logger = logging.getLogger(__name__)

SEPARATOR = "_"
MIN_SEGMENTS = 4


@dataclass(frozen=True)
class NamingFields:
    """Metadata decoded from a project name."""

    location: str = ""
    department: str = ""
    appname: str = ""
    version: str = ""
    subsys: str = ""
    jobsuffix: str = ""
    jobtype: str = ""
    jobenv: str = ""
    # Set when the name had at least the four mandatory segments
    matched: bool = False


UNMATCHED = NamingFields()


def split_segments(project_name: str) -> list[str]:
    """Split on the separator, dropping trailing empty segments."""
    segments = project_name.split(SEPARATOR)
    while len(segments) > 1 and segments[-1] == "":
        segments.pop()
    return segments


def detect_job_type(project_name: str, settings: EnrichmentSettings) -> str:
    """
    Find the job type from marker substrings.

    Markers are checked in configured order against the lower-cased name and
    only count at a position after the first character. First match wins.
    """
    lowered = project_name.lower()
    for marker, label in settings.job_types:
        if lowered.find(marker) > 0:
            return label
    return ""


def detect_job_environment(project_name: str, settings: EnrichmentSettings) -> str:
    """Find the job environment from the name's (case-sensitive) suffix."""
    for suffix, label in settings.job_environments:
        if project_name.endswith(suffix):
            return label
    return ""


def decode_project_name(
    project_name: Optional[str],
    settings: Optional[EnrichmentSettings] = None,
) -> NamingFields:
    """
    Decode organisational metadata from a project name.

    Args:
        project_name: The job name to decode
        settings: Lookup tables (process-wide settings if omitted)

    Returns:
        NamingFields; UNMATCHED when there are fewer than four segments
    """
    if not project_name:
        return UNMATCHED

    settings = settings or get_settings()
    segments = split_segments(project_name)

    if len(segments) < MIN_SEGMENTS:
        logger.debug(f"Project name {project_name!r} does not follow the naming convention")
        return UNMATCHED

    site, dept, app, version = segments[:MIN_SEGMENTS]
    location = settings.locations.get(site, site)
    department = settings.departments.get(dept, dept)
    appname = f"{settings.app_name_prefix}{app}"

    if len(segments) == MIN_SEGMENTS:
        return NamingFields(
            location=location,
            department=department,
            appname=appname,
            version=version,
            matched=True,
        )

    # Offset of the fifth segment: four segments plus four separators
    head_length = sum(len(s) for s in segments[:MIN_SEGMENTS]) + MIN_SEGMENTS
    fifth = segments[MIN_SEGMENTS]

    if len(fifth) >= 2 and fifth.startswith("{") and fifth.endswith("}"):
        subsys = fifth[1:-1]
        # Skip the closing brace and the separator after it
        jobsuffix = project_name[head_length + len(fifth) + 1 :]
    else:
        subsys = ""
        jobsuffix = project_name[head_length:]

    fields = NamingFields(
        location=location,
        department=department,
        appname=appname,
        version=version,
        subsys=subsys,
        jobsuffix=jobsuffix,
        jobtype=detect_job_type(project_name, settings),
        jobenv=detect_job_environment(project_name, settings),
        matched=True,
    )
    logger.debug(f"Decoded {project_name!r}: {fields}")
    return fields

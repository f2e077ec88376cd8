"""
Parser for build-completion event payloads.

Reads the JSON document a notifier hook emits for a finished build, using
the host's camelCase field names, and produces a BuildSnapshot.
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Optional

from dateutil import parser as date_parser

from buildlog.enums import normalize_result
from buildlog.events.base import (
    BuildNode,
    BuildSnapshot,
    RootBuild,
    StaticEnvironment,
    TestResultSummary,
)

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class EventParseError(ValueError):
    """Raised when an event payload cannot be turned into a snapshot."""


class EventParser:
    """
    Parser for build event JSON payloads.

    Expected shape (only ``projectName``, ``number`` and one of
    ``timestamp``/``startTimeInMillis`` are required)::

        {
          "projectName": "SH_CS_Orders_202402_{Billing}_Build_GN",
          "number": 42,
          "result": "SUCCESS",
          "timestamp": 1706745600000,
          "startTimeInMillis": 1706745601000,
          "builtOn": {"displayName": "agent-1", "labelString": "linux"},
          "rootBuild": {"projectName": "...", "displayName": "#7", "number": 7},
          "buildVariables": {"BRANCH": "main"},
          "environments": [{"JAVA_HOME": "/opt/jdk"}, null],
          "sensitiveBuildVariables": ["PASSWORD"],
          "testResults": {"totalCount": 10, "skipCount": 1, "failCount": 1,
                          "failedTests": ["pkg.Suite.test_a"]}
        }

    Times may be epoch milliseconds or date strings.

    Usage:
        parser = EventParser()
        event = parser.parse("/var/spool/builds/event-42.json")
    """

    def parse(self, file_path: str | Path) -> BuildSnapshot:
        """
        Parse an event payload file.

        Args:
            file_path: Path to the JSON file

        Returns:
            BuildSnapshot for the event

        Raises:
            FileNotFoundError: If file doesn't exist
            EventParseError: If the payload is invalid
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        with open(file_path, "r", encoding="utf-8") as f:
            content = f.read()

        return self.parse_content(content, str(file_path))

    def parse_content(self, content: str, source: str = "") -> BuildSnapshot:
        """Parse an event payload from a JSON string."""
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise EventParseError(f"Invalid JSON in event payload {source}: {e}") from e

        return self.parse_dict(data, source)

    def parse_dict(self, data: Any, source: str = "") -> BuildSnapshot:
        """Build a snapshot from an already-decoded payload."""
        where = f" ({source})" if source else ""

        if not isinstance(data, dict):
            raise EventParseError(f"Event payload must be a JSON object{where}")

        project_name = data.get("projectName")
        if not isinstance(project_name, str) or not project_name:
            raise EventParseError(f"Event payload is missing 'projectName'{where}")

        number = _as_int(data.get("number"), "number", where)
        if number is None:
            raise EventParseError(f"Event payload is missing 'number'{where}")

        timestamp = _parse_time(data.get("timestamp"), "timestamp", where)
        start_raw = data.get("startTimeInMillis", data.get("startTime"))
        start_time = _parse_time(start_raw, "startTime", where)

        if timestamp is None and start_time is None:
            raise EventParseError(f"Event payload has no 'timestamp' or 'startTimeInMillis'{where}")
        if timestamp is None:
            timestamp = start_time
        if start_time is None:
            start_time = timestamp

        display_name = _optional_str(data.get("displayName")) or f"#{number}"

        snapshot = BuildSnapshot(
            project_name=project_name,
            number=number,
            start_time=start_time,
            timestamp=timestamp,
            id=str(data.get("id") or number),
            result=normalize_result(data.get("result")),
            display_name=display_name,
            full_display_name=(
                _optional_str(data.get("fullDisplayName")) or f"{project_name} {display_name}"
            ),
            description=_optional_str(data.get("description")),
            url=_optional_str(data.get("url")) or "",
            test_results=_parse_test_results(data.get("testResults"), where),
            built_on=_parse_node(data.get("builtOn")),
            root_build=_parse_root_build(data.get("rootBuild"), where),
            build_variables=_string_map(data.get("buildVariables"), "buildVariables", where),
            environments=_parse_environments(data.get("environments"), where),
            sensitive_build_variables=frozenset(
                str(k)
                for k in _list(data.get("sensitiveBuildVariables"), "sensitiveBuildVariables", where)
            ),
        )
        logger.debug(f"Parsed event {project_name} #{number}{where}")
        return snapshot


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _list(value: Any, name: str, where: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise EventParseError(f"'{name}' must be a list{where}")
    return value


def _as_int(value: Any, name: str, where: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise EventParseError(f"'{name}' must be an integer{where}")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise EventParseError(f"'{name}' must be an integer{where}: {value!r}") from e


def _parse_time(value: Any, name: str, where: str) -> Optional[datetime]:
    """Parse epoch milliseconds or a date string into an aware datetime."""
    if value is None or value == "":
        return None

    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        value = int(value.strip())

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return EPOCH + timedelta(milliseconds=value)
        except (OverflowError, ValueError) as e:
            raise EventParseError(f"'{name}' is out of range or not a number{where}: {value!r}") from e

    if isinstance(value, str):
        try:
            parsed = date_parser.parse(value)
        except (ValueError, OverflowError) as e:
            raise EventParseError(f"Could not parse '{name}'{where}: {value!r}") from e
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    raise EventParseError(f"'{name}' must be epoch milliseconds or a date string{where}")


def _string_map(value: Any, name: str, where: str) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise EventParseError(f"'{name}' must be an object{where}")
    return {str(k): "" if v is None else str(v) for k, v in value.items()}


def _parse_node(value: Any) -> Optional[BuildNode]:
    if value is None:
        return None
    # The host API reports builtOn as a bare node name
    if isinstance(value, str):
        return BuildNode(display_name=value)
    if isinstance(value, dict):
        return BuildNode(
            display_name=_optional_str(value.get("displayName")),
            label_string=_optional_str(value.get("labelString")),
        )
    return None


def _parse_root_build(value: Any, where: str) -> Optional[RootBuild]:
    if not isinstance(value, dict):
        return None
    project_name = value.get("projectName")
    number = _as_int(value.get("number"), "rootBuild.number", where)
    if not project_name or number is None:
        logger.warning(f"Ignoring incomplete rootBuild{where}")
        return None
    return RootBuild(
        project_name=str(project_name),
        display_name=_optional_str(value.get("displayName")) or f"#{number}",
        number=number,
    )


def _parse_environments(value: Any, where: str) -> tuple[Optional[StaticEnvironment], ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise EventParseError(f"'environments' must be a list{where}")
    return tuple(
        None if env is None else StaticEnvironment(_string_map(env, "environments[]", where))
        for env in value
    )


def _failed_test_name(entry: Any) -> str:
    if isinstance(entry, dict):
        if entry.get("fullName"):
            return str(entry["fullName"])
        class_name = entry.get("className", "")
        name = entry.get("name", "")
        return f"{class_name}.{name}" if class_name else str(name)
    return str(entry)


def _parse_test_results(value: Any, where: str) -> Optional[TestResultSummary]:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise EventParseError(f"'testResults' must be an object{where}")
    return TestResultSummary(
        total_count=_as_int(value.get("totalCount"), "testResults.totalCount", where) or 0,
        skip_count=_as_int(value.get("skipCount"), "testResults.skipCount", where) or 0,
        fail_count=_as_int(value.get("failCount"), "testResults.failCount", where) or 0,
        failed_tests=tuple(
            _failed_test_name(t)
            for t in _list(value.get("failedTests"), "testResults.failedTests", where)
        ),
    )

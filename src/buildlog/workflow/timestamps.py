"""
Timestamp formatting for build records.

The format definitions are module constants, fixed at import and shared
read-only by every builder.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import ClassVar, Optional

logger = logging.getLogger(__name__)

# yyyy-MM-dd'T'HH:mm:ssZ, e.g. 2024-01-15T10:30:00+0800
ISO_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
# yyyyMMdd
MSG_DATE_FORMAT = "%Y%m%d"
# yyyy-MM-dd HH:mm:ss (milliseconds appended after a comma)
MSG_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def strftime_padded(value: datetime, fmt: str) -> str:
    """strftime with a four-digit year, which %Y does not guarantee before 1000."""
    return value.strftime(fmt.replace("%Y", f"{value.year:04d}"))


def format_timestamp(value: datetime, zone: Optional[tzinfo] = None) -> str:
    """
    Render a datetime in the ISO pattern with a numeric offset.

    Args:
        value: The instant to render (naive = UTC)
        zone: Target zone; the process-local zone if None

    Returns:
        String like ``2024-01-15T10:30:00+0800`` (second precision)
    """
    aware = ensure_aware(value)
    try:
        local = aware.astimezone(zone)
    except OverflowError:
        # Near datetime.min/max; the instant is kept in its own offset
        logger.warning(f"Cannot convert {aware.isoformat()} to the target zone; keeping its offset")
        local = aware
    return strftime_padded(local, ISO_FORMAT)


def parse_timestamp(text: str) -> datetime:
    """
    Parse a string produced by format_timestamp.

    Raises:
        ValueError: If the text doesn't match the ISO pattern
    """
    return datetime.strptime(text, ISO_FORMAT)


@dataclass(frozen=True)
class MessageTimes:
    """Date and time strings for log message metadata."""

    msgdate: str
    msgtime: str

    EMPTY: ClassVar["MessageTimes"]

    @property
    def is_empty(self) -> bool:
        return not self.msgdate and not self.msgtime


MessageTimes.EMPTY = MessageTimes(msgdate="", msgtime="")


def derive_message_times(timestamp: Optional[str]) -> MessageTimes:
    """
    Reformat an ISO timestamp into message date and time strings.

    The timestamp is reparsed in its own offset, giving ``yyyyMMdd`` and
    ``yyyy-MM-dd HH:mm:ss,SSS``. A timestamp that doesn't parse yields
    MessageTimes.EMPTY instead of an error.
    """
    if not timestamp:
        return MessageTimes.EMPTY

    try:
        parsed = parse_timestamp(timestamp)
    except ValueError:
        logger.warning(f"Could not reparse timestamp {timestamp!r}; message times left empty")
        return MessageTimes.EMPTY

    millis = parsed.microsecond // 1000
    return MessageTimes(
        msgdate=strftime_padded(parsed, MSG_DATE_FORMAT),
        msgtime=f"{strftime_padded(parsed, MSG_TIME_FORMAT)},{millis:03d}",
    )

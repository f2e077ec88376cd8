"""
JSON writer for build records.

Writes records either as one pretty-printed file per build or as
newline-delimited JSON, the format log shippers tail.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from buildlog.models import BuildRecord

from .serializers import record_to_json

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME = re.compile(r"[^\w.{}-]+")


class JSONWriter:
    """
    Writes build records to JSON files.

    Each record goes to ``<projectName>-<buildNum>.json`` under the output
    directory.
    """

    def __init__(self, output_dir: str | Path):
        """
        Initialize the JSON writer.

        Args:
            output_dir: Base directory for output files
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, record: BuildRecord) -> Path:
        """Output path for a record."""
        name = _UNSAFE_FILENAME.sub("_", record.project_name)
        return self.output_dir / f"{name}-{record.build_num}.json"

    def write_record(self, record: BuildRecord) -> Path:
        """
        Write a single record.

        Args:
            record: The BuildRecord to write

        Returns:
            Path to the written JSON file
        """
        output_path = self.path_for(record)

        with open(output_path, "w", encoding="utf-8") as f:
            f.write(record_to_json(record, indent=2))
            f.write("\n")

        logger.debug(f"Wrote {output_path}")
        return output_path

    def write_all(self, records: Iterable[BuildRecord]) -> list[Path]:
        """
        Write all records.

        Returns:
            Paths of the written files, in input order
        """
        return [self.write_record(record) for record in records]


def write_records_to_ndjson(records: Iterable[BuildRecord], target: str | Path | TextIO) -> int:
    """
    Write records as newline-delimited JSON.

    Args:
        records: Records to write
        target: File path (appended to) or an open text stream

    Returns:
        Number of records written

    Example:
        with open("/var/log/builds.ndjson", "a") as f:
            write_records_to_ndjson(result.records, f)
    """
    if isinstance(target, (str, Path)):
        with open(target, "a", encoding="utf-8") as f:
            return write_records_to_ndjson(records, f)

    count = 0
    for record in records:
        target.write(record_to_json(record))
        target.write("\n")
        count += 1
    return count

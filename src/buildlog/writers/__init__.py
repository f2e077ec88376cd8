"""
Writers module for outputting build records as JSON.

Module structure:
- serializers.py: Record-to-document conversion
- json_writer.py: JSONWriter class and NDJSON output
"""

from .json_writer import JSONWriter, write_records_to_ndjson
from .serializers import record_to_dict, record_to_json

__all__ = [
    # Serializers
    "record_to_dict",
    "record_to_json",
    # Writers
    "JSONWriter",
    "write_records_to_ndjson",
]

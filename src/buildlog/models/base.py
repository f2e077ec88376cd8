"""
Base model for all build log records.

Provides common serialization behavior for records shipped to the log
pipeline.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RecordModel(BaseModel):
    """
    Base model for log pipeline records.

    Provides:
    - camelCase field names on the wire
    - Immutability after construction
    - JSON serialization that omits null fields
    """

    model_config = ConfigDict(
        # Wire names are camelCase (buildNum, rootProjectName, ...)
        alias_generator=to_camel,
        # Populate by field name or alias
        populate_by_name=True,
        # Records are never mutated after the builder returns them
        frozen=True,
        # Use enum values in serialization
        use_enum_values=True,
    )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        """Convert to JSON string."""
        return self.model_dump_json(by_alias=True, exclude_none=True)

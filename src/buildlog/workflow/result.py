"""
Enrichment result dataclass.

Holds the output of enriching a batch of event payloads.
"""

from dataclasses import dataclass, field

from buildlog.models import BuildRecord


@dataclass
class EnrichmentResult:
    """
    Result of enriching a batch of build events.

    Attributes:
        records: Records built, in input order
        sources: Payload path for each record (parallel to records)
        warnings: Non-fatal issues encountered
        errors: Payloads that could not be parsed
    """

    records: list[BuildRecord] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if there were any errors."""
        return len(self.errors) > 0

    def add(self, record: BuildRecord, source: str) -> None:
        self.records.append(record)
        self.sources.append(source)

    def summary(self) -> str:
        """Generate a human-readable summary."""
        lines = [f"Enrichment Summary: {len(self.records)} record(s)"]

        for record in self.records:
            lines.append(f"  {record.project_name} #{record.build_num}: {record.result or 'running'}")
            if record.naming_matched:
                lines.append(
                    f"    {record.location} / {record.department} / {record.appname} {record.version}"
                )
            tests = record.test_results
            if tests.total_count:
                lines.append(f"    Tests: {tests.total_count} run, {tests.fail_count} failed")

        if self.warnings:
            lines.append(f"\nWarnings ({len(self.warnings)}):")
            for w in self.warnings[:5]:  # Limit to first 5
                lines.append(f"  - {w}")

        if self.errors:
            lines.append(f"\nErrors ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  - {e}")

        return "\n".join(lines)

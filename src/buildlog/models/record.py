"""
Build record models.

A BuildRecord is the enriched, JSON-ready snapshot of one build-completion
event.
"""

from typing import ClassVar, Optional

from pydantic import Field

from buildlog.models.base import RecordModel


class TestData(RecordModel):
    """
    Test summary for a build.

    Always present on a record; a build without a test-result action
    carries zero counts and no failed tests.
    """

    __test__: ClassVar[bool] = False

    total_count: int = Field(default=0, ge=0)
    skip_count: int = Field(default=0, ge=0)
    fail_count: int = Field(default=0, ge=0)
    failed_tests: tuple[str, ...] = Field(
        default=(),
        description="Fully-qualified names of failed tests, in report order",
    )


class BuildRecord(RecordModel):
    """
    Enriched record of a finished build.

    Attributes:
        id: Build identifier assigned by the host
        result: SUCCESS/UNSTABLE/FAILURE/NOT_BUILT/ABORTED, or None while running
        project_name: Job name, also the source of the naming-convention fields
        build_host: Display name of the agent, or the sentinel label
        build_label: Label expression of the agent, or the sentinel label
        build_num: Build number
        build_duration: Milliseconds between build start and notification
        timestamp: Scheduled time, ISO-8601 with numeric zone offset
        root_project_name: Project of the top-level build in the chain
        build_variables: Merged variables with sensitive keys removed
        sensitive_build_variables: Names of redacted keys, when configured
        test_results: Test summary (never omitted)
        location, department, appname, version, subsys, jobsuffix, jobtype,
        jobenv: Fields decoded from the project name ("" when unmatched)
        msgappname, msgdate, msgtime: Log message metadata
    """

    # Identity
    id: str
    project_name: str
    display_name: str = ""
    full_display_name: str = ""
    description: Optional[str] = None
    url: str = ""

    # Outcome
    result: Optional[str] = None

    # Execution
    build_host: str
    build_label: str
    build_num: int
    build_duration: int
    timestamp: str

    # Lineage
    root_project_name: str
    root_project_display_name: str
    root_build_num: int

    # Variables
    build_variables: dict[str, str] = Field(default_factory=dict)
    sensitive_build_variables: Optional[list[str]] = None

    test_results: TestData = Field(default_factory=TestData)

    # Naming convention
    location: str = ""
    department: str = ""
    appname: str = ""
    version: str = ""
    subsys: str = ""
    jobsuffix: str = ""
    jobtype: str = ""
    jobenv: str = ""

    # Message metadata
    msgappname: str = ""
    msgdate: str = ""
    msgtime: str = ""

    naming_matched: bool = Field(
        default=False,
        exclude=True,
        description="Whether the project name followed the naming convention",
    )

    def __str__(self) -> str:
        """String representation."""
        return f"BuildRecord: {self.project_name} #{self.build_num} ({self.result or 'running'})"

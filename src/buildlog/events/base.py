"""
Build-completion event interface.

The automation host hands the enricher a read-only view of a finished (or
finishing) build. ``BuildEvent`` describes that view; ``BuildSnapshot`` is the
in-process implementation produced by the payload parser and used in tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class BuildNode:
    """The agent a build ran on."""

    display_name: Optional[str] = None
    label_string: Optional[str] = None


@dataclass(frozen=True)
class RootBuild:
    """Top-level build of a multi-stage chain."""

    project_name: str
    display_name: str
    number: int


@dataclass(frozen=True)
class TestResultSummary:
    """
    Test-result action attached to a build.

    Attributes:
        total_count: Number of tests run
        skip_count: Number of skipped tests
        fail_count: Number of failed tests
        failed_tests: Fully-qualified names of failed tests, in report order
    """

    __test__ = False

    total_count: int = 0
    skip_count: int = 0
    fail_count: int = 0
    failed_tests: tuple[str, ...] = ()


class EnvironmentProvider(ABC):
    """
    Contributes environment variables to a build.

    Providers are merged in declaration order; later providers override
    earlier ones on key collision.
    """

    @abstractmethod
    def build_env_vars(self) -> Mapping[str, str]:
        """Return the variables this provider contributes."""
        pass


@dataclass(frozen=True)
class StaticEnvironment(EnvironmentProvider):
    """Provider backed by a fixed mapping."""

    variables: Mapping[str, str] = field(default_factory=dict)

    def build_env_vars(self) -> Mapping[str, str]:
        return self.variables


@runtime_checkable
class BuildEvent(Protocol):
    """Read-only capabilities of a build-completion event."""

    @property
    def result(self) -> Optional[str]: ...

    @property
    def id(self) -> str: ...

    @property
    def project_name(self) -> str: ...

    @property
    def display_name(self) -> str: ...

    @property
    def full_display_name(self) -> str: ...

    @property
    def description(self) -> Optional[str]: ...

    @property
    def url(self) -> str: ...

    @property
    def test_results(self) -> Optional[TestResultSummary]: ...

    @property
    def built_on(self) -> Optional[BuildNode]: ...

    @property
    def number(self) -> int: ...

    @property
    def start_time(self) -> datetime: ...

    @property
    def timestamp(self) -> datetime: ...

    @property
    def root_build(self) -> Optional[RootBuild]: ...

    @property
    def build_variables(self) -> Mapping[str, str]: ...

    @property
    def environments(self) -> Sequence[Optional[EnvironmentProvider]]: ...

    @property
    def sensitive_build_variables(self) -> Set[str]: ...


@dataclass(frozen=True)
class BuildSnapshot:
    """
    Immutable snapshot of a build-completion event.

    Satisfies the BuildEvent protocol. ``timestamp`` is when the build was
    scheduled, ``start_time`` when it began executing.
    """

    project_name: str
    number: int
    start_time: datetime
    timestamp: datetime
    id: str = ""
    result: Optional[str] = None
    display_name: str = ""
    full_display_name: str = ""
    description: Optional[str] = None
    url: str = ""
    test_results: Optional[TestResultSummary] = None
    built_on: Optional[BuildNode] = None
    root_build: Optional[RootBuild] = None
    build_variables: Mapping[str, str] = field(default_factory=dict)
    environments: Sequence[Optional[EnvironmentProvider]] = ()
    sensitive_build_variables: frozenset[str] = frozenset()

"""
Build-completion events.

Provides the read-only event interface the enricher consumes and a parser
for JSON event payloads.
"""

from buildlog.events.base import (
    BuildEvent,
    BuildNode,
    BuildSnapshot,
    EnvironmentProvider,
    RootBuild,
    StaticEnvironment,
    TestResultSummary,
)
from buildlog.events.parser import EventParseError, EventParser

__all__ = [
    # Interface
    "BuildEvent",
    "EnvironmentProvider",
    # Snapshot types
    "BuildSnapshot",
    "BuildNode",
    "RootBuild",
    "StaticEnvironment",
    "TestResultSummary",
    # Parser
    "EventParser",
    "EventParseError",
]

"""
Command-line interface for buildlog.

Provides commands for enriching, decoding, and validating build events.
"""

from .main import app, main

__all__ = ["main", "app"]

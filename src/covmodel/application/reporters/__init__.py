"""Reporters: format a built CoverageModel for people.

Output is returned as str. Caller decides destination.
"""

from covmodel.application.reporters.console import ConsoleConfig, ConsoleReporter

__all__ = [
    "ConsoleConfig",
    "ConsoleReporter",
]

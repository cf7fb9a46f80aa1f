"""Application layer for coverage model construction.

Components:
- services: ReportIndex, name normalizer, line resolver, builders
- reporters: Output formatting (Console summary)
"""

from covmodel.application.reporters import ConsoleConfig, ConsoleReporter
from covmodel.application.services import (
    ReportIndex,
    build_assembly,
    build_class,
    build_coverage_model,
    normalize_method_name,
    resolve_line_coverage,
)

__all__ = [
    # Services
    "ReportIndex",
    "normalize_method_name",
    "resolve_line_coverage",
    "build_class",
    "build_assembly",
    "build_coverage_model",
    # Reporters
    "ConsoleConfig",
    "ConsoleReporter",
]

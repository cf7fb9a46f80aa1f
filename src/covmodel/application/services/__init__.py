"""Application services: report index, name normalizer, line resolver, builders.

build_coverage_model is the main entry point.
"""

from covmodel.application.services.builder import (
    build_assembly,
    build_class,
    build_coverage_model,
    build_file,
)
from covmodel.application.services.line_coverage import (
    LineCoverage,
    merge_line_coverage,
    resolve_line_coverage,
)
from covmodel.application.services.names import NormalizedName, normalize_method_name
from covmodel.application.services.report_index import ReportIndex

__all__ = [
    "ReportIndex",
    "NormalizedName",
    "normalize_method_name",
    "LineCoverage",
    "resolve_line_coverage",
    "merge_line_coverage",
    "build_file",
    "build_class",
    "build_assembly",
    "build_coverage_model",
]

"""covmodel - queryable coverage model built from dotCover XML reports."""

__version__ = "0.1.0"

from covmodel.application.services import build_coverage_model
from covmodel.domain import BuildConfig, CoverageModel, NameFilter

__all__ = ["BuildConfig", "CoverageModel", "NameFilter", "build_coverage_model", "__version__"]

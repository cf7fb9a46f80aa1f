"""covmodel domain layer.

Pure domain logic with no external dependencies.
Only imports: dataclasses, enum, fnmatch, threading.
"""

from covmodel.domain.configuration import BuildConfig, NameFilter
from covmodel.domain.coverage import (
    NO_COVERAGE,
    Assembly,
    Class,
    CodeElement,
    CodeElementType,
    CodeFile,
    CoverageModel,
    LineVisitStatus,
    Statement,
)
from covmodel.domain.exceptions import (
    CovModelError,
    DuplicateNameError,
    MalformedNumberError,
    MalformedRecordError,
    MissingAttributeError,
    UnresolvedFileError,
)

__all__ = [
    # Exceptions
    "CovModelError",
    "MissingAttributeError",
    "MalformedRecordError",
    "MalformedNumberError",
    "UnresolvedFileError",
    "DuplicateNameError",
    # Enums
    "LineVisitStatus",
    "CodeElementType",
    # Value objects
    "NO_COVERAGE",
    "Statement",
    "CodeElement",
    "CodeFile",
    # Entities
    "Class",
    "Assembly",
    "CoverageModel",
    # Configuration
    "BuildConfig",
    "NameFilter",
]

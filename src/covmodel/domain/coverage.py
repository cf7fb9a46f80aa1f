"""Domain layer: coverage model.

Assembly → Class → CodeFile → CodeElement hierarchy built from a report.
Value objects are immutable. Assembly and CoverageModel accept insertions
during the build only, guarded by a lock.
FAIL-FIRST: invalid input raises immediately.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum, auto

from covmodel.domain.exceptions import DuplicateNameError

# coverage[] sentinel: line is not part of any statement range
NO_COVERAGE = -1


class LineVisitStatus(Enum):
    """Per-line display classification.

    NOT_COVERABLE is the default for lines outside every statement.
    """

    NOT_COVERABLE = auto()
    NOT_COVERED = auto()
    COVERED = auto()


class CodeElementType(Enum):
    """Kind of reportable code element."""

    METHOD = auto()
    PROPERTY = auto()


@dataclass(frozen=True, slots=True)
class Statement:
    """Raw statement record: inclusive line range in one file.

    Transient: consumed by the line resolver, never stored in the model.

    Examples:
        Line=5 EndLine=6 Covered=False → Statement(5, 6, "0", False)
    """

    start_line: int
    end_line: int
    file_id: str
    visited: bool

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.start_line <= 0:
            raise ValueError(f"start_line must be > 0, got {self.start_line}")
        if self.end_line <= 0:
            raise ValueError(f"end_line must be > 0, got {self.end_line}")


@dataclass(frozen=True, slots=True)
class CodeElement:
    """Method or property with the line of its first statement.

    Attributes:
        name: Developer-facing name (e.g. "Run()", "Total")
        kind: METHOD or PROPERTY
        first_line: 1-based line number (must be > 0)
    """

    name: str
    kind: CodeElementType
    first_line: int

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("code element name must not be empty")
        if self.first_line <= 0:
            raise ValueError(f"first_line must be > 0, got {self.first_line}")


@dataclass(frozen=True, slots=True)
class CodeFile:
    """Source file as seen from one class.

    Arrays are indexed by 1-based line number, index 0 is unused.
    A file shared by several classes yields one CodeFile per class.

    Attributes:
        path: File path from the report file table
        coverage: -1 no data, 0 not executed, 1 executed
        line_visit_status: Parallel status per line
        code_elements: Methods/properties starting in this file, insertion order
    """

    path: str
    coverage: tuple[int, ...] = ()
    line_visit_status: tuple[LineVisitStatus, ...] = ()
    code_elements: tuple[CodeElement, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.path:
            raise ValueError("path must not be empty")
        if len(self.coverage) != len(self.line_visit_status):
            raise ValueError(
                f"coverage ({len(self.coverage)}) and line_visit_status "
                f"({len(self.line_visit_status)}) must have equal length",
            )
        for value in self.coverage:
            if value not in (NO_COVERAGE, 0, 1):
                raise ValueError(f"coverage values must be -1, 0 or 1, got {value}")

    @property
    def coverable_lines(self) -> int:
        """Lines covered by at least one statement."""
        return sum(1 for value in self.coverage if value >= 0)

    @property
    def covered_lines(self) -> int:
        """Lines executed at least once."""
        return sum(1 for value in self.coverage if value > 0)

    def line_coverage(self, line: int) -> int | None:
        """Coverage value of line. None if line has no coverage data."""
        if not 0 < line < len(self.coverage):
            return None
        value = self.coverage[line]
        return None if value == NO_COVERAGE else value

    def line_status(self, line: int) -> LineVisitStatus:
        """Visit status of line. NOT_COVERABLE outside the arrays."""
        if not 0 < line < len(self.line_visit_status):
            return LineVisitStatus.NOT_COVERABLE
        return self.line_visit_status[line]


def _quota(covered: int, coverable: int) -> float | None:
    """Percentage rounded to one decimal. None if nothing is coverable."""
    if coverable == 0:
        return None
    return round(100.0 * covered / coverable, 1)


@dataclass(frozen=True, slots=True)
class Class:
    """Class of an assembly with the files it spans.

    Attributes:
        name: Fully qualified name (Namespace.Type)
        assembly: Owning assembly (back-reference, not part of equality)
        files: Source files in insertion order (partial classes span several)
    """

    name: str
    assembly: Assembly = field(compare=False, repr=False)
    files: tuple[CodeFile, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("class name must not be empty")
        if self.assembly is None:
            raise TypeError("assembly must not be None")

    @property
    def code_elements(self) -> tuple[CodeElement, ...]:
        """All code elements, in file order."""
        return tuple(element for file in self.files for element in file.code_elements)

    @property
    def coverable_lines(self) -> int:
        """Sum of coverable lines over all files."""
        return sum(file.coverable_lines for file in self.files)

    @property
    def covered_lines(self) -> int:
        """Sum of covered lines over all files."""
        return sum(file.covered_lines for file in self.files)

    @property
    def coverage_quota(self) -> float | None:
        """Line coverage percent. None if nothing is coverable."""
        return _quota(self.covered_lines, self.coverable_lines)


@dataclass(slots=True)
class Assembly:
    """Assembly (module) owning its classes.

    NOT frozen: classes are inserted concurrently during the build.
    Thread-safety via Lock. Read access sorts by name, so results
    never depend on insertion order.
    """

    name: str
    _classes: dict[str, Class] = field(default_factory=dict, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, compare=False, repr=False)

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("assembly name must not be empty")

    def add_class(self, klass: Class) -> None:
        """Insert built class. Thread-safe.

        Raises:
            DuplicateNameError: Class with same name already inserted.
        """
        with self._lock:
            if klass.name in self._classes:
                raise DuplicateNameError("class", klass.name)
            self._classes[klass.name] = klass

    @property
    def classes(self) -> tuple[Class, ...]:
        """Classes sorted by name. Thread-safe."""
        with self._lock:
            return tuple(self._classes[name] for name in sorted(self._classes))

    def find_class(self, name: str) -> Class | None:
        """Class by fully qualified name, or None."""
        with self._lock:
            return self._classes.get(name)

    @property
    def coverable_lines(self) -> int:
        """Sum of coverable lines over all classes."""
        return sum(klass.coverable_lines for klass in self.classes)

    @property
    def covered_lines(self) -> int:
        """Sum of covered lines over all classes."""
        return sum(klass.covered_lines for klass in self.classes)

    @property
    def coverage_quota(self) -> float | None:
        """Line coverage percent. None if nothing is coverable."""
        return _quota(self.covered_lines, self.coverable_lines)


@dataclass(slots=True)
class CoverageModel:
    """Root of the coverage model: all assemblies of one report.

    Same insertion discipline as Assembly.
    """

    _assemblies: dict[str, Assembly] = field(default_factory=dict, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, compare=False, repr=False)

    def add_assembly(self, assembly: Assembly) -> None:
        """Insert built assembly. Thread-safe.

        Raises:
            DuplicateNameError: Assembly with same name already inserted.
        """
        with self._lock:
            if assembly.name in self._assemblies:
                raise DuplicateNameError("assembly", assembly.name)
            self._assemblies[assembly.name] = assembly

    @property
    def assemblies(self) -> tuple[Assembly, ...]:
        """Assemblies sorted by name. Thread-safe."""
        with self._lock:
            return tuple(self._assemblies[name] for name in sorted(self._assemblies))

    def find_assembly(self, name: str) -> Assembly | None:
        """Assembly by name, or None."""
        with self._lock:
            return self._assemblies.get(name)

    @property
    def coverable_lines(self) -> int:
        """Sum of coverable lines over all assemblies."""
        return sum(assembly.coverable_lines for assembly in self.assemblies)

    @property
    def covered_lines(self) -> int:
        """Sum of covered lines over all assemblies."""
        return sum(assembly.covered_lines for assembly in self.assemblies)

    @property
    def coverage_quota(self) -> float | None:
        """Line coverage percent. None if nothing is coverable."""
        return _quota(self.covered_lines, self.coverable_lines)

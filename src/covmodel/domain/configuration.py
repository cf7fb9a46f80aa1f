"""Build configuration.

User-provided settings for the model build: concurrency and name filters.
None = feature disabled, value = feature enabled with that config.
"""

from __future__ import annotations

import fnmatch
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NameFilter:
    """Glob-based include/exclude filter for assembly or class names.

    Uses fnmatch: * matches any characters including dots.
    A name passes when it matches no exclude pattern and either
    include is empty or it matches at least one include pattern.

    Examples:
        NameFilter(include=("App.*",))          → App.Calc passes, Lib.X does not
        NameFilter(exclude=("*.Tests",))        → App.Tests rejected
    """

    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        for pattern in (*self.include, *self.exclude):
            if not pattern:
                raise ValueError("filter patterns must not be empty")

    def accepts(self, name: str) -> bool:
        """Check whether name passes the filter."""
        if any(fnmatch.fnmatchcase(name, p) for p in self.exclude):
            return False
        if not self.include:
            return True
        return any(fnmatch.fnmatchcase(name, p) for p in self.include)


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """Model build configuration DTO.

    All fields have defaults. Immutable (frozen dataclass).

    Attributes:
        parallel: Build assemblies and classes on worker threads.
        max_workers: Threads per fan-out level. None = executor default.
        assembly_filter: Which assemblies to build. None = all.
        class_filter: Which classes to build (by qualified name). None = all.
    """

    parallel: bool = True
    max_workers: int | None = None
    assembly_filter: NameFilter | None = None
    class_filter: NameFilter | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")

    def accepts_assembly(self, name: str) -> bool:
        """Check assembly name against assembly_filter."""
        return self.assembly_filter is None or self.assembly_filter.accepts(name)

    def accepts_class(self, name: str) -> bool:
        """Check class name against class_filter."""
        return self.class_filter is None or self.class_filter.accepts(name)

"""Line coverage resolver: statement ranges → dense per-line arrays.

Merge rule per line (any visited statement wins):
    coverage: absent(-1) → 0/1, present → min(old + visits, 1)
    status:   COVERED if already COVERED or visited, else NOT_COVERED

The rule is commutative and associative, so statements may be applied
in any order and partial tables may be merged later.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from covmodel.domain.coverage import NO_COVERAGE, LineVisitStatus

if TYPE_CHECKING:
    from collections.abc import Iterable

    from covmodel.domain.coverage import Statement


class LineCoverage(NamedTuple):
    """Per-line arrays indexed by 1-based line number (index 0 unused)."""

    coverage: list[int]
    line_visit_status: list[LineVisitStatus]


def _merge_visits(current: int, visits: int) -> int:
    if current == NO_COVERAGE:
        return visits
    return min(current + visits, 1)


def _merge_status(current: LineVisitStatus, visited: bool) -> LineVisitStatus:
    if current is LineVisitStatus.COVERED or visited:
        return LineVisitStatus.COVERED
    return LineVisitStatus.NOT_COVERED


def resolve_line_coverage(statements: Iterable[Statement]) -> LineCoverage:
    """Merge statement ranges into per-line coverage.

    Args:
        statements: Statements of one (class, file) pair, any order.

    Returns:
        LineCoverage sized max(end_line) + 1, or empty arrays for no statements.
    """
    statements = tuple(statements)
    if not statements:
        return LineCoverage([], [])

    size = max(statement.end_line for statement in statements) + 1
    coverage = [NO_COVERAGE] * size
    status = [LineVisitStatus.NOT_COVERABLE] * size

    for statement in statements:
        visits = 1 if statement.visited else 0
        for line in range(statement.start_line, statement.end_line + 1):
            coverage[line] = _merge_visits(coverage[line], visits)
            status[line] = _merge_status(status[line], statement.visited)

    return LineCoverage(coverage, status)


def merge_line_coverage(left: LineCoverage, right: LineCoverage) -> LineCoverage:
    """Merge two resolved tables line by line.

    Result length is the longer of the two. Absent lines on one side
    take the other side's value.
    """
    size = max(len(left.coverage), len(right.coverage))
    coverage = [NO_COVERAGE] * size
    status = [LineVisitStatus.NOT_COVERABLE] * size

    for table in (left, right):
        for line, value in enumerate(table.coverage):
            if value == NO_COVERAGE:
                continue
            coverage[line] = _merge_visits(coverage[line], value)
            status[line] = _merge_status(
                status[line],
                table.line_visit_status[line] is LineVisitStatus.COVERED,
            )

    return LineCoverage(coverage, status)

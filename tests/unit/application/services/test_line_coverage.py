"""Tests for line coverage resolver.

Tests:
- Sizing and absence sentinel
- Saturation (any visited statement wins)
- Order independence of statement application
- merge_line_coverage of partial tables
"""

from __future__ import annotations

import itertools

from covmodel.application.services.line_coverage import (
    LineCoverage,
    merge_line_coverage,
    resolve_line_coverage,
)
from covmodel.domain.coverage import LineVisitStatus
from tests.factories import make_statement

NC = LineVisitStatus.NOT_COVERABLE
NO = LineVisitStatus.NOT_COVERED
YES = LineVisitStatus.COVERED


class TestResolveLineCoverage:
    """Tests for resolve_line_coverage()."""

    def test_no_statements_empty_arrays(self) -> None:
        assert resolve_line_coverage([]) == LineCoverage([], [])

    def test_sized_to_max_end_line(self) -> None:
        result = resolve_line_coverage([make_statement(2, 4), make_statement(7, 9, visited=False)])
        assert len(result.coverage) == 10
        assert len(result.line_visit_status) == 10

    def test_absent_lines_keep_sentinel(self) -> None:
        result = resolve_line_coverage([make_statement(3)])
        assert result.coverage == [-1, -1, -1, 1]
        assert result.line_visit_status == [NC, NC, NC, YES]

    def test_multi_line_statement(self) -> None:
        result = resolve_line_coverage([make_statement(2, 4, visited=False)])
        assert result.coverage == [-1, -1, 0, 0, 0]
        assert result.line_visit_status == [NC, NC, NO, NO, NO]

    def test_visited_and_unvisited_saturate_to_covered(self) -> None:
        result = resolve_line_coverage(
            [make_statement(5, visited=True), make_statement(5, visited=False)],
        )
        assert result.coverage[5] == 1
        assert result.line_visit_status[5] is YES

    def test_unvisited_after_visited_keeps_covered(self) -> None:
        result = resolve_line_coverage(
            [make_statement(5, visited=False), make_statement(5, visited=True)],
        )
        assert result.coverage[5] == 1
        assert result.line_visit_status[5] is YES

    def test_two_visits_saturate_at_one(self) -> None:
        result = resolve_line_coverage([make_statement(1), make_statement(1)])
        assert result.coverage == [-1, 1]

    def test_overlapping_ranges(self) -> None:
        """Statements (5,5,True) and (5,6,False)."""
        result = resolve_line_coverage(
            [make_statement(5, 5, visited=True), make_statement(5, 6, visited=False)],
        )
        assert result.coverage == [-1, -1, -1, -1, -1, 1, 0]
        assert result.line_visit_status[5] is YES
        assert result.line_visit_status[6] is NO

    def test_inverted_range_touches_no_line(self) -> None:
        result = resolve_line_coverage([make_statement(6, 4)])
        assert result.coverage == [-1] * 5

    def test_order_independent(self) -> None:
        statements = [
            make_statement(1, 3, visited=False),
            make_statement(2, 2, visited=True),
            make_statement(3, 5, visited=False),
            make_statement(5, 5, visited=True),
            make_statement(8, 8, visited=False),
        ]
        expected = resolve_line_coverage(statements)

        for ordering in itertools.permutations(statements):
            assert resolve_line_coverage(ordering) == expected

    def test_accepts_iterator(self) -> None:
        result = resolve_line_coverage(iter([make_statement(1)]))
        assert result.coverage == [-1, 1]


class TestMergeLineCoverage:
    """Tests for merge_line_coverage()."""

    def test_merge_equals_resolving_union(self) -> None:
        left = [make_statement(1, 2, visited=False), make_statement(4, visited=True)]
        right = [make_statement(2, 3, visited=True), make_statement(6, visited=False)]

        merged = merge_line_coverage(resolve_line_coverage(left), resolve_line_coverage(right))

        assert merged == resolve_line_coverage(left + right)

    def test_commutative(self) -> None:
        left = resolve_line_coverage([make_statement(1, 3, visited=False)])
        right = resolve_line_coverage([make_statement(2, visited=True)])
        assert merge_line_coverage(left, right) == merge_line_coverage(right, left)

    def test_empty_is_identity(self) -> None:
        table = resolve_line_coverage([make_statement(2, 3, visited=False)])
        assert merge_line_coverage(table, LineCoverage([], [])) == table

"""Console reporter: CoverageModel → rich formatted summary string."""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from covmodel.domain.coverage import Assembly, Class, CoverageModel


@dataclass(frozen=True, slots=True)
class ConsoleConfig:
    """Configuration for console reporter.

    All fields have defaults. Immutable (frozen dataclass).

    Attributes:
        show_classes: List classes under each assembly.
        width: Console width in characters.
    """

    show_classes: bool = True
    width: int = 120

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.width < 40:
            raise ValueError(f"width must be >= 40, got {self.width}")


def format_quota(quota: float | None) -> str:
    """Format coverage percent, "n/a" when nothing is coverable."""
    if quota is None:
        return "n/a"
    return f"{quota:.1f}%"


class ConsoleReporter:
    """Console reporter: line coverage summary per assembly and class.

    Output is str, not print(). Caller decides destination.
    """

    def __init__(self, config: ConsoleConfig | None = None) -> None:
        """Initialize reporter.

        Args:
            config: Reporter configuration. Uses defaults if None.
        """
        self._config = config or ConsoleConfig()

    def report(self, model: CoverageModel) -> str:
        """Format coverage model as rich formatted string.

        Args:
            model: Built coverage model.

        Returns:
            Formatted string with header and summary table.
        """
        output = StringIO()
        console = Console(
            file=output,
            force_terminal=True,
            highlight=False,
            width=self._config.width,
        )

        console.print()
        console.rule("[bold]COVERAGE SUMMARY[/bold]")
        console.print()
        console.print(
            f"[bold]Assemblies:[/bold] {len(model.assemblies)}  "
            f"[bold]Lines:[/bold] {model.covered_lines}/{model.coverable_lines}  "
            f"[bold]Coverage:[/bold] {format_quota(model.coverage_quota)}",
        )
        console.print()

        table = Table(show_header=True, header_style="bold")
        table.add_column("Name")
        table.add_column("Covered", justify="right")
        table.add_column("Coverable", justify="right")
        table.add_column("Coverage", justify="right")

        for assembly in model.assemblies:
            self._add_assembly_row(table, assembly)
            if self._config.show_classes:
                for klass in assembly.classes:
                    self._add_class_row(table, klass)

        console.print(table)
        return output.getvalue()

    def _add_assembly_row(self, table: Table, assembly: Assembly) -> None:
        table.add_row(
            f"[bold]{escape(assembly.name)}[/bold]",
            str(assembly.covered_lines),
            str(assembly.coverable_lines),
            format_quota(assembly.coverage_quota),
        )

    def _add_class_row(self, table: Table, klass: Class) -> None:
        table.add_row(
            f"  {escape(klass.name)}",
            str(klass.covered_lines),
            str(klass.coverable_lines),
            format_quota(klass.coverage_quota),
        )

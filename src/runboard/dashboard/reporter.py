"""
Reporter for dashboard results.

Renders summary cards, the runner table and daily totals for the
console using Rich.
"""

from collections.abc import Sequence
from typing import ClassVar

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from runboard.aggregation.metrics import OverallMetrics, RunnerStatistics
from runboard.aggregation.series import (
    ChartDataPoint,
    DailyRunData,
    RunnerTimelinePoint,
)
from runboard.dashboard.pipeline import DashboardResult
from runboard.validation.reporter import ConsoleReporter


class DashboardReporter:
    """
    Formats and displays dashboard results.

    Uses Rich for formatted console output.
    """

    RUNNER_COLORS: ClassVar[list[str]] = [
        "blue",
        "green",
        "yellow",
        "red",
        "magenta",
        "bright_magenta",
        "cyan",
        "bright_red",
    ]

    BAR_WIDTH: ClassVar[int] = 30

    def __init__(self, console: Console | None = None) -> None:
        """
        Initialize reporter.

        Args:
            console: Rich console for output. Creates new if not provided.
        """
        self.console = console or Console()

    def print_dashboard(self, result: DashboardResult) -> None:
        """
        Print the full dashboard, or the validation errors.

        Args:
            result: DashboardResult to display.
        """
        if not result.is_valid or result.overall is None:
            ConsoleReporter(self.console).print_result(result.validation, result.source)
            return

        self.console.print()
        self._print_summary_cards(result.source, result.overall)

        self.console.print()
        self._print_runner_table(result.runners)

        if result.runner_chart:
            self.console.print()
            self._print_chart(result.runner_chart)

        if result.daily:
            self.console.print()
            self._print_daily_totals(result.daily)

    def print_runner(
        self,
        stats: RunnerStatistics,
        timeline: Sequence[RunnerTimelinePoint],
    ) -> None:
        """
        Print one runner's statistics and runs.

        Args:
            stats: The runner's statistics.
            timeline: The runner's runs in date order.
        """
        summary = Table(show_header=False, box=None)
        summary.add_column("Label", style="bold")
        summary.add_column("Value")
        summary.add_row("Runs:", str(stats.run_count))
        summary.add_row("Total:", f"{stats.total_miles:.2f} mi")
        summary.add_row("Average:", f"{stats.average_miles:.2f} mi")
        summary.add_row("Shortest:", f"{stats.minimum_miles:.2f} mi")
        summary.add_row("Longest:", f"{stats.maximum_miles:.2f} mi")

        self.console.print(
            Panel.fit(summary, title=Text(stats.runner_name, style="bold cyan"))
        )

        table = Table(title="Runs", show_header=True, header_style="bold")
        table.add_column("Date", style="cyan")
        table.add_column("Miles", justify="right")
        for point in timeline:
            table.add_row(point.date, f"{point.miles:.2f}")
        self.console.print(table)

    def _print_summary_cards(self, source: str, overall: OverallMetrics) -> None:
        """Print the overall metrics as a panel."""
        cards = Table(show_header=False, box=None)
        cards.add_column("Label", style="bold")
        cards.add_column("Value")

        cards.add_row("Total Runs:", str(overall.total_runs))
        cards.add_row("Total Miles:", Text(f"{overall.total_miles:.2f}", style="green"))
        cards.add_row("Average per Run:", f"{overall.average_miles_per_run:.2f}")
        cards.add_row(
            "Shortest / Longest:",
            f"{overall.minimum_miles:.2f} / {overall.maximum_miles:.2f}",
        )
        cards.add_row("Runners:", str(overall.unique_runners))

        title = Text("Run Summary", style="bold")
        self.console.print(
            Panel.fit(cards, title=title, subtitle=Text(source, style="dim"))
        )

    def _print_runner_table(self, runners: Sequence[RunnerStatistics]) -> None:
        """Print per-runner statistics."""
        table = Table(title="Runners", show_header=True, header_style="bold")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Runner", min_width=15)
        table.add_column("Runs", justify="right")
        table.add_column("Total", justify="right")
        table.add_column("Average", justify="right")
        table.add_column("Min", justify="right")
        table.add_column("Max", justify="right")

        for index, stats in enumerate(runners):
            color = self.RUNNER_COLORS[index % len(self.RUNNER_COLORS)]
            table.add_row(
                str(index + 1),
                Text(stats.runner_name, style=color),
                str(stats.run_count),
                f"{stats.total_miles:.2f}",
                f"{stats.average_miles:.2f}",
                f"{stats.minimum_miles:.2f}",
                f"{stats.maximum_miles:.2f}",
            )

        self.console.print(table)

    def _print_chart(self, points: Sequence[ChartDataPoint]) -> None:
        """Print runner chart points as horizontal bars with shares."""
        total = sum(p.value for p in points)
        table = Table(title="Share by Runner", show_header=False, box=None)
        table.add_column("Runner")
        table.add_column("Bar")
        table.add_column("Share", justify="right")
        table.add_column("Detail", style="dim")

        for index, point in enumerate(points):
            share = point.value / total if total else 0.0
            color = self.RUNNER_COLORS[index % len(self.RUNNER_COLORS)]
            table.add_row(
                Text(point.name),
                Text("█" * round(share * self.BAR_WIDTH), style=color),
                f"{share:.0%}",
                point.label or "",
            )

        self.console.print(table)

    def _print_daily_totals(self, days: Sequence[DailyRunData]) -> None:
        """Print daily totals as a bar list."""
        peak = max(d.miles for d in days)
        table = Table(
            title=f"Miles per Day (last {len(days)} dates)",
            show_header=True,
            header_style="bold",
        )
        table.add_column("Date", style="cyan")
        table.add_column("Miles", justify="right")
        table.add_column("Runs", justify="right")
        table.add_column("")

        for day in days:
            width = round(day.miles / peak * self.BAR_WIDTH) if peak else 0
            table.add_row(
                day.date,
                f"{day.miles:.2f}",
                str(day.runs),
                Text("█" * width, style="blue"),
            )

        self.console.print(table)

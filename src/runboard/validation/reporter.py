"""
Console output for upload validation.

Shows a one-line status table for the upload followed by every
collected error, so a file can be fixed in a single pass.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from runboard.validation.core import FailureKind, ValidationResult


class ConsoleReporter:
    """Prints upload validation results with Rich."""

    def __init__(self, console: Console) -> None:
        """
        Initialize console reporter.

        Args:
            console: Rich Console instance for output.
        """
        self.console = console

    def print_result(
        self,
        result: ValidationResult,
        source: str,
        n_records: int | None = None,
    ) -> None:
        """
        Print a validation result with every collected error.

        Args:
            result: Validation result to display.
            source: Name of the validated upload.
            n_records: Number of released records, shown when valid.
        """
        table = Table(title="Upload Validation", show_header=True)
        table.add_column("File", style="cyan", no_wrap=True)
        table.add_column("Status", justify="center")
        table.add_column("Rows", justify="right")
        table.add_column("Errors", justify="right")

        table.add_row(
            escape(source),
            self._format_status(result),
            str(n_records) if n_records is not None else "-",
            str(result.n_errors),
        )
        self.console.print(table)

        self._print_errors(result)

    def _format_status(self, result: ValidationResult) -> str:
        """
        Status cell for the result table.

        Args:
            result: Validation result.

        Returns:
            Formatted status string with color markup.
        """
        if result.is_valid:
            return "[green]Pass[/green]"
        if result.failure is FailureKind.EMPTY:
            return "[yellow]Empty[/yellow]"
        if result.failure is FailureKind.STRUCTURAL:
            return "[red]Unreadable[/red]"
        return "[red]Fail[/red]"

    def _print_errors(self, result: ValidationResult) -> None:
        """
        Print every error message, one per line.

        Args:
            result: Validation result.
        """
        if result.is_valid:
            return

        self.console.print()
        self.console.print("[bold red]Validation Errors:[/bold red]")
        for error in result.errors:
            self.console.print(f"  {escape(error)}")

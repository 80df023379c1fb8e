"""Command-line interface for the runboard dashboard."""

import json
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from runboard.config.settings import DashboardConfig

app = typer.Typer(
    name="runboard",
    help="Running activity dashboard: validate and summarize CSV run logs.",
    no_args_is_help=True,
)

console = Console()

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration YAML file.",
        exists=True,
        dir_okay=False,
    ),
]

VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Show pipeline log output.",
    ),
]

CsvArgument = Annotated[
    Path,
    typer.Argument(
        help="CSV file with date, person and miles run columns.",
        dir_okay=False,
    ),
]


def _setup(config: Path | None, verbose: bool) -> "DashboardConfig":
    """Load configuration and configure logging."""
    import yaml

    from runboard.config.loader import load_config
    from runboard.utils.logging import configure_from_settings

    try:
        dashboard_config = load_config(config)
    except (ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    configure_from_settings(dashboard_config.logging, verbose=verbose)
    return dashboard_config


@app.command()
def validate(
    csv_file: CsvArgument,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Validate a run log and list every problem found."""
    from runboard.dashboard import DashboardPipeline
    from runboard.validation import ConsoleReporter

    dashboard_config = _setup(config, verbose)

    result = DashboardPipeline(dashboard_config).run_path(csv_file)

    reporter = ConsoleReporter(console)
    reporter.print_result(
        result.validation,
        result.source,
        n_records=len(result.records) if result.is_valid else None,
    )

    if not result.is_valid:
        raise typer.Exit(code=1)


@app.command()
def summarize(
    csv_file: CsvArgument,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
    json_path: Annotated[
        Path | None,
        typer.Option(
            "--json",
            "-j",
            help="Also write the dashboard snapshot as JSON to this path.",
            dir_okay=False,
        ),
    ] = None,
    mode: Annotated[
        str | None,
        typer.Option(
            "--mode",
            "-m",
            help="Runner chart mode: 'total' or 'average'. Overrides config.",
        ),
    ] = None,
) -> None:
    """Show overall metrics, runner statistics and daily totals."""
    from runboard.config.settings import ChartMode
    from runboard.dashboard import DashboardPipeline, DashboardReporter

    dashboard_config = _setup(config, verbose)

    if mode is not None:
        try:
            chart_mode = ChartMode(mode.lower())
        except ValueError as e:
            msg = f"Invalid mode '{mode}'. Use 'total' or 'average'."
            console.print(f"[red]Error: {escape(msg)}[/red]")
            raise typer.Exit(code=1) from e
        aggregation = dashboard_config.aggregation.model_copy(
            update={"chart_mode": chart_mode}
        )
        dashboard_config = dashboard_config.model_copy(
            update={"aggregation": aggregation}
        )

    result = DashboardPipeline(dashboard_config).run_path(csv_file)

    DashboardReporter(console).print_dashboard(result)

    if json_path is not None:
        json_path.parent.mkdir(parents=True, exist_ok=True)
        with json_path.open("w", encoding="utf-8") as f:
            json.dump(result.to_dict(), f, indent=2)
        console.print(f"\n[green]Saved snapshot to: {json_path}[/green]")

    if not result.is_valid:
        raise typer.Exit(code=1)


@app.command()
def runner(
    csv_file: CsvArgument,
    name: Annotated[
        str,
        typer.Argument(help="Runner name (case-insensitive)."),
    ],
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Show one runner's statistics and dated runs."""
    from runboard.aggregation import runner_names, runner_timeline
    from runboard.dashboard import DashboardPipeline, DashboardReporter
    from runboard.validation import ConsoleReporter

    dashboard_config = _setup(config, verbose)

    result = DashboardPipeline(dashboard_config).run_path(csv_file)
    if not result.is_valid:
        ConsoleReporter(console).print_result(result.validation, result.source)
        raise typer.Exit(code=1)

    key = name.strip().lower()
    stats = next((s for s in result.runners if s.runner_name.lower() == key), None)
    if stats is None:
        known = ", ".join(runner_names(result.records))
        console.print(f"[red]Error: No runs for '{escape(name)}'.[/red]")
        console.print(f"[dim]Runners: {escape(known)}[/dim]")
        raise typer.Exit(code=1)

    timeline = runner_timeline(result.records, name)
    DashboardReporter(console).print_runner(stats, timeline)


@app.command()
def schemas() -> None:
    """List the registered table schemas."""
    from runboard.schemas import SchemaRegistry

    table = Table(title=f"Schemas (registry {SchemaRegistry.registry_version()})")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Version")
    table.add_column("Role")
    table.add_column("Description", style="dim")

    for row in SchemaRegistry.describe():
        table.add_row(*row)

    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    from runboard import __version__

    console.print(f"runboard version {__version__}")


if __name__ == "__main__":
    app()

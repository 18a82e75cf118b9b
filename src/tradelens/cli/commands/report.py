"""Performance report command."""

import sys
import traceback
from decimal import Decimal
from pathlib import Path
from typing import Literal, Optional, cast

import click
from rich.console import Console
from rich.markup import escape

from tradelens.libraries.performance.time_range import TIME_RANGE_LABELS
from tradelens.services.analytics import AnalyticsConfig, AnalyticsService
from tradelens.services.journal import CsvTradeSource, StaticNameDirectory, TradeFilter, load_names_csv
from tradelens.services.reporting import display_performance_report, write_json_report
from tradelens.system import LoggerFactory, reload_system_config

console = Console()

RANGE_CHOICES = [token for token in TIME_RANGE_LABELS if token] + ["all"]


@click.command("report")
@click.option(
    "--file",
    "-f",
    "trades_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Path to trade journal CSV export",
)
@click.option(
    "--range",
    "-r",
    "time_range",
    type=click.Choice(RANGE_CHOICES, case_sensitive=False),
    help="Time range (default: analytics.default_time_range from system.yaml)",
)
@click.option(
    "--capital",
    "-c",
    type=click.FloatRange(min=0),
    help="Override starting capital",
)
@click.option(
    "--dimension",
    "-d",
    "dimensions",
    multiple=True,
    type=click.Choice(["strategy", "session", "direction", "account"], case_sensitive=False),
    help="Breakdown dimension (repeatable, default from system.yaml)",
)
@click.option(
    "--session",
    type=click.Choice(["AS", "LO", "NY", "OTHER"], case_sensitive=False),
    help="Only include trades from this session",
)
@click.option(
    "--direction",
    type=click.Choice(["LONG", "SHORT"], case_sensitive=False),
    help="Only include trades in this direction",
)
@click.option(
    "--status",
    type=click.Choice(["open", "closed", "cancelled"], case_sensitive=False),
    help="Only include trades with this status (e.g. closed)",
)
@click.option(
    "--strategies",
    "strategies_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="CSV with id,name columns for strategy display names",
)
@click.option(
    "--json",
    "json_output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write the report as JSON to this path",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="System config file (default: $TRADELENS_CONFIG or config/system.yaml)",
)
@click.option(
    "--log-level",
    "-l",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Set logging level",
)
def report_command(
    trades_file: Path,
    time_range: Optional[str],
    capital: Optional[float],
    dimensions: tuple[str, ...],
    session: Optional[str],
    direction: Optional[str],
    status: Optional[str],
    strategies_file: Optional[Path],
    json_output: Optional[Path],
    config_file: Optional[Path],
    log_level: Optional[str],
):
    """
    Build a performance report from a journal CSV export.

    \b
    Examples:
        # Last 7 days (config default)
        tradelens report --file exports/journal.csv

        # All time, starting from $10,000
        tradelens report -f exports/journal.csv --range all --capital 10000

        # Only session and direction breakdowns, New York trades
        tradelens report -f exports/journal.csv -d session -d direction --session NY

        # Closed trades only
        tradelens report -f exports/journal.csv --status closed

        # Save the full report as JSON
        tradelens report -f exports/journal.csv --json reports/journal.json
    """
    try:
        console.rule("[bold blue]TradeLens Report[/bold blue]")

        system_config = reload_system_config(config_file)
        if log_level:
            # Type cast since click already validated the choice
            level = cast(Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], log_level.upper())
            system_config.logging.level = level
        LoggerFactory.configure(system_config.logging.to_logger_config())

        overrides: dict[str, object] = {}
        if capital is not None:
            overrides["starting_capital"] = Decimal(str(capital))
        if dimensions:
            overrides["dimensions"] = list(dimensions)
        config = AnalyticsConfig.from_settings(system_config.analytics, **overrides)

        import_settings = system_config.import_
        source = CsvTradeSource(
            trades_file,
            delimiter=import_settings.delimiter,
            encoding=import_settings.encoding,
            date_format=import_settings.date_format,
        )
        strategy_names = StaticNameDirectory(load_names_csv(strategies_file)) if strategies_file else source

        service = AnalyticsService(source, config, strategy_names=strategy_names, account_names=source)
        trade_filter = TradeFilter(
            session=session.upper() if session else None,  # type: ignore[arg-type]
            direction=direction.upper() if direction else None,  # type: ignore[arg-type]
            status=status.lower() if status else None,  # type: ignore[arg-type]
        )

        with console.status("[cyan]Building report...[/cyan]"):
            report = service.generate_report(trade_filter, time_range=time_range)

        console.print(f"  Source: [yellow]{trades_file}[/yellow]")
        display_performance_report(report, console=console)

        if json_output:
            path = write_json_report(report, json_output)
            console.print(f"[cyan]JSON report:[/cyan] {path}")
            console.print()

    except Exception as e:
        console.print()
        console.print(f"[bold red]✗ Report failed:[/bold red] {escape(str(e))}")
        if log_level and log_level.upper() == "DEBUG":
            console.print()
            console.print("[dim]" + traceback.format_exc() + "[/dim]")
        sys.exit(1)

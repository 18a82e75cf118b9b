"""Rich console formatters for performance reports.

Provides terminal display of journal statistics with tables, colors, and
formatting using the Rich library.
"""

from decimal import Decimal

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tradelens.libraries.performance.models import DailyPnL, GroupPerformance, PerformanceReport, TradeSummary
from tradelens.libraries.performance.time_range import list_time_ranges

BREAKDOWN_TITLES: dict[str, str] = {
    "strategy": "🎯 Strategy Performance",
    "session": "🕒 Session Performance",
    "direction": "↕️  Long vs Short",
    "account": "🏦 Account Performance",
}


def _format_pct(value: Decimal, precision: int = 2) -> str:
    """Format percentage."""
    return f"{float(value):.{precision}f}%"


def _format_currency(value: Decimal, precision: int = 2) -> str:
    """Format currency value with sign before the dollar mark."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(float(value)):,.{precision}f}"


def _format_ratio(value: Decimal) -> str:
    return f"{float(value):.2f}"


def _get_color(value: Decimal) -> str:
    """Get color based on positive/negative value."""
    if value > 0:
        return "green"
    elif value < 0:
        return "red"
    return "white"


def _colored(text: str, value: Decimal) -> str:
    color = _get_color(value)
    return f"[{color}]{text}[/{color}]"


def _create_summary_table(report: PerformanceReport) -> Table:
    """Create headline figures table."""
    table = Table(title="📊 Performance Summary", show_header=False, box=None, padding=(0, 2))

    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    if report.date_range is not None:
        table.add_row(
            "Period",
            f"{report.date_range.start:%Y-%m-%d} to {report.date_range.end:%Y-%m-%d}",
        )
    else:
        table.add_row("Period", "All Time")
    table.add_row("", "")  # Spacer

    table.add_row("Starting Capital", _format_currency(report.starting_capital))
    table.add_row("Final Equity", _format_currency(report.final_equity))
    table.add_row("Return", _colored(_format_pct(report.return_pct), report.return_pct))
    table.add_row("Max Drawdown", f"[red]{_format_pct(report.max_drawdown_pct)}[/red]")

    return table


def _create_trade_stats_table(summary: TradeSummary) -> Table:
    """Create trade statistics table."""
    table = Table(title="💼 Trade Statistics", show_header=False, box=None, padding=(0, 2))

    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Total Trades", f"{summary.total_trades:,}")
    table.add_row("Winning Trades", f"[green]{summary.winning_trades:,}[/green]")
    table.add_row("Losing Trades", f"[red]{summary.losing_trades:,}[/red]")
    if summary.undecided_trades:
        table.add_row("Undecided", f"[dim]{summary.undecided_trades:,}[/dim]")

    win_rate_color = (
        "green" if summary.win_rate > Decimal("50") else "yellow" if summary.win_rate > Decimal("40") else "red"
    )
    table.add_row("Win Rate", f"[{win_rate_color}]{_format_pct(summary.win_rate)}[/{win_rate_color}]")
    table.add_row("Win Rate (decided)", _format_pct(summary.decided_win_rate))

    if summary.profit_factor > 0:
        pf_color = (
            "green"
            if summary.profit_factor > Decimal("2.0")
            else "yellow"
            if summary.profit_factor > Decimal("1.0")
            else "red"
        )
        table.add_row("Profit Factor", f"[{pf_color}]{_format_ratio(summary.profit_factor)}[/{pf_color}]")
    else:
        table.add_row("Profit Factor", "[dim]0.00 (no losses)[/dim]")

    table.add_row("", "")  # Spacer
    table.add_row("Total P&L", _colored(_format_currency(summary.total_pnl), summary.total_pnl))
    table.add_row("Avg Win", f"[green]{_format_currency(summary.avg_win)}[/green]")
    table.add_row("Avg Loss", f"[red]{_format_currency(summary.avg_loss)}[/red]")
    table.add_row("Total R:R", f"{_format_ratio(summary.total_risk_reward)}R")

    return table


def _create_daily_table(days: list[DailyPnL], max_rows: int = 10) -> Table | None:
    """Create daily P&L table (most recent days)."""
    if not days:
        return None

    shown = days[-max_rows:]
    table = Table(
        title="📅 Daily P&L",
        caption=f"last {len(shown)} of {len(days)} trading days",
        box=None,
        padding=(0, 1),
    )

    table.add_column("Date", style="cyan")
    table.add_column("P&L", justify="right")
    table.add_column("Trades", justify="right")
    table.add_column("Win Rate", justify="right")

    for day in shown:
        table.add_row(
            day.date.isoformat(),
            _colored(_format_currency(day.total_pnl), day.total_pnl),
            f"{day.trade_count:,}",
            _format_pct(day.win_rate),
        )

    return table


def _create_breakdown_table(dimension: str, groups: list[GroupPerformance]) -> Table | None:
    """Create per-group performance table for one dimension."""
    if not groups:
        return None

    title = BREAKDOWN_TITLES.get(dimension, f"{dimension.title()} Performance")
    table = Table(title=title, box=None, padding=(0, 1))

    table.add_column(dimension.title(), style="cyan")
    table.add_column("Trades", justify="right")
    table.add_column("W/L", justify="right")
    table.add_column("Win Rate", justify="right")
    table.add_column("P&L", justify="right")
    table.add_column("Avg P&L", justify="right")
    table.add_column("Avg R:R", justify="right")

    for group in groups:
        table.add_row(
            group.label,
            f"{group.total_trades:,}",
            f"{group.winning_trades}/{group.losing_trades}",
            _format_pct(group.win_rate),
            _colored(_format_currency(group.total_pnl), group.total_pnl),
            _format_currency(group.avg_pnl),
            _format_ratio(group.avg_risk_reward),
        )

    return table


def create_time_ranges_table() -> Table:
    """Create the table of supported time-range tokens."""
    table = Table(title="Time Ranges")
    table.add_column("Token", style="cyan", no_wrap=True)
    table.add_column("Label", style="white")
    for token, label in list_time_ranges():
        table.add_row(token or "all", label)
    return table


def display_performance_report(report: PerformanceReport, console: Console | None = None) -> None:
    """
    Display a performance report in Rich-formatted console output.

    Args:
        report: Report to display
        console: Rich Console instance (creates new if None)

    Example:
        >>> report = service.generate_report(time_range="30days")
        >>> display_performance_report(report)
    """
    if console is None:
        console = Console()

    console.print()  # Blank line
    console.print(_create_summary_table(report))
    console.print()

    if report.summary.total_trades == 0:
        console.print("[yellow]No trades in the selected range.[/yellow]")
        console.print()
        return

    console.print(_create_trade_stats_table(report.summary))
    console.print()

    daily = _create_daily_table(report.daily_pnl)
    if daily:
        console.print(daily)
        console.print()

    for dimension, groups in report.breakdowns.items():
        table = _create_breakdown_table(dimension, groups)
        if table:
            console.print(table)
            console.print()

    summary_text = Text()
    summary_text.append("🏁 Equity: ", style="bold")
    summary_text.append(
        f"{_format_currency(report.starting_capital)} → {_format_currency(report.final_equity)}", style="bold cyan"
    )
    summary_text.append(f" ({_format_pct(report.return_pct)})", style=f"bold {_get_color(report.return_pct)}")

    console.print(Panel(summary_text, border_style="green" if report.return_pct >= 0 else "red"))
    console.print()

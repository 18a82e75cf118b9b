"""Report assembly.

build_performance_report() is the one place where the library pieces are put
together. It is pure: no I/O, no logging, no clock.

Pipeline:
    1. Stable sort by entry_date (ties keep input order)
    2. Summary statistics
    3. Equity curve from starting capital
    4. Daily P&L
    5. Dimensional breakdowns
    6. Headline figures (final equity, return, max drawdown)
"""

from decimal import Decimal
from typing import Mapping, Sequence

from tradelens.libraries.performance.breakdown import DEFAULT_DIMENSIONS, Dimension, calculate_breakdowns
from tradelens.libraries.performance.calculators import (
    aggregate_daily_pnl,
    build_equity_curve,
    calculate_max_drawdown,
)
from tradelens.libraries.performance.metrics import calculate_return_pct, calculate_summary
from tradelens.libraries.performance.models import DateRange, PerformanceReport, Trade


def sort_trades(trades: Sequence[Trade]) -> list[Trade]:
    """Sort trades ascending by entry_date; equal timestamps keep input order.

    Timestamps are compared on their wall clock, so naive and aware entries
    can be mixed.
    """
    return sorted(trades, key=lambda t: t.entry_date.replace(tzinfo=None))


def build_performance_report(
    trades: Sequence[Trade],
    starting_capital: Decimal = Decimal("100"),
    dimensions: Sequence[Dimension] = DEFAULT_DIMENSIONS,
    labels: Mapping[str, Mapping[str, str]] | None = None,
    date_range: DateRange | None = None,
) -> PerformanceReport:
    """
    Build the complete performance report for a trade collection.

    Args:
        trades: Trades to analyze, any order (already filtered)
        starting_capital: Account value before the first trade
        dimensions: Breakdown dimensions
        labels: Per-dimension id -> name lookups (e.g. {"strategy": {...}})
        date_range: Range the trades were filtered with, echoed in the report

    Returns:
        PerformanceReport; an empty input yields zero statistics, empty
        series and final equity equal to starting capital

    Raises:
        ValueError: If a required dimension key is absent on some trade

    Example:
        >>> report = build_performance_report(trades, Decimal("100"))
        >>> report.summary.total_pnl, report.final_equity
        (Decimal('19.5'), Decimal('119.5'))
    """
    capital = Decimal(starting_capital)
    ordered = sort_trades(trades)

    summary = calculate_summary(ordered)
    equity_curve = build_equity_curve(ordered, capital)
    final_equity = equity_curve[-1].equity if equity_curve else capital

    return PerformanceReport(
        summary=summary,
        equity_curve=equity_curve,
        daily_pnl=aggregate_daily_pnl(ordered),
        breakdowns=calculate_breakdowns(ordered, dimensions, labels),
        starting_capital=capital,
        final_equity=final_equity,
        return_pct=calculate_return_pct(summary.total_pnl, capital),
        max_drawdown_pct=calculate_max_drawdown(equity_curve, capital),
        date_range=date_range,
    )

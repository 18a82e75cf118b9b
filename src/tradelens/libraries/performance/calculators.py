"""Stateful performance calculators for incremental updates.

Calculators maintain state and update one trade at a time. The module-level
build_* / aggregate_* functions wrap them for the common one-shot case.

Philosophy:
- Stateful: Maintain internal state between updates
- Incremental: Each add_trade() is O(1)
- Restartable: a fresh calculator over the same input gives the same output

Usage:
    >>> from tradelens.libraries.performance.calculators import EquityCurveCalculator
    >>> from decimal import Decimal
    >>>
    >>> calc = EquityCurveCalculator(starting_capital=Decimal("100"))
    >>> calc.add_trade(trade)  # pnl=10
    >>> calc.equity
    Decimal('110')
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Sequence

from tradelens.libraries.performance.metrics import HUNDRED, ZERO, percentage, quantize_ratio
from tradelens.libraries.performance.models import DailyPnL, EquityPoint, Trade


class EquityCurveCalculator:
    """
    Tracks running equity trade by trade.

    Trades must be supplied in entry_date order; the calculator does not sort.
    Each trade produces exactly one EquityPoint.
    """

    def __init__(self, starting_capital: Decimal):
        """
        Initialize equity curve calculator.

        Args:
            starting_capital: Account value before the first trade
        """
        self._starting_capital = Decimal(starting_capital)
        self._cumulative_pnl = ZERO
        self._points: list[EquityPoint] = []

    def add_trade(self, trade: Trade) -> EquityPoint:
        """
        Append the next trade to the curve.

        Args:
            trade: Next trade in chronological order

        Returns:
            The EquityPoint recorded for this trade
        """
        trade_pnl = trade.pnl_or_zero
        self._cumulative_pnl += trade_pnl

        point = EquityPoint(
            trade_number=len(self._points) + 1,
            trade_date=trade.entry_date,
            trade_pnl=trade_pnl,
            cumulative_pnl=self._cumulative_pnl,
            equity=self._starting_capital + self._cumulative_pnl,
        )
        self._points.append(point)
        return point

    def get_curve(self) -> list[EquityPoint]:
        """Get equity curve points in insertion order."""
        return self._points.copy()

    @property
    def starting_capital(self) -> Decimal:
        """Capital before the first trade."""
        return self._starting_capital

    @property
    def cumulative_pnl(self) -> Decimal:
        """Sum of P&L added so far."""
        return self._cumulative_pnl

    @property
    def equity(self) -> Decimal:
        """Current equity (starting capital when no trades were added)."""
        return self._starting_capital + self._cumulative_pnl

    def __len__(self) -> int:
        """Number of points in curve."""
        return len(self._points)


class DailyPnLCalculator:
    """
    Aggregates trades by calendar date of entry.

    The date key is entry_date.date() exactly as stored; timestamps are not
    converted between timezones. Only dates with trades produce an entry.
    """

    def __init__(self) -> None:
        """Initialize daily P&L calculator."""
        self._days: dict[date, dict[str, Decimal | int]] = {}

    def add_trade(self, trade: Trade) -> None:
        """
        Add a trade to its day bucket.

        Args:
            trade: Trade to aggregate
        """
        day = self._days.setdefault(trade.trade_date, {"pnl": ZERO, "count": 0, "wins": 0})
        day["pnl"] += trade.pnl_or_zero
        day["count"] += 1
        if trade.is_winner is True:
            day["wins"] += 1

    def calculate(self) -> list[DailyPnL]:
        """
        Build per-day aggregates.

        Returns:
            DailyPnL list sorted ascending by date
        """
        results: list[DailyPnL] = []
        for day in sorted(self._days):
            data = self._days[day]
            count = int(data["count"])
            wins = int(data["wins"])
            results.append(
                DailyPnL(
                    date=day,
                    total_pnl=Decimal(data["pnl"]),
                    trade_count=count,
                    winning_trades=wins,
                    win_rate=percentage(wins, count),
                )
            )
        return results

    def __len__(self) -> int:
        """Number of distinct trading days seen."""
        return len(self._days)


def build_equity_curve(trades: Iterable[Trade], starting_capital: Decimal) -> list[EquityPoint]:
    """
    Build the per-trade equity curve.

    Args:
        trades: Trades already sorted ascending by entry_date
        starting_capital: Account value before the first trade

    Returns:
        One EquityPoint per trade, in input order

    Example:
        >>> curve = build_equity_curve([win_10, loss_4], Decimal("100"))
        >>> [(p.cumulative_pnl, p.equity) for p in curve]
        [(Decimal('10'), Decimal('110')), (Decimal('6'), Decimal('106'))]
    """
    calc = EquityCurveCalculator(starting_capital)
    for trade in trades:
        calc.add_trade(trade)
    return calc.get_curve()


def aggregate_daily_pnl(trades: Iterable[Trade]) -> list[DailyPnL]:
    """
    Group trades by entry date and sum P&L per day.

    Args:
        trades: Trades in any order

    Returns:
        Sparse, date-ascending list of DailyPnL
    """
    calc = DailyPnLCalculator()
    for trade in trades:
        calc.add_trade(trade)
    return calc.calculate()


def calculate_max_drawdown(curve: Sequence[EquityPoint], starting_capital: Decimal | None = None) -> Decimal:
    """
    Calculate maximum peak-to-trough drawdown of an equity curve.

    Args:
        curve: Equity points in order
        starting_capital: Optional initial peak (equity before the first trade)

    Returns:
        Maximum drawdown as positive percentage rounded to 2 places

    Example:
        >>> # equity 100 -> 110 -> 99
        >>> calculate_max_drawdown(curve, Decimal("100"))
        Decimal('10.00')
    """
    equities = [p.equity for p in curve]
    if starting_capital is not None:
        equities.insert(0, Decimal(starting_capital))

    if len(equities) < 2:
        return ZERO

    max_dd = ZERO
    peak = equities[0]

    for equity in equities:
        if equity > peak:
            peak = equity
        elif peak > ZERO:
            dd = (peak - equity) / peak * HUNDRED
            if dd > max_dd:
                max_dd = dd

    return quantize_ratio(max_dd)

"""Summary statistics calculation functions.

Pure functions for calculating journal statistics from a sequence of trades.
All functions are stateless and total: every division is guarded, so an empty
or partially settled trade list yields zeros rather than errors.

Philosophy:
- Pure functions: same inputs always produce same outputs
- No side effects: don't modify inputs or global state
- Trust the recorded is_winner flag; never derive it from the P&L sign
- Ratios saturate at 0 instead of producing infinity

Usage:
    >>> from tradelens.libraries.performance import metrics
    >>> summary = metrics.calculate_summary(trades)
    >>> summary.win_rate
    Decimal('50.00')
"""

from decimal import Decimal, localcontext
from typing import Literal, Sequence

from tradelens.libraries.performance.models import Trade, TradeSummary

WinRateBasis = Literal["total", "decided"]

ZERO = Decimal("0")
HUNDRED = Decimal("100")
RATIO_QUANTUM = Decimal("0.01")


def quantize_ratio(value: Decimal) -> Decimal:
    """
    Round to 2 places at any magnitude.

    Precision is widened so values beyond the default 28-digit context
    still round instead of raising InvalidOperation.

    Example:
        >>> quantize_ratio(Decimal("1E+29"))
        Decimal('100000000000000000000000000000.00')
    """
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 4)
        return value.quantize(RATIO_QUANTUM)


def _winners(trades: Sequence[Trade]) -> list[Trade]:
    return [t for t in trades if t.is_winner is True]


def _losers(trades: Sequence[Trade]) -> list[Trade]:
    return [t for t in trades if t.is_winner is False]


def safe_divide(numerator: Decimal, denominator: Decimal | int) -> Decimal:
    """Divide, returning 0 when the denominator is 0."""
    if denominator == 0:
        return ZERO
    return Decimal(numerator) / Decimal(denominator)


def percentage(part: int, whole: int) -> Decimal:
    """
    Express part/whole as a percentage rounded to 2 places.

    Example:
        >>> percentage(1, 3)
        Decimal('33.33')
        >>> percentage(0, 0)
        Decimal('0')
    """
    if whole == 0:
        return ZERO
    return quantize_ratio(Decimal(part) / Decimal(whole) * HUNDRED)


def calculate_win_rate(trades: Sequence[Trade], basis: WinRateBasis = "total") -> Decimal:
    """
    Calculate win rate as a percentage (0-100).

    Args:
        trades: Sequence of Trade objects
        basis: "total" divides by every trade, including undecided ones.
               "decided" divides by winning + losing trades only.

    Returns:
        Win rate percentage, 0 when the denominator is 0

    Example:
        >>> trades = [winner, loser, undecided]
        >>> calculate_win_rate(trades)
        Decimal('33.33')
        >>> calculate_win_rate(trades, basis="decided")
        Decimal('50.00')
    """
    winning = len(_winners(trades))
    if basis == "decided":
        return percentage(winning, winning + len(_losers(trades)))
    return percentage(winning, len(trades))


def calculate_total_pnl(trades: Sequence[Trade]) -> Decimal:
    """Sum of P&L, absent P&L counted as zero."""
    return sum((t.pnl_or_zero for t in trades), ZERO)


def calculate_average_win(trades: Sequence[Trade]) -> Decimal:
    """Mean P&L of trades flagged as winners, 0 if there are none."""
    winners = _winners(trades)
    return safe_divide(calculate_total_pnl(winners), len(winners))


def calculate_average_loss(trades: Sequence[Trade]) -> Decimal:
    """Mean P&L of trades flagged as losers (signed), 0 if there are none."""
    losers = _losers(trades)
    return safe_divide(calculate_total_pnl(losers), len(losers))


def calculate_profit_factor(trades: Sequence[Trade]) -> Decimal:
    """
    Calculate profit factor (gross profit / gross loss).

    Gross figures use the P&L sign, independently of is_winner.

    Returns:
        Profit factor rounded to 2 places, or 0 when there is no gross loss

    Example:
        >>> calculate_profit_factor([trade(pnl=10), trade(pnl=-4)])
        Decimal('2.50')
    """
    gross_profit = sum((t.pnl for t in trades if t.pnl is not None and t.pnl > 0), ZERO)
    gross_loss = abs(sum((t.pnl for t in trades if t.pnl is not None and t.pnl < 0), ZERO))

    if gross_loss == ZERO:
        return ZERO

    return quantize_ratio(gross_profit / gross_loss)


def calculate_total_risk_reward(trades: Sequence[Trade]) -> Decimal:
    """Sum of realized R:R, absent values counted as zero."""
    return sum((t.risk_reward_or_zero for t in trades), ZERO)


def calculate_summary(trades: Sequence[Trade]) -> TradeSummary:
    """
    Calculate all scalar statistics for a trade sequence.

    Args:
        trades: Sequence of Trade objects (any order, settled or not)

    Returns:
        TradeSummary; all zeros for an empty sequence

    Example:
        >>> summary = calculate_summary([
        ...     Trade(trade_id="1", direction="LONG", entry_date=d, pnl=10, is_winner=True),
        ...     Trade(trade_id="2", direction="LONG", entry_date=d, pnl=-4, is_winner=False),
        ... ])
        >>> summary.total_pnl, summary.profit_factor
        (Decimal('6'), Decimal('2.50'))
    """
    if not trades:
        return TradeSummary()

    return TradeSummary(
        total_trades=len(trades),
        winning_trades=len(_winners(trades)),
        losing_trades=len(_losers(trades)),
        win_rate=calculate_win_rate(trades),
        decided_win_rate=calculate_win_rate(trades, basis="decided"),
        total_pnl=calculate_total_pnl(trades),
        avg_win=calculate_average_win(trades),
        avg_loss=calculate_average_loss(trades),
        profit_factor=calculate_profit_factor(trades),
        total_risk_reward=calculate_total_risk_reward(trades),
    )


def find_outcome_mismatches(trades: Sequence[Trade]) -> list[Trade]:
    """
    Find trades whose recorded is_winner contradicts the sign of pnl.

    Zero or absent P&L is never flagged: classifying a break-even trade is a
    journaling decision, not arithmetic.

    Returns:
        Trades in input order with is_winner=True and pnl<0, or
        is_winner=False and pnl>0
    """
    mismatches: list[Trade] = []
    for t in trades:
        if t.is_winner is None or t.pnl is None or t.pnl == ZERO:
            continue
        if t.is_winner != (t.pnl > ZERO):
            mismatches.append(t)
    return mismatches


def calculate_return_pct(total_pnl: Decimal, starting_capital: Decimal) -> Decimal:
    """
    Total P&L as a percentage of starting capital.

    Example:
        >>> calculate_return_pct(Decimal("19.5"), Decimal("100"))
        Decimal('19.50')
    """
    if starting_capital == ZERO:
        return ZERO
    return quantize_ratio(total_pnl / starting_capital * HUNDRED)

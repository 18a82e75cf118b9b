"""Performance analytics library for journal trades.

This library turns a list of trade records into dashboard statistics:

1. **Models** (`models.py`): Pydantic data structures
   - Trade: Journal trade record (read-only input)
   - TradeSummary, EquityPoint, DailyPnL, GroupPerformance
   - DateRange, PerformanceReport

2. **Metrics** (`metrics.py`): Pure summary functions
   - win rate (total or decided basis), total P&L, average win/loss
   - profit factor (saturating at 0), total R:R
   - winner-flag mismatch detection

3. **Calculators** (`calculators.py`): Incremental per-trade calculators
   - EquityCurveCalculator: Running equity from starting capital
   - DailyPnLCalculator: Per-date aggregation

4. **Breakdown** (`breakdown.py`): One grouping routine for every dimension
   - STRATEGY, SESSION, DIRECTION, ACCOUNT

5. **Time ranges** (`time_range.py`): Range token -> inclusive DateRange

Design Principles:
    - Decimal precision for money
    - Every division zero-guarded; empty input gives an all-zero result
    - Pure and stateless at module level; calculators are restartable
"""

from tradelens.libraries.performance.breakdown import (
    ACCOUNT,
    DEFAULT_DIMENSIONS,
    DIRECTION,
    SESSION,
    SESSION_LABELS,
    STRATEGY,
    Dimension,
    calculate_breakdown,
    calculate_breakdowns,
    get_dimension,
)
from tradelens.libraries.performance.calculators import (
    DailyPnLCalculator,
    EquityCurveCalculator,
    aggregate_daily_pnl,
    build_equity_curve,
    calculate_max_drawdown,
)
from tradelens.libraries.performance.metrics import (
    calculate_average_loss,
    calculate_average_win,
    calculate_profit_factor,
    calculate_return_pct,
    calculate_summary,
    calculate_total_pnl,
    calculate_total_risk_reward,
    calculate_win_rate,
    find_outcome_mismatches,
)
from tradelens.libraries.performance.models import (
    DailyPnL,
    DateRange,
    EquityPoint,
    GroupPerformance,
    PerformanceReport,
    Trade,
    TradeSummary,
)
from tradelens.libraries.performance.time_range import TIME_RANGE_LABELS, list_time_ranges, resolve_time_range

__all__ = [
    # Models
    "Trade",
    "TradeSummary",
    "EquityPoint",
    "DailyPnL",
    "GroupPerformance",
    "DateRange",
    "PerformanceReport",
    # Metrics (pure functions)
    "calculate_summary",
    "calculate_win_rate",
    "calculate_total_pnl",
    "calculate_average_win",
    "calculate_average_loss",
    "calculate_profit_factor",
    "calculate_total_risk_reward",
    "calculate_return_pct",
    "find_outcome_mismatches",
    # Calculators (stateful)
    "EquityCurveCalculator",
    "DailyPnLCalculator",
    "build_equity_curve",
    "aggregate_daily_pnl",
    "calculate_max_drawdown",
    # Breakdown
    "Dimension",
    "STRATEGY",
    "SESSION",
    "DIRECTION",
    "ACCOUNT",
    "DEFAULT_DIMENSIONS",
    "SESSION_LABELS",
    "calculate_breakdown",
    "calculate_breakdowns",
    "get_dimension",
    # Time ranges
    "TIME_RANGE_LABELS",
    "resolve_time_range",
    "list_time_ranges",
]

"""Performance analytics data models.

Pydantic models for journal trades and the structured report built from them.
Trades are read-only input; every report part is frozen once built.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Direction = Literal["LONG", "SHORT"]
SessionCode = Literal["AS", "LO", "NY", "OTHER"]
TradeStatus = Literal["open", "closed", "cancelled"]


class Trade(BaseModel):
    """
    A journal trade record.

    Only entry_date and direction are required. Everything the analytics
    consume may be absent:

    - pnl is None while the trade is not settled
    - is_winner is tri-state (True / False / None = undecided)
    - prices, risk_percent, risk_amount, risk_reward_actual are optional

    is_winner is stored independently of pnl and is never recomputed from
    the sign. Use find_outcome_mismatches() to flag records where the two
    disagree.
    """

    trade_id: str
    user_id: str | None = None
    account_id: str | None = None
    strategy_id: str | None = None
    title: str | None = None
    security: str | None = None
    direction: Direction
    entry_date: datetime
    exit_date: datetime | None = None
    session: SessionCode | None = None
    timeframe: str | None = None
    status: TradeStatus = "closed"
    entry_price: Decimal | None = None
    exit_price: Decimal | None = None
    pnl: Decimal | None = None
    pnl_percent: Decimal | None = None
    risk_percent: Decimal | None = None
    risk_amount: Decimal | None = None
    risk_reward_actual: Decimal | None = None
    is_winner: bool | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("direction", mode="before")
    @classmethod
    def normalize_direction(cls, v: object) -> object:
        """Accept 'long'/'short' in any case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("risk_amount")
    @classmethod
    def validate_risk_amount(cls, v: Decimal | None) -> Decimal | None:
        """Validate capital at risk is positive when present."""
        if v is not None and v <= 0:
            raise ValueError(f"Risk amount must be positive, got {v}")
        return v

    @property
    def pnl_or_zero(self) -> Decimal:
        """P&L with absent treated as zero."""
        return self.pnl if self.pnl is not None else Decimal("0")

    @property
    def risk_reward_or_zero(self) -> Decimal:
        """Realized R:R with absent treated as zero."""
        return self.risk_reward_actual if self.risk_reward_actual is not None else Decimal("0")

    @property
    def trade_date(self) -> date:
        """Calendar date portion of entry_date (no timezone conversion)."""
        return self.entry_date.date()


class TradeSummary(BaseModel):
    """
    Scalar statistics over a set of trades.

    win_rate uses all trades as denominator (unsettled trades lower it).
    decided_win_rate uses winning + losing trades only.

    Ratios (win_rate, decided_win_rate, profit_factor) are rounded half-even
    to 0.01, so 1 win in 3 trades reads 33.33. Money figures are exact.
    """

    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    win_rate: Decimal = Decimal("0")
    decided_win_rate: Decimal = Decimal("0")
    total_pnl: Decimal = Decimal("0")
    avg_win: Decimal = Decimal("0")
    avg_loss: Decimal = Decimal("0")  # Signed, typically negative
    profit_factor: Decimal = Decimal("0")  # 0 when there is no gross loss
    total_risk_reward: Decimal = Decimal("0")

    model_config = ConfigDict(frozen=True)

    @property
    def undecided_trades(self) -> int:
        """Trades with no recorded win/loss decision."""
        return self.total_trades - self.winning_trades - self.losing_trades


class EquityPoint(BaseModel):
    """Single point on the per-trade equity curve."""

    trade_number: int  # 1-based position in input order
    trade_date: datetime
    trade_pnl: Decimal
    cumulative_pnl: Decimal
    equity: Decimal

    model_config = ConfigDict(frozen=True)


class DailyPnL(BaseModel):
    """P&L aggregate for one calendar date."""

    date: date
    total_pnl: Decimal
    trade_count: int
    winning_trades: int
    win_rate: Decimal

    model_config = ConfigDict(frozen=True)


class GroupPerformance(BaseModel):
    """
    Performance of one group within a dimensional breakdown.

    Used for strategy, session, direction and account attribution.
    """

    dimension: str
    key: str
    label: str
    total_trades: int
    winning_trades: int
    losing_trades: int
    win_rate: Decimal
    total_pnl: Decimal
    avg_pnl: Decimal
    avg_risk_reward: Decimal

    model_config = ConfigDict(frozen=True)


class DateRange(BaseModel):
    """Inclusive [start, end] interval used to pre-filter trades."""

    start: datetime
    end: datetime

    model_config = ConfigDict(frozen=True)

    def contains(self, timestamp: datetime) -> bool:
        """
        Check whether a timestamp falls inside the range (both ends inclusive).

        Naive and aware timestamps are compared on their wall-clock value;
        no timezone conversion is performed.
        """
        start, end = self.start, self.end
        if timestamp.tzinfo is None and start.tzinfo is not None:
            start, end = start.replace(tzinfo=None), end.replace(tzinfo=None)
        elif timestamp.tzinfo is not None and start.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=None)
        return start <= timestamp <= end


class PerformanceReport(BaseModel):
    """
    Complete analytics result for one trade collection.

    Built fresh per invocation by build_performance_report(); never mutated.
    """

    summary: TradeSummary
    equity_curve: list[EquityPoint] = Field(default_factory=list)
    daily_pnl: list[DailyPnL] = Field(default_factory=list)
    breakdowns: dict[str, list[GroupPerformance]] = Field(default_factory=dict)

    starting_capital: Decimal
    final_equity: Decimal
    return_pct: Decimal
    max_drawdown_pct: Decimal
    date_range: DateRange | None = None

    model_config = ConfigDict(frozen=True)

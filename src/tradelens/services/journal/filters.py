"""Trade filter used to restrict a journal fetch."""

from typing import Iterable

from pydantic import BaseModel, ConfigDict

from tradelens.libraries.performance.models import DateRange, Direction, SessionCode, Trade, TradeStatus


class TradeFilter(BaseModel):
    """
    Conjunctive restriction on journal trades.

    Every field left as None matches anything. The date range is inclusive on
    both ends and applies to entry_date.

    Example:
        >>> f = TradeFilter(user_id="u1", session="NY", status="closed")
        >>> f.matches(trade)
        True
    """

    user_id: str | None = None
    account_id: str | None = None
    strategy_id: str | None = None
    session: SessionCode | None = None
    direction: Direction | None = None
    status: TradeStatus | None = None
    date_range: DateRange | None = None

    model_config = ConfigDict(frozen=True)

    def matches(self, trade: Trade) -> bool:
        """Check whether a trade satisfies every set restriction."""
        if self.user_id is not None and trade.user_id != self.user_id:
            return False
        if self.account_id is not None and trade.account_id != self.account_id:
            return False
        if self.strategy_id is not None and trade.strategy_id != self.strategy_id:
            return False
        if self.session is not None and trade.session != self.session:
            return False
        if self.direction is not None and trade.direction != self.direction:
            return False
        if self.status is not None and trade.status != self.status:
            return False
        if self.date_range is not None and not self.date_range.contains(trade.entry_date):
            return False
        return True

    def apply(self, trades: Iterable[Trade]) -> list[Trade]:
        """Return the matching trades, preserving input order."""
        return [t for t in trades if self.matches(t)]

    def with_date_range(self, date_range: DateRange | None) -> "TradeFilter":
        """Copy of this filter with the date range replaced."""
        return self.model_copy(update={"date_range": date_range})

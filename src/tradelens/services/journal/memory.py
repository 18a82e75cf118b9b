"""In-memory trade source and name directory."""

from typing import Iterable, Mapping

from tradelens.libraries.performance.models import Trade
from tradelens.services.journal.filters import TradeFilter


class InMemoryTradeSource:
    """List-backed ITradeSource, used for tests and for pre-loaded journals."""

    def __init__(self, trades: Iterable[Trade] = ()):
        self._trades: list[Trade] = list(trades)

    def add(self, trade: Trade) -> None:
        """Append a trade to the journal."""
        self._trades.append(trade)

    def fetch_trades(self, trade_filter: TradeFilter | None = None) -> list[Trade]:
        if trade_filter is None:
            return list(self._trades)
        return trade_filter.apply(self._trades)

    def __len__(self) -> int:
        return len(self._trades)


class StaticNameDirectory:
    """Dict-backed INameDirectory."""

    def __init__(self, names: Mapping[str, str] | None = None):
        self._names: dict[str, str] = dict(names or {})

    def resolve_names(self, ids: Iterable[str]) -> dict[str, str]:
        return {i: self._names[i] for i in ids if i in self._names}

"""Journal service interfaces (Protocol).

Defines where trades and display names come from. The analytics service
depends only on these contracts, so a CSV export, an in-memory list or a
remote store can back the same report.
"""

from typing import Iterable, Protocol

from tradelens.libraries.performance.models import Trade
from tradelens.services.journal.filters import TradeFilter


class ITradeSource(Protocol):
    """
    Source of journal trades.

    The only data-fetching seam of the system. Implementations apply the
    filter (at least the date range and id restrictions) and return the
    matching trades; ordering is not guaranteed.

    Example:
        >>> source: ITradeSource = InMemoryTradeSource(trades)
        >>> trades = source.fetch_trades(TradeFilter(user_id="u1"))
    """

    def fetch_trades(self, trade_filter: TradeFilter | None = None) -> list[Trade]:
        """
        Fetch trades matching a filter.

        Args:
            trade_filter: Restriction to apply (None = every trade)

        Returns:
            Matching trades in source order
        """
        ...


class INameDirectory(Protocol):
    """
    Lookup of display names for ids (strategies, accounts).

    Example:
        >>> names: INameDirectory = StaticNameDirectory({"s1": "Breakout"})
        >>> names.resolve_names(["s1", "s9"])
        {'s1': 'Breakout'}
    """

    def resolve_names(self, ids: Iterable[str]) -> dict[str, str]:
        """
        Resolve names for the given ids.

        Args:
            ids: Ids to resolve

        Returns:
            Mapping id -> name for the ids that are known. Unknown ids are
            omitted, never mapped to a placeholder.
        """
        ...

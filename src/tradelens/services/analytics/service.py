"""Analytics service implementation.

Connects a trade source and name directories to the report engine.
"""

from datetime import datetime
from typing import Mapping

from tradelens.libraries.performance.metrics import find_outcome_mismatches
from tradelens.libraries.performance.models import PerformanceReport, Trade
from tradelens.libraries.performance.time_range import resolve_time_range
from tradelens.services.analytics.config import AnalyticsConfig
from tradelens.services.analytics.engine import build_performance_report
from tradelens.services.journal.filters import TradeFilter
from tradelens.services.journal.interface import INameDirectory, ITradeSource
from tradelens.system import LoggerFactory

logger = LoggerFactory.get_logger()


class AnalyticsService:
    """
    Generates performance reports for a journal.

    One fetch per report: the time range is resolved into the filter, the
    source returns the matching trades, and the engine builds the report.
    Strategy and account labels are resolved only for ids present in the
    fetched trades.

    Attributes:
        source: Trade source
        config: Analytics configuration

    Example:
        >>> service = AnalyticsService(InMemoryTradeSource(trades), AnalyticsConfig())
        >>> report = service.generate_report(TradeFilter(user_id="u1"), time_range="30days")
        >>> report.summary.win_rate
        Decimal('60.00')
    """

    def __init__(
        self,
        source: ITradeSource,
        config: AnalyticsConfig | None = None,
        strategy_names: INameDirectory | None = None,
        account_names: INameDirectory | None = None,
    ) -> None:
        """
        Initialize analytics service.

        Args:
            source: Where trades come from
            config: Analytics configuration (defaults if None)
            strategy_names: Lookup for strategy display names
            account_names: Lookup for account display names
        """
        self.source = source
        self.config = config or AnalyticsConfig()
        self._directories: dict[str, INameDirectory] = {}
        if strategy_names is not None:
            self._directories["strategy"] = strategy_names
        if account_names is not None:
            self._directories["account"] = account_names

    def generate_report(
        self,
        trade_filter: TradeFilter | None = None,
        time_range: str | None = None,
        now: datetime | None = None,
    ) -> PerformanceReport:
        """
        Fetch trades and build a performance report.

        Args:
            trade_filter: Restriction on user, account, strategy, etc.
            time_range: Range token; None uses config.default_time_range,
                "" or "all" means all time
            now: Anchor for the time range (default: current time)

        Returns:
            PerformanceReport for the matching trades
        """
        token = self.config.default_time_range if time_range is None else time_range
        if token.strip().lower() == "all":
            token = ""
        date_range = resolve_time_range(token, now=now)

        base_filter = trade_filter or TradeFilter()
        if date_range is not None:
            base_filter = base_filter.with_date_range(date_range)

        logger.debug(
            "analytics.fetching_trades",
            time_range=token or "all",
            start=date_range.start.isoformat() if date_range else None,
            end=date_range.end.isoformat() if date_range else None,
        )
        trades = self.source.fetch_trades(base_filter)

        for trade in find_outcome_mismatches(trades):
            logger.warning(
                "analytics.outcome_mismatch",
                trade_id=trade.trade_id,
                pnl=str(trade.pnl),
                is_winner=trade.is_winner,
            )

        report = build_performance_report(
            trades,
            starting_capital=self.config.starting_capital,
            dimensions=self.config.get_dimensions(),
            labels=self._resolve_labels(trades),
            date_range=base_filter.date_range,
        )

        logger.info(
            "analytics.report_generated",
            trades=report.summary.total_trades,
            win_rate=str(report.summary.win_rate),
            total_pnl=str(report.summary.total_pnl),
            final_equity=str(report.final_equity),
        )
        return report

    def _resolve_labels(self, trades: list[Trade]) -> Mapping[str, Mapping[str, str]]:
        """Resolve display names for the strategy/account ids in use."""
        ids_by_dimension = {
            "strategy": {t.strategy_id for t in trades if t.strategy_id},
            "account": {t.account_id for t in trades if t.account_id},
        }
        labels: dict[str, dict[str, str]] = {}
        for name, directory in self._directories.items():
            ids = ids_by_dimension[name]
            labels[name] = directory.resolve_names(sorted(ids)) if ids else {}
            logger.debug("analytics.names_resolved", dimension=name, requested=len(ids), found=len(labels[name]))
        return labels

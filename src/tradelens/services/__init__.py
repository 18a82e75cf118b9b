"""TradeLens services package.

Each service is independently testable and communicates via Protocol
interfaces using dependency injection:

- journal: trade sources and name lookups
- analytics: report generation
- reporting: console and file output
"""

from tradelens.services.analytics import AnalyticsConfig, AnalyticsService
from tradelens.services.journal import ITradeSource, TradeFilter

__all__: list[str] = [
    "AnalyticsConfig",
    "AnalyticsService",
    "ITradeSource",
    "TradeFilter",
]

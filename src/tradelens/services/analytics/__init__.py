"""Analytics service: trade source -> performance report.

Public API:
    - AnalyticsService: Fetches trades and builds reports
    - AnalyticsConfig: Starting capital, default range, dimensions
    - build_performance_report: Pure report assembly
"""

from tradelens.services.analytics.config import AnalyticsConfig
from tradelens.services.analytics.engine import build_performance_report, sort_trades
from tradelens.services.analytics.service import AnalyticsService

__all__ = [
    "AnalyticsConfig",
    "AnalyticsService",
    "build_performance_report",
    "sort_trades",
]

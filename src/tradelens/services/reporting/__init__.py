"""Reporting service for performance reports."""

from tradelens.services.reporting.formatters import create_time_ranges_table, display_performance_report
from tradelens.services.reporting.writers import write_json_report

__all__ = [
    "create_time_ranges_table",
    "display_performance_report",
    "write_json_report",
]

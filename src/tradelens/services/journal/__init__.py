"""Journal service: where trades and display names come from.

Public API:
    - ITradeSource: Protocol for trade sources (the single fetch seam)
    - INameDirectory: Protocol for id -> display name lookups
    - TradeFilter: Conjunctive restriction on a fetch
    - InMemoryTradeSource / StaticNameDirectory: In-memory implementations
    - CsvTradeSource / load_trades_csv: CSV export import
    - TradeImportError: Invalid CSV row (carries the row number)
    - session_from_time: UTC-hour session classification
"""

from tradelens.services.journal.csv_import import (
    DEFAULT_COLUMN_ALIASES,
    CsvTradeSource,
    TradeImportError,
    load_names_csv,
    load_trades_csv,
)
from tradelens.services.journal.filters import TradeFilter
from tradelens.services.journal.interface import INameDirectory, ITradeSource
from tradelens.services.journal.memory import InMemoryTradeSource, StaticNameDirectory
from tradelens.services.journal.sessions import SESSION_LABELS, parse_session, session_from_time

__all__ = [
    "CsvTradeSource",
    "DEFAULT_COLUMN_ALIASES",
    "INameDirectory",
    "ITradeSource",
    "InMemoryTradeSource",
    "SESSION_LABELS",
    "StaticNameDirectory",
    "TradeFilter",
    "TradeImportError",
    "load_names_csv",
    "load_trades_csv",
    "parse_session",
    "session_from_time",
]

"""CSV journal import.

Reads trade exports (Notion databases, spreadsheets) into Trade records.

Header mapping:
    Headers are matched case-insensitively against DEFAULT_COLUMN_ALIASES,
    which knows the canonical field names plus the Notion export headers:

        Trade Title -> title            Model    -> strategy_id
        Date        -> entry_date       PnL      -> pnl
        Direction   -> direction        PnL (%)  -> pnl_percent
        Security    -> security         Risk (%) -> risk_percent
        Session     -> session          RRx      -> risk_reward_actual
        Win         -> is_winner

    A caller-supplied column_map is merged over the defaults. Unmapped
    columns are ignored (logged once at WARNING).

Value rules:
    - Blank cells are absent values (None), never zero
    - Numbers may carry "$", "," and a trailing "%"
    - Booleans: true/false, yes/no, win/loss, 1/0
    - Sessions: codes (AS, LO, NY, OTHER) or labels (Asian, London, New York)
    - A missing session is derived from the entry time when the date cell
      carries a time of day

Strategy and account columns hold whatever the export holds, usually names.
CsvTradeSource therefore also acts as the name directory for them.

Example:
    >>> trades = load_trades_csv("exports/journal.csv")
    >>> source = CsvTradeSource("exports/journal.csv")
    >>> source.fetch_trades(TradeFilter(session="NY"))
"""

import csv
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from tradelens.libraries.performance.models import Trade
from tradelens.services.journal.filters import TradeFilter
from tradelens.services.journal.sessions import parse_session, session_from_time
from tradelens.system import LoggerFactory

logger = LoggerFactory.get_logger()

TRADE_FIELDS: tuple[str, ...] = (
    "trade_id",
    "user_id",
    "account_id",
    "strategy_id",
    "title",
    "security",
    "direction",
    "entry_date",
    "exit_date",
    "session",
    "timeframe",
    "status",
    "entry_price",
    "exit_price",
    "pnl",
    "pnl_percent",
    "risk_percent",
    "risk_amount",
    "risk_reward_actual",
    "is_winner",
)

DEFAULT_COLUMN_ALIASES: dict[str, str] = {
    **{name: name for name in TRADE_FIELDS},
    # Notion export headers
    "trade title": "title",
    "date": "entry_date",
    "model": "strategy_id",
    "pnl (%)": "pnl_percent",
    "risk (%)": "risk_percent",
    "rrx": "risk_reward_actual",
    "win": "is_winner",
    # Import form labels
    "id": "trade_id",
    "symbol": "security",
    "security/symbol": "security",
    "entry date": "entry_date",
    "exit date": "exit_date",
    "entry price": "entry_price",
    "exit price": "exit_price",
    "p&l": "pnl",
    "p&l %": "pnl_percent",
    "risk %": "risk_percent",
    "risk amount": "risk_amount",
    "r:r": "risk_reward_actual",
    "win/loss": "is_winner",
    "strategy": "strategy_id",
    "account": "account_id",
}

DECIMAL_FIELDS = frozenset(
    {"entry_price", "exit_price", "pnl", "pnl_percent", "risk_percent", "risk_amount", "risk_reward_actual"}
)
DATETIME_FIELDS = frozenset({"entry_date", "exit_date"})

_TRUE_VALUES = frozenset({"true", "yes", "y", "win", "won", "1"})
_FALSE_VALUES = frozenset({"false", "no", "n", "loss", "lost", "0"})

_DIRECTION_ALIASES = {"buy": "LONG", "sell": "SHORT"}

# (format, carries time of day), tried in order after ISO-8601
_FALLBACK_DATE_FORMATS: tuple[tuple[str, bool], ...] = (
    ("%B %d, %Y %I:%M %p", True),  # Notion: March 10, 2025 2:30 PM
    ("%B %d, %Y %H:%M", True),
    ("%B %d, %Y", False),
    ("%b %d, %Y", False),
    ("%m/%d/%Y %H:%M", True),
    ("%m/%d/%Y %I:%M %p", True),
    ("%m/%d/%Y", False),
)


class TradeImportError(ValueError):
    """A CSV row could not be converted into a Trade."""

    def __init__(self, row: int, message: str):
        self.row = row
        self.message = message
        super().__init__(f"Row {row}: {message}")


def normalize_header(header: str) -> str:
    """Lowercase and collapse whitespace in a header."""
    return " ".join(header.strip().lower().split())


def build_column_map(headers: Iterable[str], column_map: Mapping[str, str] | None = None) -> dict[str, str]:
    """
    Map actual CSV headers to Trade field names.

    Args:
        headers: Headers as they appear in the file
        column_map: Extra header -> field mappings (override defaults)

    Returns:
        Mapping original header -> field for the headers that are recognized

    Raises:
        ValueError: If column_map targets an unknown field
    """
    aliases = dict(DEFAULT_COLUMN_ALIASES)
    for header, field_name in (column_map or {}).items():
        if field_name not in TRADE_FIELDS:
            raise ValueError(f"Column '{header}' maps to unknown field '{field_name}'")
        aliases[normalize_header(header)] = field_name

    mapping: dict[str, str] = {}
    for header in headers:
        field_name = aliases.get(normalize_header(header))
        if field_name is not None and field_name not in mapping.values():
            mapping[header] = field_name
    return mapping


def parse_decimal(text: str) -> Decimal:
    """Parse a number that may carry currency, grouping or percent marks."""
    cleaned = text.strip().replace("$", "").replace(",", "").rstrip("%").strip()
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"'{text}' is not a number") from None


def parse_bool(text: str) -> bool:
    """Parse a win/loss style boolean."""
    value = text.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"'{text}' is not a boolean (expected true/false, yes/no, win/loss, 1/0)")


def parse_timestamp(text: str, date_format: str | None = None) -> tuple[datetime, bool]:
    """
    Parse a date or datetime cell.

    Args:
        text: Cell value
        date_format: Explicit strptime format (skips detection)

    Returns:
        (timestamp, whether the cell carried a time of day)
    """
    value = text.strip()
    if date_format:
        has_time = any(d in date_format for d in ("%H", "%I", "%M"))
        return datetime.strptime(value, date_format), has_time

    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        return parsed, "T" in value or " " in value
    except ValueError:
        pass

    for fmt, has_time in _FALLBACK_DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt), has_time
        except ValueError:
            continue

    raise ValueError(f"'{text}' is not a recognized date")


def _format_validation_error(error: ValidationError) -> str:
    return "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in error.errors())


def parse_row(
    row: Mapping[str, str | None],
    columns: Mapping[str, str],
    row_number: int,
    date_format: str | None = None,
) -> Trade:
    """
    Convert one CSV row into a Trade.

    Args:
        row: Raw row as read by csv.DictReader
        columns: Header -> field mapping from build_column_map()
        row_number: 1-based file line number, used in errors and as fallback id
        date_format: Optional explicit date format

    Raises:
        TradeImportError: If a value cannot be parsed or the trade is invalid
    """
    values: dict[str, Any] = {}
    entry_has_time = False

    for header, field_name in columns.items():
        raw = row.get(header)
        if raw is None or not raw.strip():
            continue
        text = raw.strip()

        try:
            if field_name in DECIMAL_FIELDS:
                values[field_name] = parse_decimal(text)
            elif field_name in DATETIME_FIELDS:
                values[field_name], has_time = parse_timestamp(text, date_format)
                if field_name == "entry_date":
                    entry_has_time = has_time
            elif field_name == "is_winner":
                values[field_name] = parse_bool(text)
            elif field_name == "session":
                values[field_name] = parse_session(text)
            elif field_name == "direction":
                values[field_name] = _DIRECTION_ALIASES.get(text.lower(), text)
            elif field_name == "status":
                values[field_name] = text.lower()
            else:
                values[field_name] = text
        except ValueError as e:
            raise TradeImportError(row_number, f"{header}: {e}") from e

    values.setdefault("trade_id", f"row-{row_number}")
    if values.get("session") is None and entry_has_time:
        values["session"] = session_from_time(values["entry_date"])

    try:
        return Trade(**values)
    except ValidationError as e:
        raise TradeImportError(row_number, _format_validation_error(e)) from e


def load_trades_csv(
    path: Path | str,
    column_map: Mapping[str, str] | None = None,
    delimiter: str = ",",
    encoding: str = "utf-8-sig",
    date_format: str | None = None,
) -> list[Trade]:
    """
    Load every trade from a CSV file.

    Args:
        path: CSV file path
        column_map: Extra header -> field mappings
        delimiter: Field delimiter
        encoding: File encoding (utf-8-sig strips a spreadsheet BOM)
        date_format: Optional explicit date format

    Returns:
        Trades in file order

    Raises:
        FileNotFoundError: If the file does not exist
        TradeImportError: On the first invalid row
    """
    csv_path = Path(path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Trade CSV not found: {csv_path}")

    trades: list[Trade] = []
    with csv_path.open("r", newline="", encoding=encoding) as f:
        reader = csv.DictReader(f, delimiter=delimiter)
        headers = reader.fieldnames or []
        columns = build_column_map(headers, column_map)

        unmapped = [h for h in headers if h not in columns]
        if unmapped:
            logger.warning("csv_import.unmapped_columns", path=str(csv_path), columns=unmapped)

        for row_number, row in enumerate(reader, start=2):
            if not any(v and v.strip() for v in row.values() if isinstance(v, str)):
                continue
            trades.append(parse_row(row, columns, row_number, date_format))

    logger.info("csv_import.trades_loaded", path=str(csv_path), trades=len(trades))
    return trades


class CsvTradeSource:
    """
    ITradeSource backed by a CSV export.

    The file is read on first fetch and cached. Strategy and account columns
    carry display names, so resolve_names() maps each id found in the file to
    itself.
    """

    def __init__(
        self,
        path: Path | str,
        column_map: Mapping[str, str] | None = None,
        delimiter: str = ",",
        encoding: str = "utf-8-sig",
        date_format: str | None = None,
    ):
        self.path = Path(path)
        self._column_map = dict(column_map or {})
        self._delimiter = delimiter
        self._encoding = encoding
        self._date_format = date_format
        self._trades: list[Trade] | None = None

    def _load(self) -> list[Trade]:
        if self._trades is None:
            self._trades = load_trades_csv(
                self.path,
                column_map=self._column_map,
                delimiter=self._delimiter,
                encoding=self._encoding,
                date_format=self._date_format,
            )
        return self._trades

    def fetch_trades(self, trade_filter: TradeFilter | None = None) -> list[Trade]:
        trades = self._load()
        if trade_filter is None:
            return list(trades)
        return trade_filter.apply(trades)

    def resolve_names(self, ids: Iterable[str]) -> dict[str, str]:
        known = {t.strategy_id for t in self._load()} | {t.account_id for t in self._load()}
        return {i: i for i in ids if i in known}


def load_names_csv(path: Path | str, encoding: str = "utf-8-sig") -> dict[str, str]:
    """
    Load an id -> name lookup from a two-column CSV with "id" and "name" headers.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the id or name column is missing
    """
    csv_path = Path(path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Names CSV not found: {csv_path}")

    with csv_path.open("r", newline="", encoding=encoding) as f:
        reader = csv.DictReader(f)
        headers = {normalize_header(h): h for h in reader.fieldnames or []}
        if "id" not in headers or "name" not in headers:
            raise ValueError(f"Names CSV {csv_path} must have 'id' and 'name' columns")
        id_col, name_col = headers["id"], headers["name"]
        return {
            row[id_col].strip(): row[name_col].strip()
            for row in reader
            if row.get(id_col) and row[id_col].strip() and row.get(name_col)
        }

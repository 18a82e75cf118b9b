"""Time-range resolver.

Translates the dashboard's symbolic range tokens into an inclusive DateRange
anchored on "now". The resolver has no dependency on trade data; its result
is only used to build the trade filter.

Tokens:
    today      start of today .. end of today
    yesterday  start of yesterday .. end of yesterday
    3days      start of today - 3 days .. end of today (also 7days, 30days, 60days)
    ""/other   None (all time)

End of day is the next midnight minus one microsecond, so both ends can be
compared inclusively.
"""

from datetime import datetime, timedelta

from tradelens.libraries.performance.models import DateRange

ONE_DAY = timedelta(days=1)
END_OF_DAY_OFFSET = ONE_DAY - timedelta(microseconds=1)

LOOKBACK_DAYS: dict[str, int] = {
    "3days": 3,
    "7days": 7,
    "30days": 30,
    "60days": 60,
}

TIME_RANGE_LABELS: dict[str, str] = {
    "": "All Time",
    "today": "Today",
    "yesterday": "Yesterday",
    "3days": "Last 3 Days",
    "7days": "Last 7 Days",
    "30days": "Last 30 Days",
    "60days": "Last 60 Days",
}


def start_of_day(moment: datetime) -> datetime:
    """Midnight of the moment's calendar day (tzinfo preserved)."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def resolve_time_range(token: str | None, now: datetime | None = None) -> DateRange | None:
    """
    Resolve a range token to an inclusive [start, end] interval.

    Args:
        token: Range token (case-insensitive, surrounding whitespace ignored)
        now: Anchor time (default: current local time)

    Returns:
        DateRange, or None for empty/unrecognized tokens (no date filter)

    Example:
        >>> r = resolve_time_range("yesterday", now=datetime(2025, 3, 10, 15, 30))
        >>> r.start, r.end
        (datetime(2025, 3, 9, 0, 0), datetime(2025, 3, 9, 23, 59, 59, 999999))
    """
    if not token:
        return None

    key = token.strip().lower()
    if now is None:
        now = datetime.now()
    today = start_of_day(now)

    if key == "today":
        return DateRange(start=today, end=today + END_OF_DAY_OFFSET)
    if key == "yesterday":
        yesterday = today - ONE_DAY
        return DateRange(start=yesterday, end=yesterday + END_OF_DAY_OFFSET)
    if key in LOOKBACK_DAYS:
        return DateRange(start=today - timedelta(days=LOOKBACK_DAYS[key]), end=today + END_OF_DAY_OFFSET)

    return None


def list_time_ranges() -> list[tuple[str, str]]:
    """Supported (token, label) pairs in selector order; "" means all time."""
    return list(TIME_RANGE_LABELS.items())

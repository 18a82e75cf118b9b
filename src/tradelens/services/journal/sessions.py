"""Trading session helpers.

Sessions are fixed UTC hour windows:

    AS     00:00 - 08:00
    LO     08:00 - 13:00
    NY     13:00 - 22:00
    OTHER  22:00 - 24:00
"""

from datetime import datetime, timezone

from tradelens.libraries.performance.breakdown import SESSION_LABELS
from tradelens.libraries.performance.models import SessionCode

_LABEL_TO_CODE: dict[str, SessionCode] = {
    "asian": "AS",
    "asia": "AS",
    "london": "LO",
    "new york": "NY",
    "newyork": "NY",
    "ny": "NY",
    "other": "OTHER",
}


def session_from_time(timestamp: datetime) -> SessionCode:
    """
    Classify a timestamp into a trading session by its UTC hour.

    Naive timestamps are taken to be UTC already.

    Example:
        >>> session_from_time(datetime(2025, 3, 10, 14, 30, tzinfo=timezone.utc))
        'NY'
    """
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc)
    hour = timestamp.hour

    if hour < 8:
        return "AS"
    if hour < 13:
        return "LO"
    if hour < 22:
        return "NY"
    return "OTHER"


def parse_session(value: str | None) -> SessionCode | None:
    """
    Parse a session code or display label.

    Accepts "AS"/"LO"/"NY"/"OTHER" and labels such as "London" or "New York"
    in any case.

    Returns:
        Session code, or None for blank input

    Raises:
        ValueError: If the value is not a known session
    """
    if value is None or not value.strip():
        return None

    text = value.strip()
    if text.upper() in SESSION_LABELS:
        return text.upper()  # type: ignore[return-value]

    code = _LABEL_TO_CODE.get(text.lower())
    if code is None:
        raise ValueError(f"Unknown session '{value}'. Expected one of {sorted(SESSION_LABELS)} or their labels")
    return code


__all__ = ["SESSION_LABELS", "parse_session", "session_from_time"]

"""Unit tests for trading session helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from tradelens.services.journal.sessions import parse_session, session_from_time


class TestSessionFromTime:
    """Test UTC hour classification."""

    @pytest.mark.parametrize(
        "hour,expected",
        [(0, "AS"), (7, "AS"), (8, "LO"), (12, "LO"), (13, "NY"), (21, "NY"), (22, "OTHER"), (23, "OTHER")],
    )
    def test_hour_boundaries(self, hour, expected):
        """Window starts are inclusive, ends exclusive."""
        assert session_from_time(datetime(2025, 3, 10, hour, 30, tzinfo=timezone.utc)) == expected

    def test_converts_aware_to_utc(self):
        """09:30 at UTC-5 is 14:30 UTC, New York session."""
        eastern = timezone(timedelta(hours=-5))

        assert session_from_time(datetime(2025, 3, 10, 9, 30, tzinfo=eastern)) == "NY"

    def test_naive_taken_as_utc(self):
        """Naive timestamps are not shifted."""
        assert session_from_time(datetime(2025, 3, 10, 9, 30)) == "LO"


class TestParseSession:
    """Test session code/label parsing."""

    @pytest.mark.parametrize(
        "text,expected",
        [("NY", "NY"), ("lo", "LO"), ("Asian", "AS"), ("New York", "NY"), ("london", "LO"), ("Other", "OTHER")],
    )
    def test_codes_and_labels(self, text, expected):
        """Codes and display labels both parse."""
        assert parse_session(text) == expected

    def test_blank(self):
        """Blank means absent."""
        assert parse_session("  ") is None
        assert parse_session(None) is None

    def test_unknown(self):
        """Unknown sessions raise ValueError."""
        with pytest.raises(ValueError, match="Unknown session"):
            parse_session("Sydney")

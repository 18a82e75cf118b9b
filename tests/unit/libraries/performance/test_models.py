"""Tests for performance data models."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from tradelens.libraries.performance.models import DateRange, Trade, TradeSummary


class TestTrade:
    """Test Trade model validation."""

    def test_minimal_trade(self):
        """Only id, direction and entry date are required."""
        trade = Trade(trade_id="1", direction="LONG", entry_date=datetime(2025, 3, 10))

        assert trade.pnl is None
        assert trade.is_winner is None
        assert trade.pnl_or_zero == Decimal("0")
        assert trade.risk_reward_or_zero == Decimal("0")
        assert trade.status == "closed"

    def test_direction_normalized(self):
        """Lowercase directions are accepted."""
        trade = Trade(trade_id="1", direction=" short ", entry_date=datetime(2025, 3, 10))

        assert trade.direction == "SHORT"

    def test_invalid_direction(self):
        """Unknown directions are rejected."""
        with pytest.raises(ValidationError):
            Trade(trade_id="1", direction="FLAT", entry_date=datetime(2025, 3, 10))

    def test_entry_date_required(self):
        """A trade without an entry date cannot be built."""
        with pytest.raises(ValidationError):
            Trade(trade_id="1", direction="LONG")  # type: ignore[call-arg]

    def test_risk_amount_positive(self):
        """Risk amount must be positive when present."""
        with pytest.raises(ValidationError, match="Risk amount"):
            Trade(trade_id="1", direction="LONG", entry_date=datetime(2025, 3, 10), risk_amount=Decimal("0"))

    def test_trade_is_frozen(self):
        """Trades are read-only."""
        trade = Trade(trade_id="1", direction="LONG", entry_date=datetime(2025, 3, 10))

        with pytest.raises(ValidationError):
            trade.pnl = Decimal("5")  # type: ignore[misc]

    def test_trade_date_has_no_timezone_conversion(self):
        """Calendar date is taken as stored."""
        trade = Trade(
            trade_id="1",
            direction="LONG",
            entry_date=datetime(2025, 3, 10, 23, 30, tzinfo=timezone.utc),
        )

        assert trade.trade_date == date(2025, 3, 10)


class TestTradeSummary:
    """Test TradeSummary defaults."""

    def test_defaults_are_zero(self):
        """Empty summary has zero counts and no undecided trades."""
        summary = TradeSummary()

        assert summary.total_trades == 0
        assert summary.undecided_trades == 0
        assert summary.profit_factor == Decimal("0")


class TestDateRange:
    """Test DateRange containment."""

    def test_contains_inclusive(self):
        """Both ends are included."""
        r = DateRange(start=datetime(2025, 3, 1), end=datetime(2025, 3, 2))

        assert r.contains(datetime(2025, 3, 1))
        assert r.contains(datetime(2025, 3, 2))
        assert not r.contains(datetime(2025, 3, 2, 0, 0, 1))

    def test_naive_timestamp_against_aware_range(self):
        """Mixed awareness compares wall-clock values."""
        r = DateRange(
            start=datetime(2025, 3, 1, tzinfo=timezone.utc),
            end=datetime(2025, 3, 1, 23, 59, tzinfo=timezone.utc),
        )

        assert r.contains(datetime(2025, 3, 1, 12, 0))

    def test_aware_timestamp_against_naive_range(self):
        """Aware timestamps are stripped of tzinfo against a naive range."""
        r = DateRange(start=datetime(2025, 3, 1), end=datetime(2025, 3, 1, 23, 59))

        assert r.contains(datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc))
        assert not r.contains(datetime(2025, 3, 2, 0, 30, tzinfo=timezone.utc))

"""Unit tests for trade filters and in-memory sources."""

from datetime import datetime, timezone

import pytest

from tradelens.libraries.performance.models import DateRange
from tradelens.services.journal.filters import TradeFilter
from tradelens.services.journal.memory import InMemoryTradeSource, StaticNameDirectory


@pytest.fixture
def journal(make_trade):
    """Fixture providing trades across users, accounts and sessions."""
    return [
        make_trade("1", user_id="u1", account_id="a1", strategy_id="s1", session="NY",
                   entry_date=datetime(2025, 3, 1, 14, 0)),
        make_trade("2", user_id="u1", account_id="a2", strategy_id="s2", session="LO", direction="SHORT",
                   entry_date=datetime(2025, 3, 5, 9, 0)),
        make_trade("3", user_id="u2", account_id="a3", strategy_id="s1", session=None, status="open",
                   entry_date=datetime(2025, 3, 9, 23, 59, 59)),
    ]


class TestTradeFilter:
    """Test TradeFilter matching."""

    def test_empty_filter_matches_all(self, journal):
        """Unset fields match anything."""
        assert TradeFilter().apply(journal) == journal

    @pytest.mark.parametrize(
        "kwargs,expected",
        [
            ({"user_id": "u1"}, ["1", "2"]),
            ({"account_id": "a3"}, ["3"]),
            ({"strategy_id": "s1"}, ["1", "3"]),
            ({"session": "LO"}, ["2"]),
            ({"direction": "SHORT"}, ["2"]),
            ({"status": "closed"}, ["1", "2"]),
            ({"status": "open"}, ["3"]),
            ({"user_id": "u1", "strategy_id": "s1"}, ["1"]),
        ],
    )
    def test_field_restrictions(self, journal, kwargs, expected):
        """Each set field restricts; fields combine with AND."""
        result = TradeFilter(**kwargs).apply(journal)

        assert [t.trade_id for t in result] == expected

    def test_unknown_status_rejected(self):
        """Status must be one of the journal states."""
        with pytest.raises(ValueError):
            TradeFilter(status="pending")

    def test_date_range_inclusive(self, journal):
        """Trades exactly on the bounds are kept."""
        date_range = DateRange(start=datetime(2025, 3, 1, 14, 0), end=datetime(2025, 3, 9, 23, 59, 59))

        result = TradeFilter(date_range=date_range).apply(journal)

        assert [t.trade_id for t in result] == ["1", "2", "3"]

    def test_date_range_excludes_outside(self, journal):
        """Trades outside the range are dropped."""
        date_range = DateRange(start=datetime(2025, 3, 2), end=datetime(2025, 3, 6))

        result = TradeFilter(date_range=date_range).apply(journal)

        assert [t.trade_id for t in result] == ["2"]

    def test_aware_range_against_naive_trades(self, journal):
        """Wall-clock comparison when awareness differs."""
        date_range = DateRange(
            start=datetime(2025, 3, 5, tzinfo=timezone.utc),
            end=datetime(2025, 3, 5, 23, 59, tzinfo=timezone.utc),
        )

        result = TradeFilter(date_range=date_range).apply(journal)

        assert [t.trade_id for t in result] == ["2"]

    def test_with_date_range_copies(self):
        """Replacing the range leaves the original untouched."""
        original = TradeFilter(user_id="u1")
        date_range = DateRange(start=datetime(2025, 3, 1), end=datetime(2025, 3, 2))

        updated = original.with_date_range(date_range)

        assert updated.user_id == "u1"
        assert updated.date_range == date_range
        assert original.date_range is None


class TestInMemoryTradeSource:
    """Test list-backed trade source."""

    def test_fetch_all_and_filtered(self, journal):
        """Fetch returns copies filtered by the given filter."""
        source = InMemoryTradeSource(journal)

        assert len(source.fetch_trades()) == 3
        assert [t.trade_id for t in source.fetch_trades(TradeFilter(user_id="u2"))] == ["3"]

    def test_add(self, make_trade):
        """Trades can be appended."""
        source = InMemoryTradeSource()
        source.add(make_trade("x"))

        assert len(source) == 1


class TestStaticNameDirectory:
    """Test dict-backed name lookup."""

    def test_resolves_known_only(self):
        """Unknown ids are omitted."""
        names = StaticNameDirectory({"s1": "Breakout", "s2": "Fade"})

        assert names.resolve_names(["s1", "s9"]) == {"s1": "Breakout"}

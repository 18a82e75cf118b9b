"""Root conftest for all tests - shared trade factory and logging setup."""

from datetime import datetime
from decimal import Decimal
from typing import Any

import pytest

from tradelens.libraries.performance.models import Trade
from tradelens.system import LoggerFactory


@pytest.fixture(autouse=True)
def configured_logging():
    """Make sure module loggers are bound to the stdlib pipeline (so caplog sees them)."""
    if not LoggerFactory.is_configured():
        LoggerFactory.configure()
    yield


def build_trade(
    trade_id: str = "t1",
    pnl: str | int | None = None,
    is_winner: bool | None = None,
    entry_date: datetime = datetime(2025, 3, 10, 14, 30),
    direction: str = "LONG",
    **kwargs: Any,
) -> Trade:
    """Create a Trade with sensible defaults; pnl accepts str/int for brevity."""
    return Trade(
        trade_id=trade_id,
        pnl=Decimal(str(pnl)) if pnl is not None else None,
        is_winner=is_winner,
        entry_date=entry_date,
        direction=direction,
        **kwargs,
    )


@pytest.fixture
def make_trade():
    """Fixture providing the trade factory."""
    return build_trade


@pytest.fixture
def scenario_trades():
    """A winner of +10 followed by a loser of -4 on consecutive days."""
    return [
        build_trade("t1", pnl=10, is_winner=True, entry_date=datetime(2025, 3, 10, 9, 0)),
        build_trade("t2", pnl=-4, is_winner=False, entry_date=datetime(2025, 3, 11, 15, 0)),
    ]

"""Dimensional performance breakdown.

Groups trades by one categorical dimension (strategy, session, direction,
account) and summarizes each group. A single parameterized routine handles
every dimension; a Dimension only describes:

- key: how to read the grouping key from a trade
- label: how to turn a key into a display label
- absent: what to do with trades that have no key
    "exclude" - leave them out of the breakdown
    "bucket"  - group them under a sentinel key
    "require" - the key must always be present (ValueError otherwise)

Usage:
    >>> from tradelens.libraries.performance.breakdown import SESSION, calculate_breakdown
    >>> groups = calculate_breakdown(trades, SESSION)
    >>> [(g.label, g.total_trades) for g in groups]
    [('New York', 3), ('Other', 1)]

Labels that come from an external lookup (strategy and account names) are
passed in as a mapping: calculate_breakdown(trades, STRATEGY, labels={"s1": "Breakout"}).
"""

from dataclasses import dataclass
from typing import Callable, Literal, Mapping, Sequence

from tradelens.libraries.performance.metrics import ZERO, percentage, quantize_ratio, safe_divide
from tradelens.libraries.performance.models import GroupPerformance, Trade

AbsentKeyPolicy = Literal["exclude", "bucket", "require"]

UNKNOWN_LABEL = "Unknown"

SESSION_LABELS: dict[str, str] = {
    "AS": "Asian",
    "LO": "London",
    "NY": "New York",
    "OTHER": "Other",
}


@dataclass(frozen=True)
class Dimension:
    """Description of one grouping dimension."""

    name: str
    key: Callable[[Trade], str | None]
    label: Callable[[str, Mapping[str, str]], str]
    absent: AbsentKeyPolicy = "exclude"
    sentinel: str | None = None

    def __post_init__(self) -> None:
        if self.absent == "bucket" and self.sentinel is None:
            raise ValueError(f"Dimension '{self.name}' buckets absent keys but has no sentinel")

    def key_for(self, trade: Trade) -> str | None:
        """
        Resolve the grouping key for a trade under this dimension's policy.

        Returns:
            The key, the sentinel for bucketed absent keys, or None when the
            trade is excluded

        Raises:
            ValueError: If the key is absent and the policy is "require"
        """
        value = self.key(trade)
        if value is not None and value != "":
            return value
        if self.absent == "bucket":
            return self.sentinel
        if self.absent == "require":
            raise ValueError(f"Trade {trade.trade_id} has no value for required dimension '{self.name}'")
        return None


def _lookup_label(key: str, labels: Mapping[str, str]) -> str:
    return labels.get(key, UNKNOWN_LABEL)


def _session_label(key: str, labels: Mapping[str, str]) -> str:
    return SESSION_LABELS.get(key, key)


def _raw_label(key: str, labels: Mapping[str, str]) -> str:
    return key


STRATEGY = Dimension(
    name="strategy",
    key=lambda t: t.strategy_id,
    label=_lookup_label,
    absent="exclude",
)

SESSION = Dimension(
    name="session",
    key=lambda t: t.session,
    label=_session_label,
    absent="bucket",
    sentinel="OTHER",
)

DIRECTION = Dimension(
    name="direction",
    key=lambda t: t.direction,
    label=_raw_label,
    absent="require",
)

ACCOUNT = Dimension(
    name="account",
    key=lambda t: t.account_id,
    label=_lookup_label,
    absent="exclude",
)

BUILTIN_DIMENSIONS: dict[str, Dimension] = {d.name: d for d in (STRATEGY, SESSION, DIRECTION, ACCOUNT)}

DEFAULT_DIMENSIONS: tuple[Dimension, ...] = (STRATEGY, SESSION, DIRECTION)


def get_dimension(name: str) -> Dimension:
    """
    Look up a built-in dimension by name.

    Raises:
        ValueError: If the name is not a built-in dimension
    """
    try:
        return BUILTIN_DIMENSIONS[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown dimension '{name}'. Available: {sorted(BUILTIN_DIMENSIONS)}"
        ) from None


def summarize_group(dimension: str, key: str, label: str, trades: Sequence[Trade]) -> GroupPerformance:
    """
    Summarize one group of trades.

    win_rate uses the group's trade count as denominator; avg_risk_reward
    counts absent R:R as zero over the same denominator.
    """
    total = len(trades)
    winning = sum(1 for t in trades if t.is_winner is True)
    losing = sum(1 for t in trades if t.is_winner is False)
    total_pnl = sum((t.pnl_or_zero for t in trades), ZERO)
    total_rr = sum((t.risk_reward_or_zero for t in trades), ZERO)

    return GroupPerformance(
        dimension=dimension,
        key=key,
        label=label,
        total_trades=total,
        winning_trades=winning,
        losing_trades=losing,
        win_rate=percentage(winning, total),
        total_pnl=total_pnl,
        avg_pnl=safe_divide(total_pnl, total),
        avg_risk_reward=quantize_ratio(safe_divide(total_rr, total)),
    )


def group_trades(trades: Sequence[Trade], dimension: Dimension) -> dict[str, list[Trade]]:
    """
    Partition trades by dimension key.

    Returns:
        Mapping key -> trades, in order of first appearance. Excluded trades
        are dropped.
    """
    groups: dict[str, list[Trade]] = {}
    for trade in trades:
        key = dimension.key_for(trade)
        if key is None:
            continue
        groups.setdefault(key, []).append(trade)
    return groups


def calculate_breakdown(
    trades: Sequence[Trade],
    dimension: Dimension,
    labels: Mapping[str, str] | None = None,
) -> list[GroupPerformance]:
    """
    Calculate per-group performance for one dimension.

    Args:
        trades: Trades to group
        dimension: Dimension describing key, label and absent-key policy
        labels: Optional external key -> display name lookup

    Returns:
        GroupPerformance per group, ordered by first appearance
    """
    lookup: Mapping[str, str] = labels or {}
    return [
        summarize_group(dimension.name, key, dimension.label(key, lookup), group)
        for key, group in group_trades(trades, dimension).items()
    ]


def calculate_breakdowns(
    trades: Sequence[Trade],
    dimensions: Sequence[Dimension] = DEFAULT_DIMENSIONS,
    labels: Mapping[str, Mapping[str, str]] | None = None,
) -> dict[str, list[GroupPerformance]]:
    """
    Calculate breakdowns for several dimensions over the same trades.

    Args:
        trades: Trades to group
        dimensions: Dimensions to apply
        labels: Optional per-dimension label lookups, keyed by dimension name

    Returns:
        Mapping dimension name -> groups
    """
    labels = labels or {}
    return {d.name: calculate_breakdown(trades, d, labels.get(d.name)) for d in dimensions}

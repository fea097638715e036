"""Nearest-rank percentile aggregation.

Every per-machine statistic in the strategy views comes from here. A
percentile is the element at 1-indexed rank ``floor(P * (n + 1) / 100)`` of
the ascending scores, clamped to ``[1, n]``. No interpolation: the result is
always a score that was actually posted.

With few games the P90 ceiling is usually just the best game on record.
There is not enough data to tell a ceiling from a one-off, so that is
accepted.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import pandas as pd

from src.strategy.config import CEILING_PERCENTILE, MEDIAN_PERCENTILE

logger = logging.getLogger(__name__)

# Columns produced by aggregate_scores() in addition to the group keys
STAT_COLUMNS = ["games", "p50", "p90"]


def percentile_rank(n: int, p: float) -> int:
    """1-indexed rank selected for percentile *p* of *n* sorted scores."""
    if not 0 <= p <= 100:
        raise ValueError(f"Percentile must be in [0, 100], got {p!r}")
    rank = int(p * (n + 1) // 100)
    return min(max(rank, 1), n)


def _select(ordered: Sequence[float], p: float) -> Optional[float]:
    # Validates p even when there is nothing to select from
    rank = percentile_rank(len(ordered), p)
    if not ordered:
        return None
    return float(ordered[rank - 1])


def percentile(scores: Iterable[float], p: float) -> Optional[float]:
    """Return the nearest-rank percentile *p* of *scores*.

    Returns ``None`` when *scores* is empty.

    Raises:
        ValueError: if *p* is outside ``[0, 100]``.
    """
    return _select(sorted(scores), p)


def percentile_pair(
    scores: Iterable[float],
    ceiling: float = CEILING_PERCENTILE,
) -> Tuple[Optional[float], Optional[float]]:
    """Return ``(p50, ceiling)`` selected from a single sorted copy of *scores*.

    Both values come from the same ordering, so ``p50 <= ceiling`` holds for
    any nonempty input.
    """
    ordered: List[float] = sorted(scores)
    return _select(ordered, MEDIAN_PERCENTILE), _select(ordered, ceiling)


def aggregate_scores(
    facts: pd.DataFrame,
    by: Union[str, List[str]],
) -> pd.DataFrame:
    """Aggregate a facts frame into games/P50/P90 per group.

    Args:
        facts: DataFrame with a numeric ``score`` column and the *by* columns.
        by: Column (or columns) to group on, e.g. ``"machine"`` or
            ``["machine", "player"]``.

    Returns:
        New DataFrame with the group columns plus ``games``, ``p50`` and
        ``p90``, one row per group, sorted by the group columns.
    """
    keys = [by] if isinstance(by, str) else list(by)
    if facts.empty:
        return pd.DataFrame(columns=keys + STAT_COLUMNS)

    rows = []
    for group, scores in facts.groupby(keys, sort=True)["score"]:
        group = group if isinstance(group, tuple) else (group,)
        p50, p90 = percentile_pair(scores.tolist())
        rows.append((*group, len(scores), p50, p90))

    out = pd.DataFrame(rows, columns=keys + STAT_COLUMNS)
    logger.debug("Aggregated %d facts into %d %s groups", len(facts), len(out), keys)
    return out

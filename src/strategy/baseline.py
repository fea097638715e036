"""League baselines and relative strength.

Machines score on wildly different scales (low thousands to billions), so
raw P50s are only comparable after normalizing against the league P50 for
the same machine.
"""

import logging
import math
from typing import Dict, Optional

import pandas as pd

from src.strategy.config import MEDIAN_PERCENTILE
from src.strategy.percentile import percentile

logger = logging.getLogger(__name__)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def has_baseline(baseline: Optional[float]) -> bool:
    """Whether *baseline* can be compared against (present, nonzero, not NaN)."""
    if baseline is None:
        return False
    if isinstance(baseline, float) and math.isnan(baseline):
        return False
    return baseline != 0


def relative_strength(value: float, baseline: Optional[float]) -> int:
    """Percent by which *value* exceeds *baseline*, rounded to a whole number.

    Returns 0 when there is no baseline to compare against.
    """
    if not has_baseline(baseline):
        return 0
    return round_half_away((value - baseline) / baseline * 100)


def league_baseline(
    facts: pd.DataFrame,
    p: float = MEDIAN_PERCENTILE,
) -> Dict[str, float]:
    """Per-machine percentile *p* over every score in *facts*.

    Args:
        facts: DataFrame with ``machine`` and ``score`` columns, already
            limited to the league population being measured.
        p: Percentile to compute.

    Returns:
        Dict mapping machine key to the percentile value.
    """
    if facts.empty:
        return {}

    baseline = {
        machine: percentile(scores.tolist(), p)
        for machine, scores in facts.groupby("machine", sort=True)["score"]
    }
    logger.debug("League P%s computed for %d machines", p, len(baseline))
    return baseline

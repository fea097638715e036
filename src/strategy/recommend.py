"""Player recommendations for a single machine.

Ranks a team's players on one machine by P50 and, when an opponent is
given, compares the best player on each side.

The verdict threshold is an absolute score difference
(``VERDICT_THRESHOLD``), not a percentage, so it means much more on a
low-scoring machine than on one that routinely scores in the billions.
This is known behavior and is kept as-is until product decides otherwise.
"""

import logging
from dataclasses import replace
from typing import Any, Optional, Sequence, Tuple

import pandas as pd

from src.strategy.config import MEDIAN_PERCENTILE, VERDICT_THRESHOLD
from src.strategy.models import Assessment, ContenderStats, RecommendResult, Verdict
from src.strategy.percentile import aggregate_scores
from src.strategy.query import FactStore, check_cancelled, fetch, machine_name
from src.strategy.ranking import rank_by_p50

logger = logging.getLogger(__name__)


def contender_stats(facts: pd.DataFrame, league_p50: float) -> Tuple[ContenderStats, ...]:
    """Per-player stats on one machine, best P50 first.

    Args:
        facts: ``player, score`` rows for a single machine.
        league_p50: League P50 for that machine.
    """
    contenders = [
        ContenderStats(
            name=row.player,
            games=int(row.games),
            p50=float(row.p50),
            p90=float(row.p90),
            league_p50=league_p50,
        )
        for row in aggregate_scores(facts, "player").itertuples(index=False)
    ]
    return rank_by_p50(contenders)


def verdict(diff: float) -> Verdict:
    """Classify the P50 gap between our best and their best."""
    if diff > VERDICT_THRESHOLD:
        return Verdict.FAVORABLE
    if diff < -VERDICT_THRESHOLD:
        return Verdict.UNFAVORABLE
    return Verdict.CONTESTED


def assess(
    ours: Sequence[ContenderStats],
    theirs: Sequence[ContenderStats],
) -> Optional[Assessment]:
    """Compare the top-ranked contender on each side.

    Returns ``None`` when either side has nobody to put up.
    """
    if not ours or not theirs:
        return None
    diff = ours[0].p50 - theirs[0].p50
    return Assessment(
        our_best=ours[0].name,
        their_best=theirs[0].name,
        diff=diff,
        verdict=verdict(diff),
    )


def recommend(
    store: FactStore,
    team: str,
    machine: str,
    venue: Optional[str] = None,
    opponent: Optional[str] = None,
    cancel: Optional[Any] = None,
) -> RecommendResult:
    """Recommend who a team should put up on *machine*.

    Args:
        store: Fact store answering the league queries.
        team: Team key.
        machine: Machine key.
        venue: Optional venue key. Adds an in-venue ranking and flags global
            rows for players with no games on the machine at the venue.
        opponent: Optional opposing team key. Adds the opponent's ranking
            (venue-filtered when *venue* is given) and a best-vs-best
            assessment.
        cancel: Optional token with ``is_set()``; checked after fetching.

    Raises:
        StrategyQueryError: if any fact-store query fails.
        QueryCancelled: if *cancel* was set before aggregation.
    """
    check_cancelled(cancel, "Recommend")

    baselines = fetch("load league baseline", store.league_baseline, MEDIAN_PERCENTILE)
    names = fetch("load machine names", store.machine_names)
    global_facts = fetch(
        f"load {machine} stats for {team}",
        store.player_machine_facts, team, machine,
    )

    venue_facts = None
    if venue is not None:
        venue_facts = fetch(
            f"load {machine} stats for {team} at {venue}",
            store.player_machine_facts, team, machine, venue,
        )

    opponent_facts = None
    if opponent is not None:
        opponent_facts = fetch(
            f"load {machine} stats for {opponent}",
            store.player_machine_facts, opponent, machine, venue,
        )

    check_cancelled(cancel, "Recommend")

    league_p50 = baselines.get(machine, 0.0)
    global_stats = contender_stats(global_facts, league_p50)

    venue_stats: Tuple[ContenderStats, ...] = ()
    if venue_facts is not None:
        venue_stats = contender_stats(venue_facts, league_p50)
        played_here = {c.name for c in venue_stats}
        global_stats = tuple(
            c if c.name in played_here else replace(c, no_venue_data=True)
            for c in global_stats
        )

    opponent_stats: Tuple[ContenderStats, ...] = ()
    assessment = None
    if opponent_facts is not None:
        opponent_stats = contender_stats(opponent_facts, league_p50)
        ours = venue_stats if venue is not None else global_stats
        assessment = assess(ours, opponent_stats)

    logger.info(
        "Recommend %s on %s: %d players%s",
        team, machine, len(global_stats),
        f", verdict vs {opponent}: {assessment.verdict.value}" if assessment else "",
    )
    return RecommendResult(
        team=team,
        machine=machine,
        machine_name=machine_name(names, machine),
        venue=venue,
        opponent=opponent,
        venue_stats=venue_stats,
        global_stats=global_stats,
        opponent_stats=opponent_stats,
        assessment=assessment,
    )

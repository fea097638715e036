"""Head-to-head team comparison at a venue.

For each machine at the venue, compares the two teams' likely players and
reports an edge (percent by which team 1's likely score beats team 2's)
together with how much data backs it.
"""

import logging
import math
import sys
from typing import Any, Dict, Iterable, List, Optional

from src.strategy.config import (
    HIGH_CONFIDENCE_GAMES,
    MEDIAN_PERCENTILE,
    MEDIUM_CONFIDENCE_GAMES,
)
from src.strategy.models import (
    Confidence,
    LikelyPlayer,
    MachineMatchup,
    MachineStats,
    MatchupResult,
    MatchupSummary,
)
from src.strategy.profile import team_machine_stats
from src.strategy.query import FactStore, check_cancelled, fetch, machine_name

logger = logging.getLogger(__name__)

# Edge reported when one side has no likely score at all. Signed toward the
# side that does.
EDGE_SENTINEL = sys.float_info.max


def likely_score(players: Iterable[LikelyPlayer]) -> float:
    """Mean P50 of a team's likely players, 0 when there are none."""
    players = list(players)
    if not players:
        return 0.0
    return sum(p.p50 for p in players) / len(players)


def edge(l1: float, l2: float) -> float:
    """Percent by which *l1* exceeds *l2*, relative to the smaller of the two.

    Positive favors team 1. ``edge(0, 0)`` is 0. If only one side is zero the
    result is ``±EDGE_SENTINEL``, signed toward the nonzero side.
    """
    lo = min(l1, l2)
    if lo == 0:
        if l1 == l2:
            return 0.0
        return math.copysign(EDGE_SENTINEL, l1 - l2)
    return (l1 - l2) / lo * 100


def is_one_sided(value: float) -> bool:
    """Whether *value* is a sentinel edge rather than a real percentage."""
    return abs(value) == EDGE_SENTINEL


def average_games(players: Iterable[LikelyPlayer]) -> float:
    """Mean games played across *players*, 0 when there are none."""
    players = list(players)
    if not players:
        return 0.0
    return sum(p.games for p in players) / len(players)


def confidence(
    players1: Iterable[LikelyPlayer],
    players2: Iterable[LikelyPlayer],
) -> Confidence:
    """Classify an edge by the thinner side's average games per likely player."""
    least = min(average_games(players1), average_games(players2))
    if least >= HIGH_CONFIDENCE_GAMES:
        return Confidence.HIGH
    if least >= MEDIUM_CONFIDENCE_GAMES:
        return Confidence.MEDIUM
    return Confidence.LOW


def _compare(
    key: str,
    names: Dict[str, str],
    stats1: Optional[MachineStats],
    stats2: Optional[MachineStats],
) -> MachineMatchup:
    players1 = stats1.likely_players if stats1 else ()
    players2 = stats2.likely_players if stats2 else ()
    l1 = likely_score(players1)
    l2 = likely_score(players2)
    return MachineMatchup(
        machine_key=key,
        machine_name=machine_name(names, key),
        team1_p50=stats1.p50 if stats1 else 0.0,
        team1_likely=l1,
        team2_p50=stats2.p50 if stats2 else 0.0,
        team2_likely=l2,
        edge=edge(l1, l2),
        confidence=confidence(players1, players2),
        team1_players=players1,
        team2_players=players2,
    )


def summarize(machines: Iterable[MachineMatchup]) -> MatchupSummary:
    """Group machine names by the sign of their edge, keeping row order."""
    team1: List[str] = []
    team2: List[str] = []
    contested: List[str] = []
    for m in machines:
        if m.edge > 0:
            team1.append(m.machine_name)
        elif m.edge < 0:
            team2.append(m.machine_name)
        else:
            contested.append(m.machine_name)
    return MatchupSummary(
        team1_advantages=tuple(team1),
        team2_advantages=tuple(team2),
        contested=tuple(contested),
    )


def matchup(
    store: FactStore,
    venue: str,
    team1: str,
    team2: str,
    cancel: Optional[Any] = None,
) -> MatchupResult:
    """Compare two teams on every machine at *venue*.

    Uses each team's global stats (all venues) so likely players reflect
    their full history. A machine appears when at least one team has played
    it; the other side's fields are then zero.

    Raises:
        StrategyQueryError: if any fact-store query fails.
        QueryCancelled: if *cancel* was set before aggregation.
    """
    check_cancelled(cancel, "Matchup")

    venue_machines = fetch(f"load machines at {venue}", store.venue_machines, venue)
    names = fetch("load machine names", store.machine_names)
    baselines = fetch("load league baseline", store.league_baseline, MEDIAN_PERCENTILE)
    facts1 = fetch(f"load team stats for {team1}", store.roster_scoped_facts, team1)
    facts2 = fetch(f"load team stats for {team2}", store.roster_scoped_facts, team2)

    check_cancelled(cancel, "Matchup")

    by_machine1 = {s.machine_key: s for s in team_machine_stats(facts1, baselines, names)}
    by_machine2 = {s.machine_key: s for s in team_machine_stats(facts2, baselines, names)}

    keys = (set(by_machine1) | set(by_machine2)) & set(venue_machines)
    machines = sorted(
        (_compare(k, names, by_machine1.get(k), by_machine2.get(k)) for k in keys),
        key=lambda m: (-m.edge, m.machine_name),
    )

    summary = summarize(machines)
    logger.info(
        "Matchup %s vs %s at %s: %d machines (%d/%d/%d)",
        team1, team2, venue, len(machines),
        len(summary.team1_advantages), len(summary.team2_advantages),
        len(summary.contested),
    )
    return MatchupResult(
        venue=venue,
        team1=team1,
        team2=team2,
        machines=tuple(machines),
        summary=summary,
    )

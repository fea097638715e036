"""Per-machine statistics shared by the Scout and Player views.

Turns a frame of raw game facts into :class:`MachineStats` rows: P50/P90
per machine, league-relative strength, and (for teams) the two players
most likely to be put up on each machine.
"""

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Set, Tuple

import pandas as pd

from src.strategy.baseline import relative_strength
from src.strategy.models import LikelyPlayer, MachineStats
from src.strategy.percentile import aggregate_scores
from src.strategy.query import machine_name
from src.strategy.ranking import rank_likely_players

logger = logging.getLogger(__name__)


def _sort_rows(rows: List[MachineStats]) -> List[MachineStats]:
    return sorted(rows, key=lambda s: (-s.games, -s.p50, s.machine_key))


def likely_players_by_machine(facts: pd.DataFrame) -> Dict[str, Tuple[LikelyPlayer, ...]]:
    """Top likely players per machine from a ``player, machine, score`` frame."""
    per_player = aggregate_scores(facts, ["machine", "player"])

    candidates: Dict[str, List[LikelyPlayer]] = {}
    for row in per_player.itertuples(index=False):
        candidates.setdefault(row.machine, []).append(
            LikelyPlayer(name=row.player, games=int(row.games), p50=float(row.p50))
        )
    return {machine: rank_likely_players(players) for machine, players in candidates.items()}


def team_machine_stats(
    facts: pd.DataFrame,
    baselines: Dict[str, float],
    names: Dict[str, str],
) -> List[MachineStats]:
    """Per-machine stats for a team's roster.

    Args:
        facts: ``player, machine, score`` rows for the team's current roster.
        baselines: League P50 per machine.
        names: Machine display names.

    Returns:
        One :class:`MachineStats` per machine played, most-played first.
    """
    likely = likely_players_by_machine(facts)
    rows = [
        MachineStats(
            machine_key=row.machine,
            machine_name=machine_name(names, row.machine),
            games=int(row.games),
            p50=float(row.p50),
            p90=float(row.p90),
            league_p50=baselines.get(row.machine, 0.0),
            relative_strength=relative_strength(row.p50, baselines.get(row.machine)),
            likely_players=likely.get(row.machine, ()),
        )
        for row in aggregate_scores(facts, "machine").itertuples(index=False)
    ]
    return _sort_rows(rows)


def player_machine_stats(
    facts: pd.DataFrame,
    baselines: Dict[str, float],
    names: Dict[str, str],
) -> List[MachineStats]:
    """Per-machine stats for a single player from ``machine, score`` rows."""
    rows = [
        MachineStats(
            machine_key=row.machine,
            machine_name=machine_name(names, row.machine),
            games=int(row.games),
            p50=float(row.p50),
            p90=float(row.p90),
            league_p50=baselines.get(row.machine, 0.0),
            relative_strength=relative_strength(row.p50, baselines.get(row.machine)),
        )
        for row in aggregate_scores(facts, "machine").itertuples(index=False)
    ]
    return _sort_rows(rows)


def at_venue(stats: Iterable[MachineStats], venue_machines: Set[str]) -> List[MachineStats]:
    """Keep only rows for machines currently at the venue."""
    return [s for s in stats if s.machine_key in venue_machines]


def venue_views(
    global_stats: List[MachineStats],
    venue_stats: List[MachineStats],
    venue_machines: Optional[Set[str]],
) -> Tuple[Tuple[MachineStats, ...], Tuple[MachineStats, ...]]:
    """Split stats into the in-venue view and the global fallback view.

    Without a venue, the global view is returned as-is and the venue view is
    empty. With one, both views are restricted to the venue's machines and
    global rows with nothing recorded at the venue are flagged
    ``no_venue_data`` rather than dropped.
    """
    if venue_machines is None:
        return (), tuple(global_stats)

    local = at_venue(venue_stats, venue_machines)
    played_here = {s.machine_key for s in local}
    fallback = tuple(
        s if s.machine_key in played_here else replace(s, no_venue_data=True)
        for s in at_venue(global_stats, venue_machines)
    )
    logger.debug(
        "Venue view: %d machines with venue data, %d global fallback rows",
        len(local), len(fallback),
    )
    return tuple(local), fallback


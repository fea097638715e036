"""Orderings used to pick likely players and summarize machines.

Each ordering is a named key function so its tie-break rules can be read
and tested on their own.
"""

from typing import Iterable, List, Tuple

from src.strategy.config import (
    LIKELY_PLAYER_COUNT,
    MIN_GAMES_FOR_ANALYSIS,
    SUMMARY_SIZE,
)
from src.strategy.models import ContenderStats, LikelyPlayer, MachineStats, Summary


def likely_player_key(player: LikelyPlayer) -> Tuple[int, float, str]:
    """Games played descending, then P50 descending, then name."""
    return (-player.games, -player.p50, player.name)


def rank_likely_players(
    players: Iterable[LikelyPlayer],
    count: int = LIKELY_PLAYER_COUNT,
) -> Tuple[LikelyPlayer, ...]:
    """Top *count* players most likely to play a machine.

    No minimum-games floor: a single game is enough to be listed.
    """
    return tuple(sorted(players, key=likely_player_key)[:count])


def p50_key(contender: ContenderStats) -> float:
    """P50 descending. Ties keep their incoming order."""
    return -contender.p50


def rank_by_p50(contenders: Iterable[ContenderStats]) -> Tuple[ContenderStats, ...]:
    """Contenders for a machine, best P50 first."""
    return tuple(sorted(contenders, key=p50_key))


def relative_strength_key(stats: MachineStats) -> int:
    """Relative strength descending."""
    return -stats.relative_strength


def strongest_weakest(stats: Iterable[MachineStats]) -> Summary:
    """Summarize the strongest and weakest machines.

    Only machines with at least ``MIN_GAMES_FOR_ANALYSIS`` games count.
    Strongest are the first ``SUMMARY_SIZE`` by relative strength. Weakest
    are the last ``SUMMARY_SIZE``, weakest first, and are only listed when
    more than ``SUMMARY_SIZE`` machines qualify. With four or five qualifying
    machines the middle ones appear in both lists.
    """
    qualified: List[MachineStats] = sorted(
        (s for s in stats if s.games >= MIN_GAMES_FOR_ANALYSIS),
        key=relative_strength_key,
    )

    strongest = tuple(s.machine_name for s in qualified[:SUMMARY_SIZE])
    weakest: Tuple[str, ...] = ()
    if len(qualified) > SUMMARY_SIZE:
        weakest = tuple(s.machine_name for s in reversed(qualified[-SUMMARY_SIZE:]))
    return Summary(strongest=strongest, weakest=weakest)

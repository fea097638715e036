"""Team scouting: a team's strengths and weaknesses across machines.

Stats cover every game ever played by the team's current roster, whichever
team those players were on at the time.
"""

import logging
from typing import Any, Optional

from src.strategy.config import MEDIAN_PERCENTILE
from src.strategy.models import ScoutResult
from src.strategy.profile import at_venue, team_machine_stats, venue_views
from src.strategy.query import FactStore, check_cancelled, fetch
from src.strategy.ranking import strongest_weakest

logger = logging.getLogger(__name__)


def scout(
    store: FactStore,
    team: str,
    venue: Optional[str] = None,
    cancel: Optional[Any] = None,
) -> ScoutResult:
    """Profile a team's current roster machine by machine.

    Args:
        store: Fact store answering the league queries.
        team: Team key, e.g. ``"CRA"``.
        venue: Optional venue key. When given, the result carries an
            in-venue view plus the global view limited to the venue's
            machines.
        cancel: Optional token with ``is_set()``; checked after fetching.

    Returns:
        :class:`ScoutResult`. A team with no games yields empty stats.

    Raises:
        StrategyQueryError: if any fact-store query fails.
        QueryCancelled: if *cancel* was set before aggregation.
    """
    check_cancelled(cancel, "Scout")

    baselines = fetch("load league baseline", store.league_baseline, MEDIAN_PERCENTILE)
    names = fetch("load machine names", store.machine_names)
    global_facts = fetch(f"load team stats for {team}", store.roster_scoped_facts, team)

    venue_machines = None
    venue_facts = None
    if venue is not None:
        venue_machines = fetch(f"load machines at {venue}", store.venue_machines, venue)
        venue_facts = fetch(
            f"load team stats for {team} at {venue}",
            store.roster_scoped_facts, team, venue,
        )

    check_cancelled(cancel, "Scout")

    global_stats = team_machine_stats(global_facts, baselines, names)
    venue_stats = []
    if venue_facts is not None:
        venue_stats = team_machine_stats(venue_facts, baselines, names)
        summary = strongest_weakest(at_venue(global_stats, venue_machines))
    else:
        summary = strongest_weakest(global_stats)

    local, fallback = venue_views(global_stats, venue_stats, venue_machines)

    logger.info(
        "Scouted %s%s: %d machines, strongest=%s",
        team, f" at {venue}" if venue else "", len(fallback), list(summary.strongest),
    )
    return ScoutResult(
        team=team,
        venue=venue,
        venue_stats=local,
        global_stats=fallback,
        summary=summary,
    )

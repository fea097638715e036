"""Individual player analysis across machines."""

import logging
from typing import Any, Optional

from src.strategy.config import MEDIAN_PERCENTILE
from src.strategy.models import PlayerResult, TeamRef
from src.strategy.profile import at_venue, player_machine_stats, venue_views
from src.strategy.query import FactStore, QueryCancelled, check_cancelled, fetch
from src.strategy.ranking import strongest_weakest

logger = logging.getLogger(__name__)


def _current_team(store: FactStore, name: str) -> Optional[TeamRef]:
    """The player's current team, or ``None`` if the lookup fails.

    The team is display-only, so a failed lookup does not sink the profile.
    """
    try:
        return store.current_team_of(name)
    except QueryCancelled:
        raise
    except Exception as e:
        logger.warning("Could not load team for %s: %s", name, e)
        return None


def player_profile(
    store: FactStore,
    name: str,
    venue: Optional[str] = None,
    cancel: Optional[Any] = None,
) -> PlayerResult:
    """Profile one player's games across every machine they have played.

    Works like :func:`src.strategy.scout.scout` for a single player, without
    likely players, and also reports the player's current team when known.

    Raises:
        StrategyQueryError: if any fact-store query fails.
        QueryCancelled: if *cancel* was set before aggregation.
    """
    check_cancelled(cancel, "Player")

    baselines = fetch("load league baseline", store.league_baseline, MEDIAN_PERCENTILE)
    names = fetch("load machine names", store.machine_names)
    global_facts = fetch(f"load player stats for {name}", store.single_player_facts, name)

    venue_machines = None
    venue_facts = None
    if venue is not None:
        venue_machines = fetch(f"load machines at {venue}", store.venue_machines, venue)
        venue_facts = fetch(
            f"load player stats for {name} at {venue}",
            store.single_player_facts, name, venue,
        )

    team = _current_team(store, name)

    check_cancelled(cancel, "Player")

    global_stats = player_machine_stats(global_facts, baselines, names)
    venue_stats = []
    if venue_facts is not None:
        venue_stats = player_machine_stats(venue_facts, baselines, names)
        summary = strongest_weakest(at_venue(global_stats, venue_machines))
    else:
        summary = strongest_weakest(global_stats)

    local, fallback = venue_views(global_stats, venue_stats, venue_machines)

    if team is None:
        logger.debug("No current team found for %s", name)
    logger.info("Profiled %s: %d machines", name, len(fallback))
    return PlayerResult(
        name=name,
        venue=venue,
        team=team,
        venue_stats=local,
        global_stats=fallback,
        summary=summary,
    )

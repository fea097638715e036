"""In-memory cache of slow-changing league reference data.

League baselines, machine names and the team/venue/machine lists only change
when new results are loaded. A long-running process wraps its fact store in
:class:`CachedFactStore` and calls :meth:`CachedFactStore.refresh` after each
load.

The cached data lives in one immutable :class:`ReferenceSnapshot`. A refresh
builds a complete new snapshot and swaps it in under the lock, so a query
sees either the old snapshot or the new one, never a mix.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from src.league_data.fact_store import Machine, TeamSummary, Venue, matches_search
from src.strategy.config import MEDIAN_PERCENTILE
from src.strategy.query import FactStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReferenceSnapshot:
    """Reference data as of one refresh."""

    league_p50: Mapping[str, float]
    machine_names: Mapping[str, str]
    teams: Tuple[TeamSummary, ...]
    venues: Tuple[Venue, ...]
    machines: Tuple[Machine, ...]
    refreshed_at: str


class CachedFactStore:
    """Fact store wrapper serving reference data from memory.

    Cached: ``league_baseline`` (at P50), ``machine_names``, ``list_teams``,
    ``list_venues``, ``list_machines``. Everything else passes through to
    the wrapped store.

    A plain lock is enough here; a reader/writer lock would add nothing. The
    lock guards only the snapshot reference: readers copy the reference and
    then use the immutable snapshot with the lock released, and a refresh
    holds the lock only for the swap.
    """

    def __init__(self, wrapped: FactStore):
        self.wrapped = wrapped
        self._lock = threading.Lock()
        self._snapshot: Optional[ReferenceSnapshot] = None

    def refresh(self) -> ReferenceSnapshot:
        """Rebuild the snapshot from the wrapped store and swap it in.

        The previous snapshot stays in place if any query fails.
        """
        snapshot = ReferenceSnapshot(
            league_p50=MappingProxyType(dict(self.wrapped.league_baseline(MEDIAN_PERCENTILE))),
            machine_names=MappingProxyType(dict(self.wrapped.machine_names())),
            teams=tuple(self.wrapped.list_teams("")),
            venues=tuple(self.wrapped.list_venues("")),
            machines=tuple(self.wrapped.list_machines("")),
            refreshed_at=datetime.now(timezone.utc).isoformat(),
        )

        with self._lock:
            self._snapshot = snapshot

        logger.info(
            "Reference cache refreshed: %d teams, %d venues, %d machines",
            len(snapshot.teams), len(snapshot.venues), len(snapshot.machines),
        )
        return snapshot

    @property
    def snapshot(self) -> ReferenceSnapshot:
        """The current snapshot.

        Raises:
            RuntimeError: if :meth:`refresh` has never succeeded.
        """
        with self._lock:
            snapshot = self._snapshot
        if snapshot is None:
            raise RuntimeError("Reference cache has not been refreshed")
        return snapshot

    # ------------------------------------------------------------------
    # Cached queries
    # ------------------------------------------------------------------
    def league_baseline(self, percentile: float = MEDIAN_PERCENTILE) -> Mapping[str, float]:
        if percentile != MEDIAN_PERCENTILE:
            return self.wrapped.league_baseline(percentile)
        return self.snapshot.league_p50

    def machine_names(self) -> Mapping[str, str]:
        return self.snapshot.machine_names

    def list_teams(self, search: str = "") -> List[TeamSummary]:
        return [t for t in self.snapshot.teams if not search or matches_search(search, t.key, t.name)]

    def list_venues(self, search: str = "") -> List[Venue]:
        return [v for v in self.snapshot.venues if not search or matches_search(search, v.key, v.name)]

    def list_machines(self, search: str = "") -> List[Machine]:
        return [m for m in self.snapshot.machines if not search or matches_search(search, m.key, m.name)]

    # ------------------------------------------------------------------
    # Passthrough queries
    # ------------------------------------------------------------------
    def roster_scoped_facts(self, team, venue=None):
        return self.wrapped.roster_scoped_facts(team, venue)

    def player_machine_facts(self, team, machine, venue=None):
        return self.wrapped.player_machine_facts(team, machine, venue)

    def single_player_facts(self, name, venue=None):
        return self.wrapped.single_player_facts(name, venue)

    def venue_machines(self, venue):
        return self.wrapped.venue_machines(venue)

    def current_team_of(self, name):
        return self.wrapped.current_team_of(name)

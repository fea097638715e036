"""Read-only league fact store over the export DataFrames.

Answers the queries the strategy views need: roster-scoped game facts,
single-player facts, league baselines, venue machine lists, names, and the
list/search queries used to populate pickers.

A team's *current roster* is its roster in the most recent season in which
the team key appears. Team facts cover every game those players have ever
played, whichever team they were on at the time.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Set

import pandas as pd

from src.league_data.config import FILE_NAMES
from src.league_data.ingestion import LeagueDataIngester
from src.strategy.baseline import league_baseline
from src.strategy.config import MEDIAN_PERCENTILE
from src.strategy.models import TeamRef

logger = logging.getLogger(__name__)

_REQUIRED_TABLES = set(FILE_NAMES)


@dataclass(frozen=True)
class TeamSummary:
    """A team in the latest season, with its home venue for display."""

    key: str
    name: str
    venue: str  # "Venue Name (KEY)", or "" without a home venue


@dataclass(frozen=True)
class Venue:
    key: str
    name: str


@dataclass(frozen=True)
class Machine:
    key: str
    name: str


def matches_search(search: str, *fields: str) -> bool:
    """Case-insensitive substring match against any of *fields*."""
    needle = search.lower()
    return any(needle in str(f).lower() for f in fields)


class LeagueFactStore:
    """Fact store backed by in-memory export tables.

    Args:
        tables: dict of DataFrames keyed like ``FILE_NAMES`` (as returned by
            :meth:`LeagueDataIngester.read_all`).

    Raises:
        ValueError: if any table is missing.
    """

    def __init__(self, tables: Dict[str, pd.DataFrame]):
        missing = _REQUIRED_TABLES - tables.keys()
        if missing:
            raise ValueError(f"Missing required tables: {sorted(missing)}")

        self.games = tables["games"]
        self.rosters = tables["rosters"]
        self.teams = tables["teams"]
        self.venues = tables["venues"]
        self.machines = tables["machines"]
        self.venue_machine_table = tables["venue_machines"]

        self.current_rosters = self._build_current_rosters()
        logger.info(
            "Fact store ready: %d games, %d teams, %d current roster spots",
            len(self.games), self.teams["team"].nunique(), len(self.current_rosters),
        )

    @classmethod
    def from_directory(cls, data_dir: Path) -> "LeagueFactStore":
        """Load every export table from *data_dir*.

        Raises:
            IngestionError: if any file cannot be read.
        """
        return cls(LeagueDataIngester(data_dir).read_all())

    # ------------------------------------------------------------------
    # Roster scope
    # ------------------------------------------------------------------
    def _build_current_rosters(self) -> pd.DataFrame:
        """Roster rows from each team's most recent season."""
        if self.teams.empty or self.rosters.empty:
            return pd.DataFrame(columns=["season", "team", "player"])

        latest = self.teams.groupby("team", as_index=False)["season"].max()
        current = self.rosters.merge(latest, on=["team", "season"], how="inner")
        return current[["season", "team", "player"]].drop_duplicates().reset_index(drop=True)

    def roster_players(self, team: str) -> Set[str]:
        """Players on *team*'s current roster."""
        rows = self.current_rosters[self.current_rosters["team"] == team]
        return set(rows["player"])

    def _games_for(self, players: Set[str], venue: Optional[str]) -> pd.DataFrame:
        mask = self.games["player"].isin(players)
        if venue is not None:
            mask &= self.games["venue"] == venue
        return self.games.loc[mask]

    # ------------------------------------------------------------------
    # Fact queries
    # ------------------------------------------------------------------
    def roster_scoped_facts(self, team: str, venue: Optional[str] = None) -> pd.DataFrame:
        """``player, machine, score`` rows for *team*'s current roster.

        Args:
            team: Team key.
            venue: If given, only games played at this venue.
        """
        facts = self._games_for(self.roster_players(team), venue)
        logger.debug("Team %s%s: %d facts", team, f" at {venue}" if venue else "", len(facts))
        return facts[["player", "machine", "score"]].reset_index(drop=True)

    def player_machine_facts(
        self,
        team: str,
        machine: str,
        venue: Optional[str] = None,
    ) -> pd.DataFrame:
        """``player, machine, score`` rows for *team*'s current roster on one machine."""
        facts = self.roster_scoped_facts(team, venue)
        return facts[facts["machine"] == machine].reset_index(drop=True)

    def single_player_facts(self, name: str, venue: Optional[str] = None) -> pd.DataFrame:
        """``machine, score`` rows for one player across every team they played for."""
        facts = self._games_for({name}, venue)
        return facts[["machine", "score"]].reset_index(drop=True)

    def league_baseline(self, percentile: float = MEDIAN_PERCENTILE) -> Dict[str, float]:
        """Per-machine percentile over every player on any current roster."""
        players = set(self.current_rosters["player"])
        facts = self._games_for(players, None)
        return league_baseline(facts[["machine", "score"]], percentile)

    def venue_machines(self, venue: str) -> Set[str]:
        """Machine keys currently at *venue*."""
        rows = self.venue_machine_table[self.venue_machine_table["venue"] == venue]
        return set(rows["machine"])

    def machine_names(self) -> Dict[str, str]:
        """Machine key to display name."""
        return dict(zip(self.machines["machine"], self.machines["name"]))

    def current_team_of(self, name: str) -> Optional[TeamRef]:
        """The team whose current roster includes *name*, if any.

        When a player is on more than one current roster (a team that
        folded keeps its last roster), the most recent season wins.
        """
        rows = self.current_rosters[self.current_rosters["player"] == name]
        if rows.empty:
            return None

        row = rows.sort_values(["season", "team"], ascending=[False, True]).iloc[0]
        team_rows = self.teams[
            (self.teams["team"] == row["team"]) & (self.teams["season"] == row["season"])
        ]
        team_name = team_rows["name"].iloc[0] if not team_rows.empty else row["team"]
        return TeamRef(key=row["team"], name=team_name)

    # ------------------------------------------------------------------
    # List queries
    # ------------------------------------------------------------------
    def list_teams(self, search: str = "") -> List[TeamSummary]:
        """Teams in the latest season, optionally filtered by key or name."""
        if self.teams.empty:
            return []

        latest = self.teams[self.teams["season"] == self.teams["season"].max()]
        venue_names = dict(zip(self.venues["venue"], self.venues["name"]))

        result = []
        for row in latest.sort_values("team").itertuples(index=False):
            if search and not matches_search(search, row.team, row.name):
                continue
            home = row.home_venue if isinstance(row.home_venue, str) else ""
            venue = f"{venue_names[home]} ({home})" if home in venue_names else ""
            result.append(TeamSummary(key=row.team, name=row.name, venue=venue))
        return result

    def list_venues(self, search: str = "") -> List[Venue]:
        """All venues, optionally filtered by key or name."""
        return [
            Venue(key=row.venue, name=row.name)
            for row in self.venues.sort_values("venue").itertuples(index=False)
            if not search or matches_search(search, row.venue, row.name)
        ]

    def list_machines(self, search: str = "") -> List[Machine]:
        """Machines that have been played, optionally filtered by key or name."""
        played = set(self.games["machine"])
        return [
            Machine(key=row.machine, name=row.name)
            for row in self.machines.sort_values("machine").itertuples(index=False)
            if row.machine in played and (not search or matches_search(search, row.machine, row.name))
        ]

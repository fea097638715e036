"""Result models for the strategy views.

Every result is a frozen dataclass holding tuples. Views rebuild them from
the current facts on each query; nothing here is updated in place.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class TeamRef:
    """A team identified by its league key."""

    key: str
    name: str


@dataclass(frozen=True)
class LikelyPlayer:
    """A player likely to be put up on a machine."""

    name: str
    games: int
    p50: float


@dataclass(frozen=True)
class MachineStats:
    """A team's or player's performance on a single machine."""

    machine_key: str
    machine_name: str
    games: int
    p50: float
    p90: float
    league_p50: float
    relative_strength: int  # P50 vs league P50, in whole percent
    likely_players: Tuple[LikelyPlayer, ...] = ()
    no_venue_data: bool = False  # Global row with nothing recorded at the venue


@dataclass(frozen=True)
class Summary:
    """Strongest and weakest machines, by relative strength."""

    strongest: Tuple[str, ...] = ()
    weakest: Tuple[str, ...] = ()  # Weakest first


@dataclass(frozen=True)
class ScoutResult:
    """Output of a Scout query."""

    team: str
    venue: Optional[str]  # None for global-only queries
    venue_stats: Tuple[MachineStats, ...]  # Empty without a venue
    global_stats: Tuple[MachineStats, ...]  # Restricted to venue machines when a venue is set
    summary: Summary


@dataclass(frozen=True)
class PlayerResult:
    """Output of a Player query."""

    name: str
    venue: Optional[str]
    team: Optional[TeamRef]  # None when the player's team is unknown
    venue_stats: Tuple[MachineStats, ...]
    global_stats: Tuple[MachineStats, ...]
    summary: Summary


class Confidence(Enum):
    """How much data backs a matchup edge."""

    LOW = "low"        # Either side's likely players average < 3 games
    MEDIUM = "medium"  # Both sides average 3-9 games
    HIGH = "high"      # Both sides average 10+ games


@dataclass(frozen=True)
class MachineMatchup:
    """Head-to-head comparison on one machine. Positive edge favors team 1."""

    machine_key: str
    machine_name: str
    team1_p50: float
    team1_likely: float  # Mean P50 of team 1's likely players
    team2_p50: float
    team2_likely: float
    edge: float
    confidence: Confidence
    team1_players: Tuple[LikelyPlayer, ...] = ()
    team2_players: Tuple[LikelyPlayer, ...] = ()


@dataclass(frozen=True)
class MatchupSummary:
    """Machine names grouped by which team holds the edge."""

    team1_advantages: Tuple[str, ...] = ()
    team2_advantages: Tuple[str, ...] = ()
    contested: Tuple[str, ...] = ()


@dataclass(frozen=True)
class MatchupResult:
    """Output of a Matchup query."""

    venue: str
    team1: str
    team2: str
    machines: Tuple[MachineMatchup, ...]  # Edge descending, team 1's best first
    summary: MatchupSummary


@dataclass(frozen=True)
class ContenderStats:
    """A player's performance on the machine being recommended for."""

    name: str
    games: int
    p50: float
    p90: float
    league_p50: float
    no_venue_data: bool = False


class Verdict(Enum):
    """Best-vs-best classification on a single machine."""

    FAVORABLE = "favorable"      # Our best outscores theirs by more than the threshold
    UNFAVORABLE = "unfavorable"  # Their best outscores ours by more than the threshold
    CONTESTED = "contested"


@dataclass(frozen=True)
class Assessment:
    """How our best player compares to the opponent's best."""

    our_best: str
    their_best: str
    diff: float  # Positive means our best outscores theirs
    verdict: Verdict


@dataclass(frozen=True)
class RecommendResult:
    """Output of a Recommend query."""

    team: str
    machine: str
    machine_name: str
    venue: Optional[str]
    opponent: Optional[str]
    venue_stats: Tuple[ContenderStats, ...]     # Empty without a venue
    global_stats: Tuple[ContenderStats, ...]
    opponent_stats: Tuple[ContenderStats, ...]  # Empty without an opponent
    assessment: Optional[Assessment]            # None without an opponent or data

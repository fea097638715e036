from src.strategy.matchup import matchup
from src.strategy.models import (
    Assessment,
    Confidence,
    ContenderStats,
    LikelyPlayer,
    MachineMatchup,
    MachineStats,
    MatchupResult,
    MatchupSummary,
    PlayerResult,
    RecommendResult,
    ScoutResult,
    Summary,
    TeamRef,
    Verdict,
)
from src.strategy.player import player_profile
from src.strategy.query import QueryCancelled, StrategyQueryError
from src.strategy.recommend import recommend
from src.strategy.scout import scout

__all__ = [
    "Assessment",
    "Confidence",
    "ContenderStats",
    "LikelyPlayer",
    "MachineMatchup",
    "MachineStats",
    "MatchupResult",
    "MatchupSummary",
    "PlayerResult",
    "QueryCancelled",
    "RecommendResult",
    "ScoutResult",
    "StrategyQueryError",
    "Summary",
    "TeamRef",
    "Verdict",
    "matchup",
    "player_profile",
    "recommend",
    "scout",
]

"""Display formatting for strategy results.

The strategy views return raw numbers; everything a person reads (score
abbreviations, "+50%" labels, edge labels) is produced here.
"""

from src.strategy.baseline import has_baseline, relative_strength, round_half_away
from src.strategy.matchup import is_one_sided
from src.strategy.models import Confidence

CONFIDENCE_MARKERS = {
    Confidence.HIGH: "▲",
    Confidence.MEDIUM: "△",
    Confidence.LOW: "▼",
}


def format_score(score: float) -> str:
    """Abbreviate a pinball score: 1.2B, 45.0M, 3.5K, or the plain number."""
    if score >= 1_000_000_000:
        return f"{score / 1_000_000_000:.1f}B"
    if score >= 1_000_000:
        return f"{score / 1_000_000:.1f}M"
    if score >= 1_000:
        return f"{score / 1_000:.1f}K"
    return f"{score:.0f}"


def format_likely(score: float) -> str:
    """Likely score, or "-" when a side has no likely players."""
    if score == 0:
        return "-"
    return format_score(score)


def format_relative_strength(p50: float, league_p50: float) -> str:
    """Label a P50 against the league: "(+50%)", "(-25%)", "(avg)".

    Empty when the machine has no league baseline.
    """
    if not has_baseline(league_p50):
        return ""
    rel = relative_strength(p50, league_p50)
    if rel == 0:
        return "(avg)"
    return f"({rel:+d}%)"


def format_edge(edge: float, team1: str, team2: str, confidence: Confidence) -> str:
    """Label a matchup edge from team 1's point of view.

    A one-sided edge (the other team has no likely players) shows just the
    favored team. An edge that rounds to zero is "Even".
    """
    if is_one_sided(edge):
        return team1 if edge > 0 else team2

    rounded = round_half_away(edge)
    marker = CONFIDENCE_MARKERS[confidence]
    if rounded > 0:
        return f"{team1} {rounded}% {marker}"
    if rounded < 0:
        return f"{team2} {-rounded}% {marker}"
    return "Even"

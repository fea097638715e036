"""Run one strategy view against a league export and write it as JSON.

Usage:
    python -m src.report.run_report scout TEAM [--venue KEY]
    python -m src.report.run_report player NAME [--venue KEY]
    python -m src.report.run_report matchup VENUE TEAM1 TEAM2
    python -m src.report.run_report recommend TEAM MACHINE [--venue KEY] [--opponent KEY]

Examples:
    python -m src.report.run_report scout CRA --venue SAM
    python -m src.report.run_report recommend CRA TAF --opponent PYC --data-dir /path/to/csvs
"""

import argparse
import dataclasses
import json
import logging
import re
import sys
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from src.league_data.config import RAW_DATA_DIR, REPORTS_DIR
from src.league_data.fact_store import LeagueFactStore
from src.league_data.reference_cache import CachedFactStore
from src.logging_config import setup_logging
from src.report.format import (
    format_edge,
    format_likely,
    format_relative_strength,
    format_score,
)
from src.strategy import matchup, player_profile, recommend, scout
from src.strategy.models import MachineStats, MatchupResult, RecommendResult

logger = logging.getLogger(__name__)

VIEWS = ("scout", "player", "matchup", "recommend")


def _to_jsonable(value):
    """Convert result dataclasses (with enums and tuples) to JSON-ready data."""
    if dataclasses.is_dataclass(value):
        return {f.name: _to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_jsonable(v) for k, v in value.items()}
    return value


def _machine_lines(stats: List[MachineStats]) -> List[str]:
    lines = []
    for s in stats:
        line = (
            f"{s.machine_name}: P50 {format_score(s.p50)} "
            f"{format_relative_strength(s.p50, s.league_p50)}".rstrip()
        )
        if s.no_venue_data:
            line += " [no venue data]"
        lines.append(line)
    return lines


def _matchup_lines(result: MatchupResult) -> List[str]:
    return [
        f"{m.machine_name}: {format_likely(m.team1_likely)} vs "
        f"{format_likely(m.team2_likely)} -> "
        f"{format_edge(m.edge, result.team1, result.team2, m.confidence)}"
        for m in result.machines
    ]


def _recommend_lines(result: RecommendResult) -> List[str]:
    lines = [
        f"{c.name}: P50 {format_score(c.p50)} "
        f"{format_relative_strength(c.p50, c.league_p50)} ({c.games} games)"
        for c in (result.venue_stats or result.global_stats)
    ]
    if result.assessment is not None:
        a = result.assessment
        lines.append(f"{a.our_best} vs {a.their_best}: {a.verdict.value}")
    return lines


def _run_view(store, view: str, args: List[str], venue: Optional[str], opponent: Optional[str]):
    if view == "scout":
        result = scout(store, args[0], venue=venue)
        return result, _machine_lines(list(result.global_stats))
    if view == "player":
        result = player_profile(store, args[0], venue=venue)
        return result, _machine_lines(list(result.global_stats))
    if view == "matchup":
        result = matchup(store, args[0], args[1], args[2])
        return result, _matchup_lines(result)
    if view == "recommend":
        result = recommend(store, args[0], args[1], venue=venue, opponent=opponent)
        return result, _recommend_lines(result)
    raise ValueError(f"Unknown view: {view!r}. Must be one of {VIEWS}.")


def _report_name(view: str, args: List[str], venue: Optional[str]) -> str:
    parts = [view, *args] + ([venue] if venue else [])
    slug = "_".join(re.sub(r"[^a-z0-9]+", "-", p.lower()).strip("-") for p in parts)
    return f"{slug}.json"


def run_report(
    view: str,
    args: List[str],
    venue: Optional[str] = None,
    opponent: Optional[str] = None,
    data_dir: Optional[Path] = None,
    output_dir: Optional[Path] = None,
) -> Path:
    """Run a strategy view and write the result to a JSON file.

    Args:
        view: One of ``scout``, ``player``, ``matchup``, ``recommend``.
        args: Positional arguments for the view (team, player, venue...).
        venue: Optional venue key for scout/player/recommend.
        opponent: Optional opposing team key for recommend.
        data_dir: Directory containing the league export CSVs.
            Defaults to ``data/raw/``.
        output_dir: Directory for JSON output. Defaults to ``data/reports/``.

    Returns:
        Path to the generated JSON file.

    Raises:
        FileNotFoundError: If the data directory doesn't exist.
        ValueError: If the view is unknown or given the wrong arguments.
    """
    if data_dir is None:
        data_dir = RAW_DATA_DIR
    if output_dir is None:
        output_dir = REPORTS_DIR

    arity: Dict[str, int] = {"scout": 1, "player": 1, "matchup": 3, "recommend": 2}
    if view not in arity:
        raise ValueError(f"Unknown view: {view!r}. Must be one of {VIEWS}.")
    if len(args) != arity[view]:
        raise ValueError(f"{view} takes {arity[view]} argument(s), got {len(args)}")

    if not data_dir.is_dir():
        raise FileNotFoundError(f"Data directory not found: {data_dir}")

    logger.info("Running %s %s (data: %s)", view, " ".join(args), data_dir)
    store = CachedFactStore(LeagueFactStore.from_directory(data_dir))
    store.refresh()
    result, lines = _run_view(store, view, args, venue, opponent)

    output_data = {
        "metadata": {
            "version": "1.0",
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "view": view,
            "args": args,
            "venue": venue,
            "opponent": opponent,
        },
        "result": _to_jsonable(result),
        "display": lines,
    }

    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / _report_name(view, args, venue)
    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(output_data, f, indent=2)

    logger.info("Report complete! Output: %s", output_file)
    return output_file


def _parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a league strategy report")
    parser.add_argument("view", choices=VIEWS)
    parser.add_argument("args", nargs="+")
    parser.add_argument("--venue", default=None)
    parser.add_argument("--opponent", default=None)
    parser.add_argument("--data-dir", type=Path, default=None)
    parser.add_argument("--output-dir", type=Path, default=None)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


if __name__ == "__main__":
    options = _parse_args(sys.argv[1:])
    setup_logging(options.log_level)

    try:
        output = run_report(
            options.view,
            options.args,
            venue=options.venue,
            opponent=options.opponent,
            data_dir=options.data_dir,
            output_dir=options.output_dir,
        )
        print(f"Report complete: {output}")
        for line in json.loads(output.read_text(encoding="utf-8"))["display"]:
            print(f"  {line}")
    except Exception:
        logger.exception("Report failed")
        sys.exit(1)

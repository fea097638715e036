"""Shared fixtures for the league scout test suite.

The fixture league is small enough to check every number by hand:

Season 23, all games at STN:
    TAF  Alice 500, Bob 400, Carol 300, Dave 200, Bob 350, Dave 250
    TZ   Alice 100, Carol 150
    MM   Alice 600, Carol 700

Rosters: TTT = Alice, Bob. KNR = Carol, Dave.
Venues:  STN has TAF, TZ. GPA has MM, TZ.

Season 22 adds Eve on TTT with one TAF game of 900. She is not on any
current roster, so none of her games count.
"""

import pandas as pd
import pytest

from src.league_data.fact_store import LeagueFactStore


def _games(rows):
    return pd.DataFrame(
        rows, columns=["season", "week", "venue", "machine", "player", "team", "score"]
    )


def make_league_tables():
    """Fresh copy of the fixture league tables, keyed like the CSV export."""
    games = _games([
        (23, 1, "STN", "TAF", "Alice", "TTT", 500.0),
        (23, 1, "STN", "TAF", "Bob", "TTT", 400.0),
        (23, 1, "STN", "TAF", "Carol", "KNR", 300.0),
        (23, 1, "STN", "TAF", "Dave", "KNR", 200.0),
        (23, 1, "STN", "TZ", "Alice", "TTT", 100.0),
        (23, 1, "STN", "TZ", "Carol", "KNR", 150.0),
        (23, 2, "STN", "TAF", "Bob", "TTT", 350.0),
        (23, 2, "STN", "TAF", "Dave", "KNR", 250.0),
        (23, 2, "STN", "MM", "Alice", "TTT", 600.0),
        (23, 2, "STN", "MM", "Carol", "KNR", 700.0),
        (22, 5, "STN", "TAF", "Eve", "TTT", 900.0),
    ])
    rosters = pd.DataFrame(
        [
            (23, "TTT", "Alice"),
            (23, "TTT", "Bob"),
            (23, "KNR", "Carol"),
            (23, "KNR", "Dave"),
            (22, "TTT", "Eve"),
            (22, "TTT", "Alice"),
            (22, "KNR", "Carol"),
        ],
        columns=["season", "team", "player"],
    )
    teams = pd.DataFrame(
        [
            (22, "TTT", "The Test Team", "STN"),
            (22, "KNR", "Knight Riders", "GPA"),
            (23, "TTT", "The Test Team", "STN"),
            (23, "KNR", "Knight Riders", "GPA"),
        ],
        columns=["season", "team", "name", "home_venue"],
    )
    venues = pd.DataFrame(
        [("STN", "Stonehenge Arcade"), ("GPA", "Georgetown Pizza and Arcade")],
        columns=["venue", "name"],
    )
    machines = pd.DataFrame(
        [
            ("TAF", "The Addams Family"),
            ("TZ", "Twilight Zone"),
            ("MM", "Medieval Madness"),
            ("AFM", "Attack from Mars"),
        ],
        columns=["machine", "name"],
    )
    venue_machines = pd.DataFrame(
        [("STN", "TAF"), ("STN", "TZ"), ("GPA", "MM"), ("GPA", "TZ")],
        columns=["venue", "machine"],
    )
    return {
        "games": games,
        "rosters": rosters,
        "teams": teams,
        "venues": venues,
        "machines": machines,
        "venue_machines": venue_machines,
    }


def _add_team(tables, key, name, games):
    """Add a season-23 team whose roster is every player in *games*.

    *games* is a list of ``(machine, player, score)`` played at STN.
    """
    players = sorted({player for _, player, _ in games})
    tables["teams"] = pd.concat(
        [tables["teams"], pd.DataFrame([(23, key, name, "STN")], columns=tables["teams"].columns)],
        ignore_index=True,
    )
    tables["rosters"] = pd.concat(
        [tables["rosters"], pd.DataFrame([(23, key, p) for p in players], columns=tables["rosters"].columns)],
        ignore_index=True,
    )
    tables["games"] = pd.concat(
        [tables["games"], _games([(23, 3, "STN", m, p, key, s) for m, p, s in games])],
        ignore_index=True,
    )
    return tables


class RecordingStore:
    """Fact store double that records every call and can fail on demand.

    Delegates to a real store. Set ``fail_on`` to a query name to make that
    query raise, or ``cancel_on`` to a ``(query name, event)`` pair to set
    the event while that query runs.
    """

    def __init__(self, wrapped):
        self.wrapped = wrapped
        self.calls = []
        self.fail_on = None
        self.cancel_on = None

    def __getattr__(self, query):
        target = getattr(self.wrapped, query)

        def call(*args):
            self.calls.append((query, args))
            if query == self.fail_on:
                raise ConnectionError("database is unavailable")
            if self.cancel_on is not None and self.cancel_on[0] == query:
                self.cancel_on[1].set()
            return target(*args)

        return call

    def queries(self):
        return [name for name, _ in self.calls]


@pytest.fixture
def league_tables():
    return make_league_tables()


@pytest.fixture
def store(league_tables):
    return LeagueFactStore(league_tables)


@pytest.fixture
def recording_store(store):
    return RecordingStore(store)


@pytest.fixture
def add_team():
    """Factory for adding an extra season-23 team to ``league_tables``."""
    return _add_team

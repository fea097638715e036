"""Tests for the DataFrame-backed league fact store."""

import pytest

from src.league_data.config import FILE_NAMES
from src.league_data.fact_store import (
    LeagueFactStore,
    Machine,
    TeamSummary,
    Venue,
    matches_search,
)
from src.strategy import TeamRef


class TestInit:
    def test_missing_table_raises(self, league_tables):
        del league_tables["venue_machines"]
        with pytest.raises(ValueError, match="venue_machines"):
            LeagueFactStore(league_tables)

    def test_from_directory(self, tmp_path, league_tables):
        for table, df in league_tables.items():
            df.to_csv(tmp_path / FILE_NAMES[table], index=False)
        store = LeagueFactStore.from_directory(tmp_path)
        assert store.roster_players("TTT") == {"Alice", "Bob"}


class TestRosterScope:
    def test_latest_season_only(self, store):
        # Eve was on TTT in season 22
        assert store.roster_players("TTT") == {"Alice", "Bob"}

    def test_folded_team_keeps_last_roster(self, league_tables):
        # OLD last played in season 22; its season-22 roster is still current
        league_tables["teams"].loc[len(league_tables["teams"])] = (22, "OLD", "Old Timers", "")
        league_tables["rosters"].loc[len(league_tables["rosters"])] = (22, "OLD", "Frank")
        store = LeagueFactStore(league_tables)
        assert store.roster_players("OLD") == {"Frank"}

    def test_unknown_team(self, store):
        assert store.roster_players("NOPE") == set()


class TestFactQueries:
    def test_roster_scoped_facts(self, store):
        facts = store.roster_scoped_facts("TTT")
        assert list(facts.columns) == ["player", "machine", "score"]
        assert len(facts) == 5
        assert "Eve" not in set(facts["player"])

    def test_roster_scoped_facts_at_venue(self, store):
        assert store.roster_scoped_facts("TTT", "GPA").empty
        assert len(store.roster_scoped_facts("TTT", "STN")) == 5

    def test_player_machine_facts(self, store):
        facts = store.player_machine_facts("KNR", "TAF")
        assert sorted(facts["score"]) == [200.0, 250.0, 300.0]

    def test_single_player_facts_cross_team(self, store):
        facts = store.single_player_facts("Eve")
        assert list(facts.columns) == ["machine", "score"]
        assert list(facts["score"]) == [900.0]

    def test_league_baseline(self, store):
        assert store.league_baseline() == {"MM": 600.0, "TAF": 300.0, "TZ": 100.0}

    def test_league_baseline_other_percentile(self, store):
        assert store.league_baseline(90)["TAF"] == 500.0

    def test_venue_machines(self, store):
        assert store.venue_machines("GPA") == {"MM", "TZ"}
        assert store.venue_machines("NOPE") == set()

    def test_machine_names(self, store):
        assert store.machine_names()["TZ"] == "Twilight Zone"

    def test_current_team_of(self, store):
        assert store.current_team_of("Carol") == TeamRef("KNR", "Knight Riders")
        assert store.current_team_of("Eve") is None


class TestListQueries:
    def test_list_teams(self, store):
        assert store.list_teams() == [
            TeamSummary("KNR", "Knight Riders", "Georgetown Pizza and Arcade (GPA)"),
            TeamSummary("TTT", "The Test Team", "Stonehenge Arcade (STN)"),
        ]

    def test_list_teams_search(self, store):
        assert [t.key for t in store.list_teams("test")] == ["TTT"]
        assert [t.key for t in store.list_teams("knr")] == ["KNR"]

    def test_list_venues(self, store):
        assert store.list_venues("stone") == [Venue("STN", "Stonehenge Arcade")]
        assert len(store.list_venues()) == 2

    def test_list_machines_played_only(self, store):
        keys = [m.key for m in store.list_machines()]
        assert keys == ["MM", "TAF", "TZ"]

    def test_list_machines_search(self, store):
        assert store.list_machines("twilight") == [Machine("TZ", "Twilight Zone")]


class TestMatchesSearch:
    def test_case_insensitive(self):
        assert matches_search("ADD", "TAF", "The Addams Family")

    def test_no_match(self):
        assert not matches_search("mars", "TAF", "The Addams Family")

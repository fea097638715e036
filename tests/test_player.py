"""Tests for the Player profile against the fixture league."""

from src.strategy import TeamRef, player_profile


class TestPlayerProfile:
    def test_current_team(self, store):
        result = player_profile(store, "Alice")
        assert result.team == TeamRef(key="TTT", name="The Test Team")

    def test_machine_stats(self, store):
        result = player_profile(store, "Alice")
        # All single games, so P50 decides the order
        assert [(s.machine_key, s.p50) for s in result.global_stats] == [
            ("MM", 600.0),
            ("TAF", 500.0),
            ("TZ", 100.0),
        ]
        taf = result.global_stats[1]
        assert taf.relative_strength == 67
        assert taf.likely_players == ()

    def test_multiple_games(self, store):
        result = player_profile(store, "Bob")
        (taf,) = result.global_stats
        assert (taf.games, taf.p50, taf.p90) == (2, 350.0, 400.0)

    def test_summary_needs_three_games(self, store):
        result = player_profile(store, "Alice")
        assert result.summary.strongest == ()

    def test_at_venue_without_games(self, store):
        result = player_profile(store, "Alice", venue="GPA")
        assert result.venue == "GPA"
        assert result.venue_stats == ()
        assert [s.machine_key for s in result.global_stats] == ["MM", "TZ"]
        assert all(s.no_venue_data for s in result.global_stats)

    def test_at_venue_with_games(self, store):
        result = player_profile(store, "Alice", venue="STN")
        assert [s.machine_key for s in result.venue_stats] == ["TAF", "TZ"]


class TestPlayerNoData:
    def test_former_player_has_no_current_team(self, store):
        # Eve only appears on a season-22 roster
        result = player_profile(store, "Eve")
        assert result.team is None
        assert [s.machine_key for s in result.global_stats] == ["TAF"]

    def test_unknown_player(self, store):
        result = player_profile(store, "Nobody")
        assert result.team is None
        assert result.global_stats == ()
        assert result.venue_stats == ()

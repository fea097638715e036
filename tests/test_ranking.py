"""Tests for likely-player ranking and the strongest/weakest summary."""

from src.strategy.models import ContenderStats, LikelyPlayer, MachineStats
from src.strategy.ranking import (
    rank_by_p50,
    rank_likely_players,
    strongest_weakest,
)


def _make_stats(name, games, rel, p50=100.0):
    return MachineStats(
        machine_key=name,
        machine_name=name,
        games=games,
        p50=p50,
        p90=p50,
        league_p50=100.0,
        relative_strength=rel,
    )


class TestRankLikelyPlayers:
    def test_most_games_first(self):
        players = [
            LikelyPlayer("Alice", games=1, p50=500.0),
            LikelyPlayer("Bob", games=2, p50=350.0),
        ]
        assert [p.name for p in rank_likely_players(players)] == ["Bob", "Alice"]

    def test_p50_breaks_games_tie(self):
        players = [
            LikelyPlayer("Alice", games=3, p50=100.0),
            LikelyPlayer("Bob", games=3, p50=200.0),
        ]
        assert [p.name for p in rank_likely_players(players)] == ["Bob", "Alice"]

    def test_name_breaks_full_tie(self):
        players = [
            LikelyPlayer("Zed", games=3, p50=100.0),
            LikelyPlayer("Amy", games=3, p50=100.0),
        ]
        assert [p.name for p in rank_likely_players(players)] == ["Amy", "Zed"]

    def test_keeps_top_two(self):
        players = [LikelyPlayer(f"P{i}", games=i, p50=1.0) for i in range(1, 6)]
        top = rank_likely_players(players)
        assert isinstance(top, tuple)
        assert [p.name for p in top] == ["P5", "P4"]

    def test_single_game_is_enough(self):
        players = [LikelyPlayer("Alice", games=1, p50=1.0)]
        assert len(rank_likely_players(players)) == 1

    def test_empty(self):
        assert rank_likely_players([]) == ()


class TestRankByP50:
    def test_best_first(self):
        contenders = [
            ContenderStats("Bob", games=2, p50=350.0, p90=400.0, league_p50=300.0),
            ContenderStats("Alice", games=1, p50=500.0, p90=500.0, league_p50=300.0),
        ]
        assert [c.name for c in rank_by_p50(contenders)] == ["Alice", "Bob"]

    def test_ties_keep_input_order(self):
        contenders = [
            ContenderStats("Zed", games=1, p50=100.0, p90=100.0, league_p50=0.0),
            ContenderStats("Amy", games=9, p50=100.0, p90=100.0, league_p50=0.0),
        ]
        assert [c.name for c in rank_by_p50(contenders)] == ["Zed", "Amy"]


class TestStrongestWeakest:
    def test_strongest_and_weakest(self):
        stats = [
            _make_stats("A", 5, 50),
            _make_stats("B", 5, 30),
            _make_stats("C", 5, 10),
            _make_stats("D", 5, -10),
            _make_stats("E", 2, -30),
        ]
        summary = strongest_weakest(stats)
        assert summary.strongest == ("A", "B", "C")
        # E has too few games; with four qualifying, B and C land in both lists
        assert summary.weakest == ("D", "C", "B")

    def test_no_weakest_with_three_or_fewer(self):
        stats = [_make_stats("A", 3, 10), _make_stats("B", 3, -5), _make_stats("C", 4, 0)]
        summary = strongest_weakest(stats)
        assert summary.strongest == ("A", "C", "B")
        assert summary.weakest == ()

    def test_few_games_excluded(self):
        stats = [_make_stats("A", 2, 90), _make_stats("B", 3, 5)]
        assert strongest_weakest(stats).strongest == ("B",)

    def test_nothing_qualifies(self):
        summary = strongest_weakest([_make_stats("A", 1, 0)])
        assert summary.strongest == ()
        assert summary.weakest == ()

    def test_input_order_does_not_matter(self):
        stats = [_make_stats(n, 5, r) for n, r in [("A", 1), ("B", 9), ("C", -4), ("D", 6), ("E", 3)]]
        assert strongest_weakest(stats) == strongest_weakest(list(reversed(stats)))

    def test_uses_display_names(self):
        stats = [
            MachineStats(
                machine_key="TAF", machine_name="The Addams Family", games=3,
                p50=400.0, p90=500.0, league_p50=300.0, relative_strength=33,
            )
        ]
        assert strongest_weakest(stats).strongest == ("The Addams Family",)

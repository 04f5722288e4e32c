"""
Tests for round-robin fixture generation and playoff placeholders.
"""

import random
from itertools import combinations

import pytest

from cricket_league.errors import TournamentValidationError
from cricket_league.models.match import TBD, MatchStage
from cricket_league.services.fixture_scheduler import (
    all_pairings,
    count_adjacent_conflicts,
    generate_league_pairings,
    generate_schedule,
    normalize_players,
)


def _players(n: int) -> list[str]:
    return [f"team{i}" for i in range(1, n + 1)]


class TestNormalizePlayers:
    def test_comma_string_trimmed_lowercased(self):
        assert normalize_players(" Alpha, BETA ,gamma ") == ["alpha", "beta", "gamma"]

    def test_duplicates_and_blanks_dropped_keeping_first(self):
        assert normalize_players("alpha,,Beta, ALPHA, beta,  ") == ["alpha", "beta"]

    def test_list_input(self):
        assert normalize_players(["X", "y", "x"]) == ["x", "y"]

    def test_none_is_empty(self):
        assert normalize_players(None) == []


class TestLeaguePairings:
    @pytest.mark.parametrize("n", [2, 3, 4, 5, 6, 7, 8, 10])
    def test_complete_round_robin(self, n):
        players = _players(n)
        pairings = generate_league_pairings(players, rng=random.Random(n))

        assert len(pairings) == n * (n - 1) // 2
        seen = {frozenset(p) for p in pairings}
        assert len(seen) == len(pairings)
        assert seen == {frozenset(p) for p in combinations(players, 2)}

    @pytest.mark.parametrize("n", [5, 6, 8, 10])
    def test_no_back_to_back_players_for_larger_fields(self, n):
        for seed in range(5):
            pairings = generate_league_pairings(_players(n), rng=random.Random(seed))
            assert count_adjacent_conflicts(pairings) == 0

    def test_same_seed_same_order(self):
        players = _players(6)
        first = generate_league_pairings(players, rng=random.Random(99))
        second = generate_league_pairings(players, rng=random.Random(99))
        assert first == second

    def test_exhausted_search_falls_back_to_complete_set(self):
        """A zero step budget forces the random fallback; the set is still complete."""
        players = _players(6)
        pairings = generate_league_pairings(players, rng=random.Random(3), max_steps=0)

        assert len(pairings) == 15
        assert {frozenset(p) for p in pairings} == {frozenset(p) for p in all_pairings(players)}

    def test_two_players_single_match(self):
        assert generate_league_pairings(["a", "b"], rng=random.Random(1)) == [("a", "b")]


class TestGenerateSchedule:
    def test_numbers_are_sequential_and_league_first(self):
        matches = generate_schedule(_players(5), 4, rng=random.Random(5))

        assert [m.match_number for m in matches] == list(range(1, 15))
        assert all(m.match_type == MatchStage.league.value for m in matches[:10])
        assert [m.match_type for m in matches[10:]] == [
            "Qualifier 1",
            "Eliminator",
            "Qualifier 2",
            "Final",
        ]

    def test_playoff_slots_start_tbd(self):
        matches = generate_schedule(_players(4), 3, rng=random.Random(5))
        playoffs = [m for m in matches if not m.is_league]

        assert len(playoffs) == 3
        assert all(m.player1_id == TBD and m.player2_id == TBD for m in playoffs)

    def test_league_only_when_qualifier_count_unsupported(self):
        matches = generate_schedule(_players(4), 0, rng=random.Random(5))
        assert len(matches) == 6
        assert all(m.is_league for m in matches)

    def test_fewer_than_two_distinct_players_rejected(self):
        with pytest.raises(TournamentValidationError):
            generate_schedule(["solo", "SOLO"], 2)

    def test_empty_player_list_rejected(self):
        with pytest.raises(TournamentValidationError):
            generate_schedule([], 2)


class TestNormalizePlayersRejectsBadInput:
    @pytest.mark.parametrize("raw", [5, {"a": 1}, ["a", 3]])
    def test_non_string_input_raises_value_error(self, raw):
        with pytest.raises(ValueError):
            normalize_players(raw)

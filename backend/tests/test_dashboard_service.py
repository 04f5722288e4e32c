"""
Tests for dashboard assembly.
"""

import random

from cricket_league.models.match import MatchStage
from cricket_league.services.dashboard_service import build_dashboard, build_highlights
from tests.factories import league_match, league_matches, make_tournament, record

PLAYERS = ["a", "b", "c", "d", "e"]


def _tournament_with_results():
    tournament = make_tournament(PLAYERS, qualifier_count=4)
    played = league_matches(tournament)[:3]
    for match in played:
        record(match, match.player2_id, winner_score=64, loser_score=51)
    return tournament, played


def test_summary_counts():
    tournament, _ = _tournament_with_results()
    dashboard = build_dashboard(tournament, rng=random.Random(1), trials=50)

    assert dashboard.tournament.name == "Test League"
    assert dashboard.tournament.status == "InProgress"
    assert dashboard.tournament.total_matches == 14
    assert dashboard.tournament.completed_matches == 3
    assert dashboard.tournament.remaining_matches == 11


def test_match_lists():
    tournament, played = _tournament_with_results()
    dashboard = build_dashboard(tournament, rng=random.Random(1), trials=50)

    assert [m.match_number for m in dashboard.completed_matches] == [3, 2, 1]
    assert [m.match_number for m in dashboard.upcoming_matches] == list(range(4, 15))
    assert [m.match_number for m in dashboard.schedule] == list(range(1, 15))
    assert dashboard.upcoming_matches[-1].stage is MatchStage.final


def test_standings_leaderboards_and_forecast_cover_every_team():
    tournament, _ = _tournament_with_results()
    dashboard = build_dashboard(tournament, rng=random.Random(1), trials=50)

    assert sorted(s.team for s in dashboard.team_standings) == PLAYERS
    assert [c.team for c in dashboard.qualification_chances] == [
        s.team for s in dashboard.team_standings
    ]
    assert dashboard.top_batsmen[0].runs >= dashboard.top_batsmen[-1].runs


def test_fresh_tournament_has_empty_highlights():
    tournament = make_tournament(PLAYERS, qualifier_count=2)
    dashboard = build_dashboard(tournament, rng=random.Random(1), trials=10)

    assert dashboard.completed_matches == []
    assert dashboard.top_batsmen == []
    assert dashboard.highlights.highest_team_score == 0
    assert dashboard.highlights.best_strike_rate == 0.0


def test_highlights():
    matches = [
        league_match(1, "a", "b", "a", scores=(88, 40), balls=(30, 30), wickets=(3, 10)),
        league_match(2, "c", "d", "d", scores=(50, 51), balls=(30, 17), wickets=(6, 2)),
        league_match(3, "a", "c", scores=(99, 0), balls=(30, 0)),
    ]
    highlights = build_highlights(matches)

    assert highlights.highest_team_score == 88
    assert highlights.highest_individual_score == 88
    assert highlights.most_wickets == 10
    assert highlights.best_strike_rate == 300.0

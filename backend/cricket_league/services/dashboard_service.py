"""
Dashboard assembly: one read view over a fully loaded tournament.
"""
import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from cricket_league.models.match import Match
from cricket_league.models.tournament import Tournament
from cricket_league.services.qualification_forecaster import QualificationChance, forecast_qualification
from cricket_league.services.standings_service import (
    TeamStanding,
    TopBatsman,
    TopBowler,
    compute_standings_and_leaderboards,
)


@dataclass
class TournamentSummary:
    name: str
    status: str
    total_matches: int
    completed_matches: int
    remaining_matches: int


@dataclass
class TournamentHighlights:
    highest_individual_score: int = 0
    most_wickets: int = 0
    highest_team_score: int = 0
    best_strike_rate: float = 0.0


@dataclass
class DashboardData:
    tournament: TournamentSummary
    team_standings: List[TeamStanding] = field(default_factory=list)
    top_batsmen: List[TopBatsman] = field(default_factory=list)
    top_bowlers: List[TopBowler] = field(default_factory=list)
    upcoming_matches: List[Match] = field(default_factory=list)
    completed_matches: List[Match] = field(default_factory=list)
    schedule: List[Match] = field(default_factory=list)
    qualification_chances: List[QualificationChance] = field(default_factory=list)
    highlights: TournamentHighlights = field(default_factory=TournamentHighlights)


def build_highlights(matches: Sequence[Match]) -> TournamentHighlights:
    """Single-innings records across resolved matches (zeros when none are resolved)."""
    resolved = [m for m in matches if m.is_resolved]
    if not resolved:
        return TournamentHighlights()

    highest_score = max(max(m.player1_score, m.player2_score) for m in resolved)
    most_wickets = max(max(m.player1_wickets, m.player2_wickets) for m in resolved)

    best_strike_rate = 0.0
    for m in resolved:
        for runs, balls in ((m.player1_score, m.player1_balls), (m.player2_score, m.player2_balls)):
            if balls > 0:
                best_strike_rate = max(best_strike_rate, runs / balls * 100)

    return TournamentHighlights(
        highest_individual_score=highest_score,
        most_wickets=most_wickets,
        highest_team_score=highest_score,
        best_strike_rate=round(best_strike_rate, 1),
    )


def build_dashboard(
    tournament: Tournament,
    rng: Optional[random.Random] = None,
    trials: Optional[int] = None,
) -> DashboardData:
    """Compose summary, standings, leaderboards, schedule, forecasts and highlights."""
    schedule = sorted(tournament.matches, key=lambda m: m.match_number)
    standings, batsmen, bowlers = compute_standings_and_leaderboards(
        schedule, tournament.player_list, tournament.qualifier_count
    )

    completed = [m for m in schedule if m.is_resolved]
    upcoming = [m for m in schedule if not m.is_resolved]
    league = [m for m in schedule if m.is_league]

    chances = forecast_qualification(
        standings,
        [m for m in league if not m.is_resolved],
        league,
        rng=rng,
        trials=trials,
    )

    return DashboardData(
        tournament=TournamentSummary(
            name=tournament.name,
            status=tournament.status,
            total_matches=len(schedule),
            completed_matches=len(completed),
            remaining_matches=len(upcoming),
        ),
        team_standings=standings,
        top_batsmen=batsmen,
        top_bowlers=bowlers,
        upcoming_matches=upcoming,
        completed_matches=sorted(completed, key=lambda m: m.match_number, reverse=True),
        schedule=schedule,
        qualification_chances=chances,
        highlights=build_highlights(schedule),
    )

"""
Net run rate: run-rate scored minus run-rate conceded, the standings tiebreaker after points.
"""

from dataclasses import dataclass
from typing import Iterable

from cricket_league.models.match import Match

BALLS_PER_OVER = 6


@dataclass
class RunTotals:
    runs_for: int = 0
    runs_against: int = 0
    balls_faced: int = 0
    balls_bowled: int = 0

    def add(self, runs_for: int, runs_against: int, balls_faced: int, balls_bowled: int) -> None:
        self.runs_for += runs_for
        self.runs_against += runs_against
        self.balls_faced += balls_faced
        self.balls_bowled += balls_bowled

    @property
    def net_run_rate(self) -> float:
        return calculate_net_run_rate(self.runs_for, self.runs_against, self.balls_faced, self.balls_bowled)


def calculate_net_run_rate(runs_for: int, runs_against: int, balls_faced: int, balls_bowled: int) -> float:
    """
    (runs_for / overs_faced) - (runs_against / overs_bowled), rounded to 3 decimals.

    Returns 0.0 when either side has no balls recorded yet.
    """
    if balls_faced == 0 or balls_bowled == 0:
        return 0.0

    overs_faced = balls_faced / BALLS_PER_OVER
    overs_bowled = balls_bowled / BALLS_PER_OVER

    return round(runs_for / overs_faced - runs_against / overs_bowled, 3)


def format_net_run_rate(nrr: float) -> str:
    """Signed 3-decimal display: +1.250, -0.400, 0.000"""
    if nrr == 0:
        return "0.000"
    return f"{nrr:+.3f}"


def team_run_totals(team: str, matches: Iterable[Match]) -> RunTotals:
    """Sum runs/balls for and against *team* over the matches it played in."""
    totals = RunTotals()
    for match in matches:
        if match.player1_id == team:
            totals.add(match.player1_score, match.player2_score, match.player1_balls, match.player2_balls)
        elif match.player2_id == team:
            totals.add(match.player2_score, match.player1_score, match.player2_balls, match.player1_balls)
    return totals

"""
Standings and player leaderboards, recomputed from the full match history.

Nothing here is persisted: every call projects the given matches into fresh
TeamStanding / TopBatsman / TopBowler values, so repeated calls on the same
matches return identical results.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from cricket_league.models.match import Match
from cricket_league.services.net_run_rate import (
    BALLS_PER_OVER,
    RunTotals,
    calculate_net_run_rate,
    format_net_run_rate,
    team_run_totals,
)

POINTS_PER_WIN = 2

# Swing assumed per remaining match when bounding net run rate for certainty checks
BEST_CASE_RUNS_FOR = 70
BEST_CASE_RUNS_AGAINST = 20
ASSUMED_BALLS_PER_INNINGS = 30


@dataclass
class TeamStanding:
    team: str
    played: int = 0
    won: int = 0
    lost: int = 0
    points: int = 0
    net_run_rate: float = 0.0
    rank: int = 0
    is_qualified: bool = False

    @property
    def net_run_rate_display(self) -> str:
        return format_net_run_rate(self.net_run_rate)


@dataclass
class TopBatsman:
    name: str
    runs: int
    matches: int
    average: float
    strike_rate: float
    rank: int = 0


@dataclass
class TopBowler:
    name: str
    wickets: int
    matches: int
    economy: float
    average: float
    rank: int = 0


@dataclass
class _PlayerAggregate:
    """Batting and bowling sums for one team across every match it played in."""

    batting_runs: int = 0
    batting_balls: int = 0
    innings: int = 0
    bowling_wickets: int = 0
    bowling_runs_conceded: int = 0
    bowling_balls: int = 0
    matches: int = 0


def _has_started(match: Match) -> bool:
    return match.is_resolved or match.player1_balls > 0 or match.player2_balls > 0


def _aggregate_player(player: str, matches: Sequence[Match]) -> _PlayerAggregate:
    agg = _PlayerAggregate()
    for match in matches:
        if not match.involves(player) or not _has_started(match):
            continue
        agg.matches += 1
        if match.side_of(player) == 1:
            runs, balls = match.player1_score, match.player1_balls
            opp_runs, opp_balls, opp_wickets = match.player2_score, match.player2_balls, match.player2_wickets
        else:
            runs, balls = match.player2_score, match.player2_balls
            opp_runs, opp_balls, opp_wickets = match.player1_score, match.player1_balls, match.player1_wickets

        agg.batting_runs += runs
        agg.batting_balls += balls
        if balls > 0:
            agg.innings += 1

        # Bowling is the opponent's innings against this team
        agg.bowling_wickets += opp_wickets
        agg.bowling_runs_conceded += opp_runs
        agg.bowling_balls += opp_balls
    return agg


def _build_standing(player: str, matches: Sequence[Match]) -> TeamStanding:
    league = [m for m in matches if m.is_league and m.involves(player)]
    resolved = [m for m in league if m.is_resolved]
    won = sum(1 for m in resolved if m.winner_id == player)

    return TeamStanding(
        team=player,
        played=len(resolved),
        won=won,
        lost=len(resolved) - won,
        points=won * POINTS_PER_WIN,
        net_run_rate=team_run_totals(player, league).net_run_rate,
    )


def rank_standings(standings: List[TeamStanding]) -> List[TeamStanding]:
    """Sort by points then net run rate (both descending) and assign 1-based ranks."""
    ranked = sorted(standings, key=lambda s: (-s.points, -s.net_run_rate))
    for index, standing in enumerate(ranked):
        standing.rank = index + 1
    return ranked


def compute_standings_and_leaderboards(
    matches: Sequence[Match],
    players: Sequence[str],
    qualifier_count: int = 0,
) -> Tuple[List[TeamStanding], List[TopBatsman], List[TopBowler]]:
    """
    Project matches into ranked standings and batting/bowling leaderboards.

    Standings count league matches only; leaderboards count every match
    (league and playoff) the team has started. `is_qualified` is set on teams
    that are mathematically certain to finish within *qualifier_count*.
    """
    standings = rank_standings([_build_standing(player, matches) for player in players])

    remaining = [m for m in matches if m.is_league and not m.is_resolved]
    resolved_league = [m for m in matches if m.is_league and m.is_resolved]
    for standing in standings:
        standing.is_qualified = is_team_qualified(
            standing, standings, remaining, qualifier_count, resolved_league
        )

    batsmen: List[TopBatsman] = []
    bowlers: List[TopBowler] = []
    for player in players:
        agg = _aggregate_player(player, matches)
        if agg.innings > 0:
            batsmen.append(
                TopBatsman(
                    name=player,
                    runs=agg.batting_runs,
                    matches=agg.matches,
                    average=round(agg.batting_runs / agg.innings, 1),
                    strike_rate=round(agg.batting_runs / agg.batting_balls * 100, 1) if agg.batting_balls else 0.0,
                )
            )
        if agg.matches > 0:
            bowlers.append(
                TopBowler(
                    name=player,
                    wickets=agg.bowling_wickets,
                    matches=agg.matches,
                    economy=round(agg.bowling_runs_conceded / agg.bowling_balls * BALLS_PER_OVER, 1) if agg.bowling_balls else 0.0,
                    average=round(agg.bowling_runs_conceded / agg.bowling_wickets, 1) if agg.bowling_wickets else 0.0,
                )
            )

    batsmen.sort(key=lambda b: -b.runs)
    for index, batsman in enumerate(batsmen):
        batsman.rank = index + 1

    bowlers.sort(key=lambda b: -b.wickets)
    for index, bowler in enumerate(bowlers):
        bowler.rank = index + 1

    return standings, batsmen, bowlers


def _remaining_count(team: str, remaining_matches: Sequence[Match]) -> int:
    return sum(1 for m in remaining_matches if m.involves(team))


def _projected_net_run_rate(current: RunTotals, remaining: int, runs_for: int, runs_against: int) -> float:
    return calculate_net_run_rate(
        current.runs_for + remaining * runs_for,
        current.runs_against + remaining * runs_against,
        current.balls_faced + remaining * ASSUMED_BALLS_PER_INNINGS,
        current.balls_bowled + remaining * ASSUMED_BALLS_PER_INNINGS,
    )


def is_team_qualified(
    standing: TeamStanding,
    standings: Sequence[TeamStanding],
    remaining_matches: Sequence[Match],
    qualifier_count: int,
    resolved_league_matches: Sequence[Match],
) -> bool:
    """
    True when no team below the qualification line can still overtake *standing*.

    Every lower team's maximum points (current + 2 per remaining league match)
    must not exceed this team's points. On equal points the lower team's
    best-case NRR (winning every remaining match 70-20) is compared with this
    team's worst case (losing every remaining match 20-70).
    """
    if standing.rank > qualifier_count:
        return False

    for below in standings:
        if below.rank <= qualifier_count:
            continue

        below_remaining = _remaining_count(below.team, remaining_matches)
        max_points = below.points + below_remaining * POINTS_PER_WIN

        if max_points > standing.points:
            return False

        if max_points == standing.points:
            best_nrr = _projected_net_run_rate(
                team_run_totals(below.team, resolved_league_matches),
                below_remaining,
                BEST_CASE_RUNS_FOR,
                BEST_CASE_RUNS_AGAINST,
            )
            worst_nrr = _projected_net_run_rate(
                team_run_totals(standing.team, resolved_league_matches),
                _remaining_count(standing.team, remaining_matches),
                BEST_CASE_RUNS_AGAINST,
                BEST_CASE_RUNS_FOR,
            )
            if best_nrr > worst_nrr:
                return False

    return True

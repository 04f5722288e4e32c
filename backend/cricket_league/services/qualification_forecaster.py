"""
Qualification forecaster - Monte Carlo estimate of top-2 / top-4 finishes.

Each trial plays out every unresolved league match with random innings
scores, re-sorts the table by points then net run rate, and tallies where
every team lands. Percentages are statistical estimates; pass a seeded
random.Random for repeatable numbers.
"""

import logging
import random
import time
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from cricket_league import config
from cricket_league.models.match import Match
from cricket_league.services.net_run_rate import RunTotals, calculate_net_run_rate, team_run_totals
from cricket_league.services.standings_service import POINTS_PER_WIN, TeamStanding

logger = logging.getLogger(__name__)

SIMULATED_BALLS_PER_INNINGS = 30
POINTS_PER_TIE = 1

# Innings score model: base range with 10% low and 10% high outliers
BASE_SCORE_RANGE = (35, 55)
LOW_OUTLIER_RANGE = (20, 34)
HIGH_OUTLIER_RANGE = (55, 70)
OUTLIER_PROBABILITY = 0.1
# Balls used by a chasing side that wins
CHASE_BALLS_RANGE = (18, 29)

TOP_2 = 2
TOP_4 = 4

# (minimum top-4 percentage, label), checked in order
STATUS_BANDS: Tuple[Tuple[int, str], ...] = (
    (90, "Almost Certain"),
    (70, "Very Likely"),
    (50, "Good Chance"),
    (30, "Possible"),
    (15, "Unlikely"),
)
LOWEST_STATUS = "Very Unlikely"


@dataclass
class QualificationChance:
    team: str
    top2_chance: int
    top4_chance: int
    status: str


def qualification_status(top4_chance: int) -> str:
    for minimum, label in STATUS_BANDS:
        if top4_chance >= minimum:
            return label
    return LOWEST_STATUS


def simulate_innings_score(rng: random.Random) -> int:
    base_score = rng.randint(*BASE_SCORE_RANGE)
    outlier = rng.random()
    if outlier < OUTLIER_PROBABILITY:
        return rng.randint(*LOW_OUTLIER_RANGE)
    if outlier > 1 - OUTLIER_PROBABILITY:
        return rng.randint(*HIGH_OUTLIER_RANGE)
    return base_score


@dataclass
class _TrialTally:
    top2: Counter
    top4: Counter
    trials: int = 0

    def merge(self, other: "_TrialTally") -> None:
        self.top2.update(other.top2)
        self.top4.update(other.top4)
        self.trials += other.trials


def _run_trials(
    teams: List[str],
    baseline_points: Dict[str, int],
    baseline_totals: Dict[str, RunTotals],
    fixtures: List[Tuple[str, str]],
    trials: int,
    rng: random.Random,
    deadline: Optional[float],
) -> _TrialTally:
    tally = _TrialTally(top2=Counter(), top4=Counter())

    for _ in range(trials):
        if deadline is not None and time.monotonic() > deadline:
            break

        points = dict(baseline_points)
        # [runs_for, runs_against, balls_faced, balls_bowled]
        sums = {
            t: [tot.runs_for, tot.runs_against, tot.balls_faced, tot.balls_bowled]
            for t, tot in baseline_totals.items()
        }

        for team1, team2 in fixtures:
            score1 = simulate_innings_score(rng)
            score2 = simulate_innings_score(rng)
            balls1 = SIMULATED_BALLS_PER_INNINGS
            balls2 = rng.randint(*CHASE_BALLS_RANGE) if score2 > score1 else SIMULATED_BALLS_PER_INNINGS

            if score1 > score2:
                points[team1] += POINTS_PER_WIN
            elif score2 > score1:
                points[team2] += POINTS_PER_WIN
            else:
                points[team1] += POINTS_PER_TIE
                points[team2] += POINTS_PER_TIE

            s1, s2 = sums[team1], sums[team2]
            s1[0] += score1
            s1[1] += score2
            s1[2] += balls1
            s1[3] += balls2
            s2[0] += score2
            s2[1] += score1
            s2[2] += balls2
            s2[3] += balls1

        final_order = sorted(
            teams,
            key=lambda t: (-points[t], -calculate_net_run_rate(*sums[t])),
        )
        for position, team in enumerate(final_order[:TOP_4]):
            if position < TOP_2:
                tally.top2[team] += 1
            tally.top4[team] += 1
        tally.trials += 1

    return tally


def _split_trials(trials: int, workers: int) -> List[int]:
    base, extra = divmod(trials, workers)
    return [base + (1 if i < extra else 0) for i in range(workers) if base or i < extra]


def forecast_qualification(
    standings: Sequence[TeamStanding],
    remaining_league_matches: Sequence[Match],
    all_matches: Sequence[Match],
    rng: Optional[random.Random] = None,
    trials: Optional[int] = None,
    time_budget_seconds: Optional[float] = None,
    workers: Optional[int] = None,
) -> List[QualificationChance]:
    """
    Estimate each team's chance of finishing top 2 / top 4.

    Args:
        standings: current ranked standings (points are the simulation baseline)
        remaining_league_matches: unresolved league fixtures to simulate
        all_matches: matches whose resolved results seed the run-rate baseline
        rng: random source; per-worker generators are derived from it
        trials: number of simulated seasons (default FORECAST_TRIALS)
        time_budget_seconds: stop early and use the completed trials (0 = unbounded)
        workers: split trials across a thread pool, merging counts at the end

    Returns:
        QualificationChance per team, in standings order
    """
    rng = rng or random.Random()
    trials = config.FORECAST_TRIALS if trials is None else trials
    if time_budget_seconds is None:
        time_budget_seconds = config.FORECAST_TIME_BUDGET_SECONDS
    workers = max(1, config.FORECAST_WORKERS if workers is None else workers)

    teams = [s.team for s in standings]
    team_set = set(teams)
    baseline_points = {s.team: s.points for s in standings}
    resolved = [m for m in all_matches if m.is_resolved]
    baseline_totals = {t: team_run_totals(t, resolved) for t in teams}

    fixtures = [
        (m.player1_id, m.player2_id)
        for m in remaining_league_matches
        if m.player1_id in team_set and m.player2_id in team_set
    ]
    if not fixtures:
        # Nothing left to play: every trial would produce the same table
        trials = min(trials, 1)

    deadline = time.monotonic() + time_budget_seconds if time_budget_seconds > 0 else None

    tally = _TrialTally(top2=Counter(), top4=Counter())
    chunks = _split_trials(trials, workers) if trials > 0 else []
    if len(chunks) <= 1:
        for chunk in chunks:
            tally.merge(_run_trials(teams, baseline_points, baseline_totals, fixtures, chunk, rng, deadline))
    else:
        worker_rngs = [random.Random(rng.getrandbits(64)) for _ in chunks]
        with ThreadPoolExecutor(max_workers=len(chunks)) as pool:
            results = pool.map(
                lambda args: _run_trials(teams, baseline_points, baseline_totals, fixtures, args[0], args[1], deadline),
                zip(chunks, worker_rngs),
            )
            for result in results:
                tally.merge(result)

    if tally.trials < trials:
        logger.warning(
            "Qualification forecast time budget (%.2fs) expired after %d of %d trials",
            time_budget_seconds,
            tally.trials,
            trials,
        )
    logger.debug("Qualification forecast: %d trials over %d fixtures", tally.trials, len(fixtures))

    chances: List[QualificationChance] = []
    for team in teams:
        if tally.trials:
            top2 = round(tally.top2[team] / tally.trials * 100)
            top4 = round(tally.top4[team] / tally.trials * 100)
        else:
            top2 = top4 = 0
        chances.append(
            QualificationChance(
                team=team,
                top2_chance=top2,
                top4_chance=top4,
                status=qualification_status(top4),
            )
        )
    return chances

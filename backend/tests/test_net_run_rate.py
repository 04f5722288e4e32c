"""
Tests for net run rate calculation and display.
"""

import pytest

from cricket_league.services.net_run_rate import (
    calculate_net_run_rate,
    format_net_run_rate,
    team_run_totals,
)
from tests.factories import league_match


def test_basic_net_run_rate():
    # 60 off 30 balls (12.0 rpo) vs 45 conceded off 30 balls (9.0 rpo)
    assert calculate_net_run_rate(60, 45, 30, 30) == 3.0


def test_rounded_to_three_decimals():
    # 50/(29/6) - 40/5 = 10.3448... - 8.0
    assert calculate_net_run_rate(50, 40, 29, 30) == pytest.approx(2.345)


@pytest.mark.parametrize(
    "balls_faced, balls_bowled",
    [(0, 0), (0, 30), (30, 0)],
)
def test_zero_balls_means_zero(balls_faced, balls_bowled):
    assert calculate_net_run_rate(50, 40, balls_faced, balls_bowled) == 0.0


def test_format_is_signed():
    assert format_net_run_rate(1.25) == "+1.250"
    assert format_net_run_rate(-0.4) == "-0.400"
    assert format_net_run_rate(0.0) == "0.000"


def test_team_run_totals_uses_correct_side():
    matches = [
        league_match(1, "a", "b", "a", scores=(60, 40), balls=(30, 30)),
        league_match(2, "c", "a", "c", scores=(55, 50), balls=(30, 24)),
        league_match(3, "b", "c", "b", scores=(70, 20), balls=(30, 30)),
    ]
    totals = team_run_totals("a", matches)

    assert totals.runs_for == 110
    assert totals.runs_against == 95
    assert totals.balls_faced == 54
    assert totals.balls_bowled == 60

"""
Match result updates and result-description synthesis.

Supports descriptions like:
  "alpha won by 23 runs"     (winner batted first)
  "beta won by 6 wickets"    (winner chased; 10 - wickets fallen)
  "Match in progress"        (no winner yet)
"""
from datetime import datetime
from typing import Optional

from cricket_league.errors import TournamentValidationError
from cricket_league.models.match import TBD, Match, TossChoice
from cricket_league.schemas import MatchResultUpdate

WICKETS_PER_INNINGS = 10
IN_PROGRESS_DESCRIPTION = "Match in progress"


def winner_batted_first(match: Match) -> bool:
    """Infer innings order from the toss: toss winner bats when choosing 'bat'."""
    toss_choice_bat = (match.toss_choice or "").lower() == TossChoice.bat.value
    if match.toss_winner_id == match.winner_id:
        return toss_choice_bat
    return not toss_choice_bat


def validate_winner(match: Match, winner_id: Optional[str]) -> None:
    """
    Raises:
        TournamentValidationError: winner is not one of the two filled slots
    """
    if not winner_id:
        return
    if winner_id == TBD or not match.involves(winner_id):
        raise TournamentValidationError(
            f"Winner '{winner_id}' is not a participant of match {match.match_number} "
            f"({match.player1_id} v {match.player2_id})."
        )


def describe_result(match: Match) -> str:
    """Build a result line from the scorecard and toss outcome."""
    if not match.is_resolved:
        return IN_PROGRESS_DESCRIPTION

    winner = match.winner_id
    if winner_batted_first(match):
        margin = abs(match.player1_score - match.player2_score)
        return f"{winner} won by {margin} runs"

    wickets_lost = match.player1_wickets if winner == match.player1_id else match.player2_wickets
    return f"{winner} won by {WICKETS_PER_INNINGS - wickets_lost} wickets"


def apply_match_result(match: Match, update: MatchResultUpdate) -> Match:
    """
    Copy a scorecard update onto *match*.

    The supplied description wins; a blank one is synthesized from the result.

    Raises:
        TournamentValidationError: winner is not a participant (match left untouched)
    """
    validate_winner(match, update.winner_id)

    match.player1_score = update.player1_score
    match.player2_score = update.player2_score
    match.player1_balls = update.player1_balls
    match.player2_balls = update.player2_balls
    match.player1_wickets = update.player1_wickets
    match.player2_wickets = update.player2_wickets
    match.winner_id = update.winner_id or None
    match.toss_winner_id = update.toss_winner_id or None
    match.toss_choice = update.toss_choice.value if update.toss_choice else None

    if update.description and update.description.strip():
        match.description = update.description.strip()
    else:
        match.description = describe_result(match)

    match.updated_at = datetime.utcnow()
    return match

"""
Playoff advancement: fill TBD playoff slots as qualifying results arrive.

Slot lifecycle: TBD (unfilled) -> participant assigned (filled) -> winner set (resolved).
Two triggers drive it:
- League completion: seed playoff slots from final standings (bracket_rules.SEEDING).
- Playoff resolution: move winner/loser downstream (bracket_rules.ADVANCEMENT).
Resolving the Final completes the tournament; completion is terminal.
Once a playoff match is resolved, league corrections no longer re-seed.
"""
import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from cricket_league.models.match import TBD, Match, MatchStage
from cricket_league.models.tournament import Tournament, TournamentStatus
from cricket_league.services.bracket_rules import (
    ADVANCEMENT,
    ROLE_WINNER,
    SEEDING,
    SLOT_1,
    SLOT_2,
    playoff_stages,
)
from cricket_league.services.standings_service import TeamStanding

logger = logging.getLogger(__name__)


def league_complete(matches: Sequence[Match]) -> bool:
    """True when every league match has a winner."""
    return all(m.is_resolved for m in matches if m.is_league)


def playoffs_started(tournament: Tournament) -> bool:
    """True once any playoff match has a winner or the tournament is completed."""
    if tournament.is_completed:
        return True
    return any(m.is_resolved for m in tournament.matches if not m.is_league)


def should_advance(tournament: Tournament, updated_match: Match) -> bool:
    """Advancement runs once the league is done, or whenever a playoff match gains a winner."""
    if league_complete(tournament.matches):
        return True
    return not updated_match.is_league and updated_match.is_resolved


def _playoff_matches_by_stage(tournament: Tournament) -> Dict[MatchStage, Match]:
    return {m.stage: m for m in tournament.matches if not m.is_league}


def _set_slot(match: Match, slot: int, team: str) -> bool:
    """Assign *team* to slot 1 or 2. Returns True if the slot changed."""
    if slot == SLOT_1:
        if match.player1_id == team:
            return False
        match.player1_id = team
    else:
        if match.player2_id == team:
            return False
        match.player2_id = team
    match.updated_at = datetime.utcnow()
    return True


def _team_at_rank(ranked: List[TeamStanding], rank: Optional[int]) -> str:
    if rank is None or rank > len(ranked):
        return TBD
    return ranked[rank - 1].team


def seed_playoffs(tournament: Tournament, standings: Sequence[TeamStanding]) -> List[Match]:
    """
    Seed playoff slots from final league standings.

    Stages with a seeding rule get the ranked teams (TBD where the rank is
    missing or left open); every other stage is reset to TBD v TBD.
    Returns the playoff matches whose slots changed.
    """
    qualifiers = tournament.qualifier_count
    ranked = sorted(standings, key=lambda s: s.rank)
    playoffs = _playoff_matches_by_stage(tournament)
    seeding = SEEDING.get(qualifiers, {})

    changed: List[Match] = []
    for stage in playoff_stages(qualifiers):
        match = playoffs.get(stage)
        if match is None:
            continue
        rank_1, rank_2 = seeding.get(stage, (None, None))
        slot_1_changed = _set_slot(match, SLOT_1, _team_at_rank(ranked, rank_1))
        slot_2_changed = _set_slot(match, SLOT_2, _team_at_rank(ranked, rank_2))
        if slot_1_changed or slot_2_changed:
            changed.append(match)

    logger.info(
        "Seeded playoffs for tournament %s (%d qualifiers): %d matches updated",
        tournament.id,
        qualifiers,
        len(changed),
    )
    return changed


def propagate_playoff_result(tournament: Tournament, resolved_match: Match) -> List[Match]:
    """
    Move the winner/loser of a resolved playoff match into downstream slots.

    Resolving the Final moves the tournament to Completed (one-way).
    Returns the downstream matches whose slots changed.
    """
    if resolved_match.is_league or not resolved_match.is_resolved:
        return []

    winner = resolved_match.winner_id
    loser = resolved_match.opponent_of(winner)
    playoffs = _playoff_matches_by_stage(tournament)

    changed: List[Match] = []
    routes = ADVANCEMENT.get(tournament.qualifier_count, {}).get(resolved_match.stage, [])
    for role, stage, slot in routes:
        target = playoffs.get(stage)
        if target is None:
            continue
        team = winner if role == ROLE_WINNER else loser
        if _set_slot(target, slot, team):
            changed.append(target)
            logger.info(
                "%s %s of %s advances to %s slot %d",
                role.lower(),
                team,
                resolved_match.stage.value,
                stage.value,
                slot,
            )

    if resolved_match.stage is MatchStage.final and not tournament.is_completed:
        tournament.status = TournamentStatus.completed.value
        tournament.updated_at = datetime.utcnow()
        logger.info("Tournament %s completed; champion %s", tournament.id, winner)

    return changed


def advance_bracket(
    tournament: Tournament,
    standings: Sequence[TeamStanding],
    updated_match: Match,
) -> List[Match]:
    """
    Apply whichever advancement trigger *updated_match* fires, mutating
    tournament.matches (and tournament.status) in place.

    A league match completing the league seeds the playoffs; a resolved
    playoff match propagates its result. Seeding is frozen once the playoffs
    have started, so league corrections never move the bracket backwards.
    Returns matches whose slots changed.
    """
    if updated_match.is_league:
        if not league_complete(tournament.matches):
            return []
        if playoffs_started(tournament):
            logger.info(
                "Tournament %s playoffs already under way; league update %s does not re-seed",
                tournament.id,
                updated_match.match_number,
            )
            return []
        return seed_playoffs(tournament, standings)
    return propagate_playoff_result(tournament, updated_match)

"""
Tournament Service - persistence seam for the tournament engine.

Loads tournaments with their matches from a Session, runs the pure services
(schedule generation, result updates, advancement, dashboard) and writes
mutations back. Callers own the Session and its lifecycle.
"""

import logging
import random
from typing import List, Optional

from sqlmodel import Session, select

from cricket_league.errors import NotFoundError, TournamentValidationError
from cricket_league.models.match import Match
from cricket_league.models.tournament import Tournament, TournamentStatus
from cricket_league.schemas import MatchResultUpdate, TournamentCreate
from cricket_league.services.advancement_service import advance_bracket, should_advance
from cricket_league.services.dashboard_service import DashboardData, build_dashboard
from cricket_league.services.fixture_scheduler import generate_schedule
from cricket_league.services.match_result import apply_match_result
from cricket_league.services.standings_service import compute_standings_and_leaderboards

logger = logging.getLogger(__name__)


def create_tournament(
    session: Session,
    data: TournamentCreate,
    created_by: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> Tournament:
    """
    Persist a tournament and its generated schedule (league + playoff placeholders).

    Raises:
        TournamentValidationError: fewer than 2 distinct players
    """
    if len(data.players) < 2:
        raise TournamentValidationError("At least 2 distinct players are required.")

    tournament = Tournament(
        name=data.name,
        description=data.description,
        players=",".join(data.players),
        qualifier_count=data.qualifier_count,
        created_by=created_by,
    )
    session.add(tournament)
    session.commit()
    session.refresh(tournament)

    matches = generate_schedule(data.players, data.qualifier_count, rng=rng)
    for match in matches:
        match.tournament_id = tournament.id
        session.add(match)
    session.commit()
    session.refresh(tournament)

    logger.info(
        "Created tournament %s '%s': %d players, %d matches, %d qualifiers",
        tournament.id,
        tournament.name,
        len(data.players),
        len(matches),
        data.qualifier_count,
    )
    return tournament


def get_tournament(session: Session, tournament_id: int) -> Tournament:
    tournament = session.get(Tournament, tournament_id)
    if not tournament:
        raise NotFoundError(f"Tournament with ID {tournament_id} not found.")
    return tournament


def list_tournaments(session: Session) -> List[Tournament]:
    """Active tournaments, newest first"""
    return list(
        session.exec(
            select(Tournament).where(Tournament.is_active == True).order_by(Tournament.id.desc())  # noqa: E712
        ).all()
    )


def update_match(session: Session, match_id: int, update: MatchResultUpdate) -> Match:
    """
    Record a scorecard for a match, then advance the playoff bracket when
    the league is complete or a playoff match gained a winner.

    Raises:
        NotFoundError: match or its tournament does not exist
        TournamentValidationError: winner is not one of the match's participants
    """
    match = session.get(Match, match_id)
    if not match:
        raise NotFoundError(f"Match with ID {match_id} not found.")

    apply_match_result(match, update)
    session.add(match)
    session.commit()

    tournament = session.get(Tournament, match.tournament_id)
    if not tournament:
        raise NotFoundError(f"Tournament with ID {match.tournament_id} not found.")

    if should_advance(tournament, match):
        standings, _, _ = compute_standings_and_leaderboards(
            tournament.matches, tournament.player_list, tournament.qualifier_count
        )
        changed = advance_bracket(tournament, standings, match)
        for downstream in changed:
            session.add(downstream)
        session.add(tournament)
        session.commit()
        logger.info(
            "Match %s update advanced %d playoff matches (tournament %s status %s)",
            match_id,
            len(changed),
            tournament.id,
            tournament.status,
        )

    session.refresh(match)
    return match


def _latest_tournament(session: Session) -> Optional[Tournament]:
    in_progress = session.exec(
        select(Tournament)
        .where(Tournament.status == TournamentStatus.in_progress.value, Tournament.is_active == True)  # noqa: E712
        .order_by(Tournament.id.desc())
    ).first()
    if in_progress:
        return in_progress
    return session.exec(
        select(Tournament).where(Tournament.is_active == True).order_by(Tournament.id.desc())  # noqa: E712
    ).first()


def get_dashboard(
    session: Session,
    tournament_id: Optional[int] = None,
    rng: Optional[random.Random] = None,
    trials: Optional[int] = None,
) -> DashboardData:
    """
    Dashboard for *tournament_id*, or else the newest active in-progress
    tournament, or else the newest active tournament.

    Raises:
        NotFoundError: no matching tournament
    """
    if tournament_id is not None:
        tournament = get_tournament(session, tournament_id)
    else:
        tournament = _latest_tournament(session)
        if tournament is None:
            raise NotFoundError("Tournament not found")

    return build_dashboard(tournament, rng=rng, trials=trials)

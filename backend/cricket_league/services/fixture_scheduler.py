"""
Fixture Scheduler - round-robin league pairings plus playoff placeholders.

Every unordered pair of players meets exactly once. For more than four
players the order is searched so that no player appears in two consecutive
matches (randomized backtracking, bounded by steps and wall-clock time).
The constraint is best-effort: an exhausted search falls back to a plain
shuffle and never raises.
"""

import logging
import random
import time
from typing import List, Optional, Sequence, Tuple, Union

from cricket_league import config
from cricket_league.errors import TournamentValidationError
from cricket_league.models.match import Match, MatchStage
from cricket_league.services.bracket_rules import build_playoff_matches

logger = logging.getLogger(__name__)

Pairing = Tuple[str, str]

# At or below this many players the adjacency constraint is not searched for
SMALL_FIELD_MAX_PLAYERS = 4

_DEADLINE_CHECK_INTERVAL = 1024


def normalize_players(raw: Union[str, Sequence[str], None]) -> List[str]:
    """
    Parse a comma-joined string (or list) of player identifiers.

    Trims, lowercases, drops blanks and de-duplicates keeping the first occurrence.

    Raises:
        ValueError: *raw* is neither a string nor a list/tuple of strings
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        items = raw.split(",")
    elif isinstance(raw, (list, tuple)):
        items = list(raw)
    else:
        raise ValueError(f"players must be a comma-separated string or a list, got {type(raw).__name__}")

    if not all(isinstance(item, str) for item in items):
        raise ValueError("player identifiers must be strings")

    players: List[str] = []
    seen = set()
    for item in items:
        name = item.strip().lower()
        if name and name not in seen:
            seen.add(name)
            players.append(name)
    return players


def all_pairings(players: Sequence[str]) -> List[Pairing]:
    """Every unordered pair once, in input order: (p0,p1), (p0,p2), ..., (p1,p2), ..."""
    pairings: List[Pairing] = []
    for i in range(len(players)):
        for j in range(i + 1, len(players)):
            pairings.append((players[i], players[j]))
    return pairings


def shares_player(a: Pairing, b: Pairing) -> bool:
    return a[0] in b or a[1] in b


def count_adjacent_conflicts(order: Sequence[Pairing]) -> int:
    """Number of consecutive pairings that share a player."""
    return sum(1 for prev, cur in zip(order, order[1:]) if shares_player(prev, cur))


def _search_non_adjacent_order(
    pairings: List[Pairing],
    rng: random.Random,
    max_steps: int,
    time_budget_seconds: float,
) -> Optional[List[Pairing]]:
    """
    Stack-based backtracking over a shuffled candidate order.

    cursors[d] is the next position in `candidates` to try at depth d; used[i]
    marks pairings already placed. Returns None on dead end or exhausted budget.
    """
    n = len(pairings)
    candidates = list(range(n))
    rng.shuffle(candidates)

    used = [False] * n
    placed: List[int] = []
    cursors: List[int] = [0]
    steps = 0
    deadline = time.monotonic() + time_budget_seconds if time_budget_seconds > 0 else None

    while cursors:
        if len(placed) == n:
            logger.debug("Fixture search found non-adjacent order in %d steps", steps)
            return [pairings[i] for i in placed]

        steps += 1
        if steps > max_steps:
            logger.debug("Fixture search hit step budget (%d)", max_steps)
            return None
        if deadline is not None and steps % _DEADLINE_CHECK_INTERVAL == 0 and time.monotonic() > deadline:
            logger.debug("Fixture search hit time budget after %d steps", steps)
            return None

        previous = pairings[placed[-1]] if placed else None
        extended = False
        for pos in range(cursors[-1], n):
            idx = candidates[pos]
            if used[idx]:
                continue
            if previous is not None and shares_player(previous, pairings[idx]):
                continue
            cursors[-1] = pos + 1
            used[idx] = True
            placed.append(idx)
            cursors.append(0)
            extended = True
            break

        if not extended:
            # Dead end at this depth: undo the last placement
            cursors.pop()
            if placed:
                used[placed.pop()] = False

    return None


def generate_league_pairings(
    players: Sequence[str],
    rng: Optional[random.Random] = None,
    max_steps: Optional[int] = None,
    time_budget_seconds: Optional[float] = None,
) -> List[Pairing]:
    """
    Order the complete round robin for *players*.

    Returns N*(N-1)/2 pairings. Never raises; with more than four players
    consecutive pairings share no player whenever the bounded search succeeds.
    """
    rng = rng or random.Random()
    max_steps = config.SCHEDULER_MAX_STEPS if max_steps is None else max_steps
    if time_budget_seconds is None:
        time_budget_seconds = config.SCHEDULER_TIME_BUDGET_SECONDS

    pairings = all_pairings(players)

    if len(players) <= SMALL_FIELD_MAX_PLAYERS:
        rng.shuffle(pairings)
        return pairings

    ordered = _search_non_adjacent_order(pairings, rng, max_steps, time_budget_seconds)
    if ordered:
        return ordered

    logger.warning(
        "No non-adjacent fixture order found for %d players; falling back to random order",
        len(players),
    )
    rng.shuffle(pairings)
    return pairings


def generate_schedule(
    participants: Sequence[str],
    qualifier_count: int,
    rng: Optional[random.Random] = None,
) -> List[Match]:
    """
    League matches numbered 1..L followed by playoff placeholders numbered L+1...

    Raises:
        TournamentValidationError: fewer than 2 distinct participants
    """
    players = normalize_players(list(participants))
    if len(players) < 2:
        raise TournamentValidationError("At least 2 distinct players are required.")

    matches: List[Match] = []
    match_number = 1
    for player1, player2 in generate_league_pairings(players, rng=rng):
        matches.append(
            Match(
                match_number=match_number,
                match_type=MatchStage.league.value,
                player1_id=player1,
                player2_id=player2,
            )
        )
        match_number += 1

    matches.extend(build_playoff_matches(qualifier_count, match_number))
    return matches

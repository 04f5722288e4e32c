"""
Bracket Rules - playoff shapes per qualifier count (Single Source of Truth)

This module defines the playoff stage layouts, league-completion seeding and
winner/loser advancement topology. The advancement service and the schedule
generator import from here. Do NOT duplicate these tables elsewhere.
"""

from typing import Dict, List, Optional, Tuple

from cricket_league.models.match import TBD, Match, MatchStage

ROLE_WINNER = "WINNER"
ROLE_LOSER = "LOSER"

SLOT_1 = 1
SLOT_2 = 2

# =============================================================================
# Stage layouts
# =============================================================================

# Playoff stages in schedule order, keyed by qualifier count.
# Any other qualifier count is a league-only tournament.
PLAYOFF_LAYOUTS: Dict[int, Tuple[MatchStage, ...]] = {
    2: (MatchStage.final,),
    3: (MatchStage.qualifier_1, MatchStage.eliminator, MatchStage.final),
    4: (MatchStage.qualifier_1, MatchStage.eliminator, MatchStage.qualifier_2, MatchStage.final),
}


# =============================================================================
# League-completion seeding
# =============================================================================

# stage -> (rank for slot 1, rank for slot 2); None leaves the slot as TBD.
# Stages of the layout not listed here are reset to TBD v TBD.
SEEDING: Dict[int, Dict[MatchStage, Tuple[Optional[int], Optional[int]]]] = {
    2: {MatchStage.final: (1, 2)},
    3: {
        MatchStage.qualifier_1: (1, 2),
        MatchStage.eliminator: (3, None),
    },
    4: {
        MatchStage.qualifier_1: (1, 2),
        MatchStage.eliminator: (3, 4),
    },
}


# =============================================================================
# Advancement topology
# =============================================================================

# resolved stage -> [(role, downstream stage, downstream slot)]
ADVANCEMENT: Dict[int, Dict[MatchStage, List[Tuple[str, MatchStage, int]]]] = {
    2: {},
    3: {
        MatchStage.qualifier_1: [
            (ROLE_LOSER, MatchStage.eliminator, SLOT_2),
            (ROLE_WINNER, MatchStage.final, SLOT_1),
        ],
        MatchStage.eliminator: [
            (ROLE_WINNER, MatchStage.final, SLOT_2),
        ],
    },
    4: {
        MatchStage.qualifier_1: [
            (ROLE_LOSER, MatchStage.qualifier_2, SLOT_1),
            (ROLE_WINNER, MatchStage.final, SLOT_1),
        ],
        MatchStage.eliminator: [
            (ROLE_WINNER, MatchStage.qualifier_2, SLOT_2),
        ],
        MatchStage.qualifier_2: [
            (ROLE_WINNER, MatchStage.final, SLOT_2),
        ],
    },
}


def playoff_stages(qualifier_count: int) -> Tuple[MatchStage, ...]:
    """Return playoff stages for a qualifier count (empty for league-only)."""
    return PLAYOFF_LAYOUTS.get(qualifier_count, ())


def build_playoff_matches(qualifier_count: int, first_match_number: int) -> List[Match]:
    """
    Build TBD-v-TBD playoff placeholders numbered from *first_match_number*.

    Example:
        4 qualifiers after 10 league matches ->
        #11 Qualifier 1, #12 Eliminator, #13 Qualifier 2, #14 Final
    """
    matches: List[Match] = []
    match_number = first_match_number
    for stage in playoff_stages(qualifier_count):
        matches.append(
            Match(
                match_number=match_number,
                match_type=stage.value,
                player1_id=TBD,
                player2_id=TBD,
            )
        )
        match_number += 1
    return matches

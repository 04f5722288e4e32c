from cricket_league.models.match import TBD, Match, MatchStage, TossChoice
from cricket_league.models.tournament import Tournament, TournamentStatus

__all__ = [
    "TBD",
    "Match",
    "MatchStage",
    "TossChoice",
    "Tournament",
    "TournamentStatus",
]

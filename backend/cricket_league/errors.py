class TournamentError(Exception):
    """Base exception for tournament engine errors"""

    pass


class TournamentValidationError(TournamentError):
    """Input rejected before scheduling (e.g. fewer than 2 distinct players)"""

    pass


class NotFoundError(TournamentError):
    """Referenced tournament or match does not exist"""

    pass

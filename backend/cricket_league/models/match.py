from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from cricket_league.models.tournament import Tournament

# Placeholder for a playoff slot whose participant is not known yet
TBD = "TBD"


class MatchStage(str, Enum):
    league = "League"
    qualifier_1 = "Qualifier 1"
    eliminator = "Eliminator"
    qualifier_2 = "Qualifier 2"
    final = "Final"


class TossChoice(str, Enum):
    bat = "bat"
    field = "field"


class Match(SQLModel, table=True):
    __table_args__ = (SAUniqueConstraint("tournament_id", "match_number", name="uq_tournament_match_number"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    tournament_id: Optional[int] = Field(default=None, foreign_key="tournament.id", index=True)
    match_number: int  # 1-based schedule order
    match_type: str = Field(default=MatchStage.league.value)  # MatchStage value
    description: Optional[str] = Field(default=None, max_length=1000)

    player1_id: str = Field(default=TBD, max_length=500)
    player2_id: str = Field(default=TBD, max_length=500)

    # Per side: runs scored, balls faced, wickets fallen in that side's innings
    player1_score: int = Field(default=0)
    player2_score: int = Field(default=0)
    player1_balls: int = Field(default=0)
    player2_balls: int = Field(default=0)
    player1_wickets: int = Field(default=0)
    player2_wickets: int = Field(default=0)

    winner_id: Optional[str] = Field(default=None, max_length=500)
    toss_winner_id: Optional[str] = Field(default=None, max_length=500)
    toss_choice: Optional[str] = Field(default=None, max_length=10)  # "bat" | "field"

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = Field(default=None)

    # Relationships
    tournament: Optional["Tournament"] = Relationship(back_populates="matches")

    @property
    def stage(self) -> MatchStage:
        return MatchStage(self.match_type)

    @property
    def is_league(self) -> bool:
        return self.stage is MatchStage.league

    @property
    def is_resolved(self) -> bool:
        return bool(self.winner_id)

    def involves(self, player: str) -> bool:
        return self.player1_id == player or self.player2_id == player

    def side_of(self, player: str) -> int:
        """1 if player batted as player1, else 2."""
        return 1 if self.player1_id == player else 2

    def opponent_of(self, player: str) -> str:
        return self.player2_id if self.player1_id == player else self.player1_id

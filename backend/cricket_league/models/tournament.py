from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from cricket_league.models.match import Match


class TournamentStatus(str, Enum):
    in_progress = "InProgress"
    completed = "Completed"


class Tournament(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    status: str = Field(default=TournamentStatus.in_progress.value, max_length=20)
    players: str = Field(default="", max_length=1000)  # comma-joined, normalized lowercase
    qualifier_count: int = Field(default=0)  # 2, 3 or 4 shape the playoffs; anything else is league-only
    is_active: bool = Field(default=True)
    created_by: Optional[str] = Field(default=None, max_length=50)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = Field(default=None)

    # Relationships
    matches: List["Match"] = Relationship(
        back_populates="tournament",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "Match.match_number"},
    )

    @property
    def player_list(self) -> List[str]:
        return [p.strip() for p in self.players.split(",") if p.strip()]

    @property
    def is_completed(self) -> bool:
        return self.status == TournamentStatus.completed.value

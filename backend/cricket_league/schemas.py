from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from cricket_league.models.match import TossChoice
from cricket_league.services.fixture_scheduler import normalize_players


class TournamentCreate(BaseModel):
    name: str
    description: Optional[str] = None
    players: List[str]
    qualifier_count: int = Field(default=0, ge=0)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("name is required")
        return v.strip()

    @field_validator("players", mode="before")
    @classmethod
    def normalize(cls, v: Union[str, List[str], None]):
        """Accept 'Alpha, beta,ALPHA' or a list; trimmed, lowercased, de-duplicated."""
        return normalize_players(v)


class MatchResultUpdate(BaseModel):
    player1_score: int = Field(default=0, ge=0)
    player2_score: int = Field(default=0, ge=0)
    player1_balls: int = Field(default=0, ge=0)
    player2_balls: int = Field(default=0, ge=0)
    player1_wickets: int = Field(default=0, ge=0, le=10)
    player2_wickets: int = Field(default=0, ge=0, le=10)
    winner_id: Optional[str] = None
    toss_winner_id: Optional[str] = None
    toss_choice: Optional[TossChoice] = None
    description: Optional[str] = None

    @field_validator("toss_choice", mode="before")
    @classmethod
    def lower_toss_choice(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v

# nfl_lab/models/team.py
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class Team(BaseModel):
    """A team record as delivered by the teams collection."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(..., min_length=1, description="Short team code, e.g. PHI.")
    name: Optional[str] = None
    wins: int = Field(0, ge=0)
    losses: int = Field(0, ge=0)
    # Index 0 is this week's opponent
    remaining_opponents: Tuple[str, ...] = Field(
        default=(), alias="remainingOpponents"
    )

    @field_validator("wins", "losses", mode="before")
    @classmethod
    def _missing_count_is_zero(cls, value):
        return 0 if value is None else value

    @field_validator("remaining_opponents", mode="before")
    @classmethod
    def _missing_schedule_is_empty(cls, value):
        return () if value is None else value

    @computed_field  # type: ignore[misc]
    @property
    def display_name(self) -> str:
        return self.name or self.id

    @property
    def record(self) -> str:
        return f"{self.wins}-{self.losses}"

    @property
    def next_opponent(self) -> Optional[str]:
        return self.remaining_opponents[0] if self.remaining_opponents else None

    @classmethod
    def placeholder(cls, team_id: str) -> "Team":
        """Stand-in for an opponent missing from the snapshot (bye week, data gap).

        Built without validation: the opponent id comes from another team's
        schedule and may be any string, including an empty bye marker.
        """
        return cls.model_construct(
            id=team_id, name=team_id, wins=0, losses=0, remaining_opponents=()
        )

from collections import Counter
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .analytics import AnalyticRecord
from .team import Team


class SnapshotError(Exception):
    """Raised when a delivered record set cannot form a consistent snapshot."""

    pass


class DuplicateTeamError(SnapshotError):
    """Raised when the same team id appears more than once in one snapshot."""

    def __init__(self, team_ids: List[str]):
        self.team_ids = team_ids
        super().__init__(f"Duplicate team ids in snapshot: {', '.join(team_ids)}")


def validate_unique_ids(teams: Iterable[Team]) -> None:
    counts = Counter(team.id for team in teams)
    duplicates = sorted(team_id for team_id, count in counts.items() if count > 1)
    if duplicates:
        raise DuplicateTeamError(duplicates)


class LeagueSnapshot(BaseModel):
    """A consistent pair of team records and analytic grades."""

    model_config = ConfigDict(frozen=True)

    teams: Tuple[Team, ...] = ()
    analytics: Dict[str, AnalyticRecord] = Field(default_factory=dict)
    taken_at_utc: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # DuplicateTeamError is not a ValueError, so pydantic lets it propagate as-is
    @field_validator("teams")
    @classmethod
    def _unique_team_ids(cls, teams: Tuple[Team, ...]) -> Tuple[Team, ...]:
        validate_unique_ids(teams)
        return teams

from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from nfl_lab.analysis.probability import win_probability
from nfl_lab.utils.misc_utils import matchup_key, matchup_label

from .enums import GradeCategory
from .team import Team


class Matchup(BaseModel):
    """This week's game between two teams. The first team seen is home."""

    model_config = ConfigDict(frozen=True)

    home: Team
    away: Team

    @property
    def key(self) -> Tuple[str, ...]:
        return matchup_key(self.home.id, self.away.id)

    @property
    def label(self) -> str:
        return matchup_label(self.home.id, self.away.id)

    @property
    def team_ids(self) -> frozenset[str]:
        return frozenset((self.home.id, self.away.id))


class ScheduleEntry(BaseModel):
    """One remaining game, with the opponent's record at snapshot time."""

    model_config = ConfigDict(frozen=True)

    week: int
    opponent_id: str
    opponent_wins: int = 0
    opponent_losses: int = 0

    @property
    def opponent_record(self) -> str:
        return f"{self.opponent_wins}-{self.opponent_losses}"


class EnrichedTeam(Team):
    """A team merged with its remaining schedule and analytic grades."""

    sos: float = Field(0.5, ge=0, le=1)
    schedule: Tuple[ScheduleEntry, ...] = ()
    grades: Dict[str, float] = Field(default_factory=dict)

    def grade(self, category: GradeCategory) -> Optional[float]:
        return self.grades.get(category.value)

    def win_probability(self, entry: ScheduleEntry) -> float:
        return win_probability(self.wins, entry.opponent_wins)

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class AnalyticRecord(BaseModel):
    """Computed grades for one team, written by the offline analytics job."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    team_id: str
    grades: Dict[str, float] = Field(default_factory=dict)

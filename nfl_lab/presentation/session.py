from typing import Optional

from pydantic import BaseModel, ConfigDict

from nfl_lab.models.enums import View


class SessionState(BaseModel):
    """Navigation state owned by the caller and passed into rendering."""

    model_config = ConfigDict(frozen=True)

    view: View = View.HOME
    selected_team_id: Optional[str] = None

    def go_home(self) -> "SessionState":
        return self.model_copy(update={"view": View.HOME})

    def go_teams(self) -> "SessionState":
        return self.model_copy(update={"view": View.TEAMS})

    def open_team(self, team_id: str) -> "SessionState":
        return SessionState(view=View.DETAIL, selected_team_id=team_id)

from typing import Optional, Sequence

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from nfl_lab.analysis.schedule_analyzer import ScheduleAnalyzer
from nfl_lab.models.enums import GradeCategory, View
from nfl_lab.models.schedule import EnrichedTeam, Matchup
from nfl_lab.models.team import Team
from nfl_lab.presentation.session import SessionState
from nfl_lab.sync.league_sync import LeagueState

# Above this, the remaining schedule is shown as difficult
HARD_SCHEDULE_SOS = 0.55


def render_loading() -> RenderableType:
    return Panel(Text("Connecting to Live Data...", style="bold"), border_style="blue")


def render_home(
    matchups: Sequence[Matchup], team_count: int, base_week: int
) -> RenderableType:
    header = Panel(
        Text(
            f"Live analysis of the {len(matchups)} matchups kicking off this week.",
        ),
        title=f"Week {base_week} Command Center",
        border_style="blue",
    )

    if not matchups:
        message = (
            "Loading teams..."
            if team_count == 0
            else "No upcoming matchups found in database."
        )
        return Group(header, Panel(Text(message, style="dim")))

    table = Table(title="Current Slate", expand=True)
    table.add_column("Week", justify="center")
    table.add_column("Away", justify="right")
    table.add_column("")
    table.add_column("Home")
    for matchup in matchups:
        table.add_row(
            str(base_week),
            f"{matchup.away.id} ({matchup.away.record})",
            "AT",
            f"{matchup.home.id} ({matchup.home.record})",
        )
    return Group(header, table)


def render_teams(standings: Sequence[Team]) -> RenderableType:
    """Standings table; `standings` is already ranked."""
    table = Table(title="League Standings", expand=True)
    table.add_column("#", justify="right")
    table.add_column("Team")
    table.add_column("Name")
    table.add_column("Record", justify="right")
    for rank, team in enumerate(standings, start=1):
        table.add_row(f"#{rank}", team.id, team.display_name, team.record)
    return table


def _format_grade(value: Optional[float]) -> str:
    return f"{value:.1f}" if value else "--"


def render_detail(team: Optional[EnrichedTeam]) -> RenderableType:
    if team is None:
        return Panel(Text("Team not found.", style="dim"))

    sos_style = "red" if team.sos > HARD_SCHEDULE_SOS else "green"
    summary = Table.grid(padding=(0, 4))
    summary.add_column()
    summary.add_column()
    summary.add_column()
    summary.add_row("Schedule Difficulty", "Offense Grade", "Defense Grade")
    summary.add_row(
        Text(f"{team.sos:.3f}", style=f"bold {sos_style}"),
        Text(_format_grade(team.grade(GradeCategory.OFFENSE)), style="bold"),
        Text(_format_grade(team.grade(GradeCategory.DEFENSE)), style="bold"),
    )
    header = Panel(
        summary,
        title=f"{team.display_name} ({team.record})",
        border_style="blue",
    )

    if not team.schedule:
        return Group(header, Panel(Text("No games remaining.", style="italic dim")))

    games = Table(title="Upcoming Games", expand=True)
    games.add_column("Wk", justify="center")
    games.add_column("Opponent")
    games.add_column("Opp Rec", justify="right")
    games.add_column("Win Prob", justify="right")
    for entry in team.schedule:
        games.add_row(
            str(entry.week),
            entry.opponent_id,
            entry.opponent_record,
            f"{team.win_probability(entry):.0%}",
        )
    return Group(header, games)


def render(session: SessionState, state: LeagueState, base_week: int) -> RenderableType:
    """Renders the view selected by `session` from the latest league snapshot."""
    if state.loading:
        return render_loading()

    analyzer = ScheduleAnalyzer(state.snapshot, base_week)
    if session.view == View.TEAMS:
        return render_teams(analyzer.standings())
    if session.view == View.DETAIL:
        return render_detail(analyzer.enriched_team(session.selected_team_id))
    return render_home(analyzer.weekly_matchups(), len(state.snapshot.teams), base_week)

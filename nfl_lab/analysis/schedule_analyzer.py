from typing import Dict, List, Mapping, Optional, Sequence

from loguru import logger

from nfl_lab.models.analytics import AnalyticRecord
from nfl_lab.models.schedule import EnrichedTeam, Matchup, ScheduleEntry
from nfl_lab.models.snapshot import LeagueSnapshot
from nfl_lab.models.team import Team
from nfl_lab.utils.misc_utils import matchup_key

NEUTRAL_SOS = 0.5


def find_team(team_id: Optional[str], teams: Sequence[Team]) -> Optional[Team]:
    """Returns the first team with the given id, or None."""
    for team in teams:
        if team.id == team_id:
            return team
    return None


def derive_weekly_matchups(teams: Sequence[Team]) -> List[Matchup]:
    """
    Pairs every team with the first entry of its remaining schedule.

    Each game is emitted once: the pair is keyed by its sorted team ids and
    the team seen first in `teams` becomes home. Opponents missing from the
    snapshot are replaced by a zero-record placeholder.

    Args:
        teams: The current team snapshot, in delivery order.

    Returns:
        The list of this week's matchups, in first-seen order.
    """
    by_id: Dict[str, Team] = {}
    for team in teams:
        by_id.setdefault(team.id, team)

    matchups: List[Matchup] = []
    processed = set()
    for team in teams:
        opponent_id = team.next_opponent
        if opponent_id is None:
            continue

        key = matchup_key(team.id, opponent_id)
        if key in processed:
            continue
        processed.add(key)

        opponent = by_id.get(opponent_id)
        if opponent is None:
            logger.debug(
                f"Opponent {opponent_id} of {team.id} not in snapshot, using placeholder."
            )
            opponent = Team.placeholder(opponent_id)
        matchups.append(Matchup(home=team, away=opponent))

    return matchups


def strength_of_schedule(team: Team, teams: Sequence[Team]) -> float:
    """Aggregate win ratio of the remaining opponents, 0.5 when there is no signal."""
    opponent_wins = opponent_losses = 0
    for opponent_id in team.remaining_opponents:
        opponent = find_team(opponent_id, teams)
        if opponent is None:
            continue
        opponent_wins += opponent.wins
        opponent_losses += opponent.losses

    total_games = opponent_wins + opponent_losses
    return opponent_wins / total_games if total_games > 0 else NEUTRAL_SOS


def build_schedule(
    team: Team, teams: Sequence[Team], base_week: int
) -> List[ScheduleEntry]:
    schedule = []
    for offset, opponent_id in enumerate(team.remaining_opponents):
        opponent = find_team(opponent_id, teams)
        schedule.append(
            ScheduleEntry(
                week=base_week + offset,
                opponent_id=opponent_id,
                opponent_wins=opponent.wins if opponent else 0,
                opponent_losses=opponent.losses if opponent else 0,
            )
        )
    return schedule


def derive_enriched_team(
    team_id: Optional[str],
    teams: Sequence[Team],
    analytics: Mapping[str, AnalyticRecord],
    base_week: int,
) -> Optional[EnrichedTeam]:
    """
    Merges a team's record with its remaining schedule and analytic grades.

    Args:
        team_id: Id of the team to enrich.
        teams: The current team snapshot.
        analytics: Analytic records keyed by team id. May be sparse.
        base_week: Week number of the first remaining game.

    Returns:
        The enriched team, or None if `team_id` is not in the snapshot.
    """
    team = find_team(team_id, teams)
    if team is None:
        return None

    record = analytics.get(team.id)
    return EnrichedTeam(
        id=team.id,
        name=team.name,
        wins=team.wins,
        losses=team.losses,
        remaining_opponents=team.remaining_opponents,
        sos=strength_of_schedule(team, teams),
        schedule=tuple(build_schedule(team, teams, base_week)),
        grades=dict(record.grades) if record else {},
    )


def rank_standings(teams: Sequence[Team]) -> List[Team]:
    """Teams ordered by wins, most first. Ties keep delivery order."""
    return sorted(teams, key=lambda team: team.wins, reverse=True)


class ScheduleAnalyzer:
    """Derivations over one league snapshot. Holds no state besides its inputs."""

    def __init__(self, snapshot: LeagueSnapshot, base_week: int):
        self.snapshot = snapshot
        self.base_week = base_week

    def find_team(self, team_id: Optional[str]) -> Optional[Team]:
        return find_team(team_id, self.snapshot.teams)

    def weekly_matchups(self) -> List[Matchup]:
        return derive_weekly_matchups(self.snapshot.teams)

    def enriched_team(self, team_id: Optional[str]) -> Optional[EnrichedTeam]:
        return derive_enriched_team(
            team_id, self.snapshot.teams, self.snapshot.analytics, self.base_week
        )

    def standings(self) -> List[Team]:
        return rank_standings(self.snapshot.teams)

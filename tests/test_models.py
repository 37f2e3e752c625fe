import pytest
from pydantic import ValidationError

from nfl_lab.models.analytics import AnalyticRecord
from nfl_lab.models.schedule import Matchup
from nfl_lab.models.snapshot import DuplicateTeamError, LeagueSnapshot, SnapshotError
from nfl_lab.models.team import Team


def test_team_from_wire_row():
    team = Team.model_validate(
        {"id": "PHI", "name": "Philadelphia Eagles", "wins": 9, "losses": 3,
         "remainingOpponents": ["DAL", "NYG"], "conference": "NFC"}
    )
    assert team.remaining_opponents == ("DAL", "NYG")
    assert team.next_opponent == "DAL"
    assert team.record == "9-3"


def test_team_missing_fields_default_to_empty():
    team = Team.model_validate({"id": "NYG", "wins": None, "remainingOpponents": None})
    assert team.wins == 0
    assert team.losses == 0
    assert team.remaining_opponents == ()
    assert team.next_opponent is None
    assert team.display_name == "NYG"


def test_team_rejects_negative_counts_and_empty_id():
    with pytest.raises(ValidationError):
        Team(id="PHI", wins=-1)
    with pytest.raises(ValidationError):
        Team(id="")


def test_team_is_immutable():
    team = Team(id="PHI", wins=9)
    with pytest.raises(ValidationError):
        team.wins = 10


def test_placeholder():
    ghost = Team.placeholder("BYE")
    assert (ghost.id, ghost.name, ghost.wins, ghost.losses) == ("BYE", "BYE", 0, 0)


def test_placeholder_accepts_any_opponent_id():
    ghost = Team.placeholder("")
    assert ghost.id == ""
    assert ghost.remaining_opponents == ()


def test_matchup_key_is_order_independent():
    a, b = Team(id="PHI"), Team(id="DAL")
    assert Matchup(home=a, away=b).key == Matchup(home=b, away=a).key == ("DAL", "PHI")
    assert Matchup(home=a, away=b).label == "DAL-PHI"


def test_analytic_record_ignores_unknown_fields():
    record = AnalyticRecord(team_id="PHI", grades={"offense": 88.4}, updated_by="job")
    assert record.grades == {"offense": 88.4}


def test_snapshot_rejects_duplicate_ids():
    with pytest.raises(DuplicateTeamError) as exc_info:
        LeagueSnapshot(teams=(Team(id="PHI"), Team(id="DAL"), Team(id="PHI", wins=3)))
    assert exc_info.value.team_ids == ["PHI"]
    assert isinstance(exc_info.value, SnapshotError)


def test_empty_snapshot():
    snapshot = LeagueSnapshot()
    assert snapshot.teams == ()
    assert snapshot.analytics == {}
    assert snapshot.taken_at_utc.tzinfo is not None

import asyncio
from typing import Any, Dict, List, Tuple, Union

import pytest

from nfl_lab.models.analytics import AnalyticRecord
from nfl_lab.models.team import Team


class FakeResponse:
    def __init__(self, data: List[Dict[str, Any]]):
        self.data = data


class FakeQuery:
    def __init__(self, client: "FakeSupabaseClient", table_name: str):
        self.client = client
        self.table_name = table_name

    def select(self, *columns: str) -> "FakeQuery":
        return self

    async def execute(self) -> FakeResponse:
        self.client.events.append(("start", self.table_name))
        await asyncio.sleep(0)
        self.client.events.append(("end", self.table_name))

        queued = self.client.failures.get(self.table_name)
        if queued:
            raise queued.pop(0)
        result = self.client.tables[self.table_name]
        if isinstance(result, Exception):
            raise result
        return FakeResponse(result)


class FakeSupabaseClient:
    """Stands in for supabase.AsyncClient: table(name).select(...).execute()."""

    def __init__(self, tables: Dict[str, Union[List[Dict[str, Any]], Exception]]):
        self.tables = dict(tables)
        self.reads: List[str] = []
        self.events: List[Tuple[str, str]] = []
        # Exceptions raised, in order, before a table starts returning rows
        self.failures: Dict[str, List[Exception]] = {}

    def table(self, table_name: str) -> FakeQuery:
        self.reads.append(table_name)
        return FakeQuery(self, table_name)


@pytest.fixture
def team_rows() -> List[Dict[str, Any]]:
    return [
        {"id": "PHI", "name": "Philadelphia Eagles", "wins": 9, "losses": 3,
         "remainingOpponents": ["DAL", "NYG", "WAS"]},
        {"id": "DAL", "name": "Dallas Cowboys", "wins": 6, "losses": 6,
         "remainingOpponents": ["PHI", "WAS"]},
        {"id": "NYG", "name": "New York Giants", "wins": 2, "losses": 10,
         "remainingOpponents": ["WAS", "PHI"]},
        {"id": "WAS", "name": "Washington Commanders", "wins": 4, "losses": 8,
         "remainingOpponents": ["NYG", "DAL"]},
    ]


@pytest.fixture
def analytics_rows() -> List[Dict[str, Any]]:
    return [
        {"team_id": "PHI", "grades": {"offense": 88.4, "defense": 79.0}},
        {"id": "DAL", "grades": {"offense": 71.2}},
    ]


@pytest.fixture
def teams(team_rows) -> List[Team]:
    return [Team.model_validate(row) for row in team_rows]


@pytest.fixture
def analytics() -> Dict[str, AnalyticRecord]:
    return {
        "PHI": AnalyticRecord(team_id="PHI", grades={"offense": 88.4, "defense": 79.0}),
    }


@pytest.fixture
def fake_client(team_rows, analytics_rows) -> FakeSupabaseClient:
    return FakeSupabaseClient({"teams": team_rows, "analytics": analytics_rows})

import asyncio
from typing import Callable, Dict, List, Optional, Tuple

from loguru import logger
from supabase import AsyncClient

from nfl_lab.config.settings import settings
from nfl_lab.models.analytics import AnalyticRecord
from nfl_lab.models.snapshot import DuplicateTeamError, LeagueSnapshot, validate_unique_ids
from nfl_lab.models.team import Team
from nfl_lab.storage.supabase_client import fetch_analytics, fetch_teams
from nfl_lab.sync.feed import SnapshotFeed

TeamsSnapshot = Tuple[Team, ...]
AnalyticsSnapshot = Dict[str, AnalyticRecord]


class LeagueSync:
    """Polls the league tables and publishes each collection when it changes."""

    def __init__(
        self,
        client: AsyncClient,
        teams_table: Optional[str] = None,
        analytics_table: Optional[str] = None,
        poll_interval_seconds: Optional[float] = None,
    ):
        self.client = client
        self.teams_table = teams_table or settings.teams_table
        self.analytics_table = analytics_table or settings.analytics_table
        self.poll_interval_seconds = (
            poll_interval_seconds or settings.poll_interval_seconds
        )
        self.teams_feed: SnapshotFeed[TeamsSnapshot] = SnapshotFeed("teams")
        self.analytics_feed: SnapshotFeed[AnalyticsSnapshot] = SnapshotFeed(
            "analytics"
        )

    async def refresh(self) -> bool:
        """Reads both collections once. Returns True if anything was published."""
        # fetch_* log and return None on failure, so gather never raises here
        teams, analytics = await asyncio.gather(
            fetch_teams(self.client, self.teams_table),
            fetch_analytics(self.client, self.analytics_table),
        )
        teams_changed = self._apply_teams(teams)
        analytics_changed = self._apply_analytics(analytics)
        return teams_changed or analytics_changed

    def _apply_teams(self, teams: Optional[List[Team]]) -> bool:
        if teams is None:
            logger.error("Teams sync error, keeping the previous snapshot.")
            return False

        try:
            validate_unique_ids(teams)
        except DuplicateTeamError as e:
            logger.error(f"Rejected teams snapshot: {e}")
            return False

        snapshot = tuple(teams)
        if snapshot == self.teams_feed.latest:
            return False
        logger.info(f"Publishing teams snapshot with {len(snapshot)} teams.")
        self.teams_feed.publish(snapshot)
        return True

    def _apply_analytics(self, analytics: Optional[AnalyticsSnapshot]) -> bool:
        if analytics is None:
            logger.error("Stats sync error, keeping the previous snapshot.")
            return False

        if analytics == self.analytics_feed.latest:
            return False
        logger.info(f"Publishing analytics snapshot for {len(analytics)} teams.")
        self.analytics_feed.publish(analytics)
        return True

    async def run(self, stop_event: asyncio.Event) -> None:
        """Refreshes every `poll_interval_seconds` until `stop_event` is set."""
        logger.info(
            f"Watching {self.teams_table} and {self.analytics_table} "
            f"every {self.poll_interval_seconds}s."
        )
        while not stop_event.is_set():
            await self.refresh()
            try:
                await asyncio.wait_for(
                    stop_event.wait(), timeout=self.poll_interval_seconds
                )
            except asyncio.TimeoutError:
                pass
        logger.info("League sync stopped.")


class LeagueState:
    """Keeps the latest LeagueSnapshot assembled from the two feeds."""

    def __init__(
        self,
        teams_feed: SnapshotFeed[TeamsSnapshot],
        analytics_feed: SnapshotFeed[AnalyticsSnapshot],
    ):
        self.snapshot = LeagueSnapshot()
        # Loading until the first teams delivery; analytics are optional
        self.loading = True
        self._unsubscribers: List[Callable[[], None]] = [
            teams_feed.subscribe(self._on_teams),
            analytics_feed.subscribe(self._on_analytics),
        ]

    def _on_teams(self, teams: TeamsSnapshot) -> None:
        self.snapshot = LeagueSnapshot(teams=teams, analytics=self.snapshot.analytics)
        self.loading = False

    def _on_analytics(self, analytics: AnalyticsSnapshot) -> None:
        self.snapshot = LeagueSnapshot(teams=self.snapshot.teams, analytics=analytics)

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

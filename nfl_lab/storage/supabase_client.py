# nfl_lab/storage/supabase_client.py
from typing import Any, Dict, Iterable, List, Optional

from loguru import logger
from postgrest import APIResponse
from postgrest.exceptions import APIError
from pydantic import ValidationError
from supabase import AsyncClient, create_async_client
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from nfl_lab.config.settings import settings
from nfl_lab.models.analytics import AnalyticRecord
from nfl_lab.models.team import Team

# Module-level storage for the async client instance
_async_supabase_client: Optional[AsyncClient] = None


async def initialize_supabase() -> Optional[AsyncClient]:
    """Initializes the global ASYNC Supabase client and returns it."""
    global _async_supabase_client
    if _async_supabase_client:
        logger.debug("Async Supabase client already initialized.")
        return _async_supabase_client

    if not settings.supabase_url or not settings.supabase_key:
        logger.critical("Supabase URL or Key not configured in settings.")
        raise SystemExit("Supabase configuration missing.")

    logger.debug(
        f"Attempting to initialize Async Supabase client with URL: {settings.supabase_url}"
    )

    try:
        client: AsyncClient = await create_async_client(
            settings.supabase_url, settings.supabase_key
        )
        _async_supabase_client = client
        logger.success("Async Supabase client initialized successfully.")
        return client
    except Exception as e:
        logger.exception(f"Failed to initialize Async Supabase client: {e}")
        return None


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=8),
    retry=retry_if_exception_type(APIError),
    reraise=True,
)
async def _select_all(client: AsyncClient, table_name: str) -> List[Dict[str, Any]]:
    response: APIResponse = await client.table(table_name).select("*").execute()
    return response.data or []


async def _read_table(
    client: Optional[AsyncClient], table_name: str
) -> Optional[List[Dict[str, Any]]]:
    """Reads every row of a table. Returns None if the read fails."""
    if not client:
        logger.error(f"Supabase client not provided to read {table_name}.")
        return None

    try:
        rows = await _select_all(client, table_name)
        logger.debug(f"Read {len(rows)} rows from {table_name}.")
        return rows
    except APIError as e:
        logger.error(f"Supabase API error reading {table_name}: {e.message}")
        logger.debug(f"Full APIError details: {e}")
        return None
    except Exception as e:
        logger.error(f"An unexpected error occurred reading {table_name}: {e}")
        logger.exception("Traceback:")
        return None


def parse_team_rows(rows: Iterable[Dict[str, Any]]) -> List[Team]:
    """Builds Team records from raw rows, skipping rows that fail validation."""
    teams = []
    for row in rows:
        try:
            teams.append(Team.model_validate(row))
        except ValidationError as e:
            logger.warning(f"Skipping malformed team row {row.get('id')!r}: {e}")
    return teams


def parse_analytics_rows(rows: Iterable[Dict[str, Any]]) -> Dict[str, AnalyticRecord]:
    """Builds the team id -> AnalyticRecord map from raw rows.

    The analytics job keys its documents by team id, so the id may arrive
    as either `team_id` or `id`.
    """
    analytics: Dict[str, AnalyticRecord] = {}
    for row in rows:
        team_id = row.get("team_id") or row.get("id")
        if not team_id:
            logger.warning(f"Skipping analytics row without a team id: {row}")
            continue
        try:
            analytics[team_id] = AnalyticRecord(
                team_id=team_id, grades=row.get("grades") or {}
            )
        except ValidationError as e:
            logger.warning(f"Skipping malformed analytics row for {team_id}: {e}")
    return analytics


async def fetch_teams(
    client: Optional[AsyncClient], table_name: Optional[str] = None
) -> Optional[List[Team]]:
    """Fetches the full team collection, or None if the read failed."""
    rows = await _read_table(client, table_name or settings.teams_table)
    if rows is None:
        return None
    return parse_team_rows(rows)


async def fetch_analytics(
    client: Optional[AsyncClient], table_name: Optional[str] = None
) -> Optional[Dict[str, AnalyticRecord]]:
    """Fetches the full analytics collection, or None if the read failed."""
    rows = await _read_table(client, table_name or settings.analytics_table)
    if rows is None:
        return None
    return parse_analytics_rows(rows)

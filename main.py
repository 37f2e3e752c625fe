import sys
import asyncio

# --- Settings/Logging ---
from nfl_lab.logging.setup import setup_logging
from nfl_lab.config.settings import settings

setup_logging()

from loguru import logger

from nfl_lab.models.enums import View
from nfl_lab.presentation.session import SessionState
from nfl_lab.presentation.views import render
from nfl_lab.storage.supabase_client import initialize_supabase
from nfl_lab.sync.league_sync import LeagueState, LeagueSync

from rich.console import Console
from rich.live import Live


def initial_session() -> SessionState:
    """Builds the starting navigation state from settings."""
    try:
        view = View(settings.view.lower())
    except ValueError:
        logger.warning(f"Unknown view '{settings.view}', falling back to home.")
        view = View.HOME

    if view == View.DETAIL:
        if not settings.focus_team:
            logger.warning("Detail view requested without FOCUS_TEAM, showing home.")
            return SessionState()
        return SessionState().open_team(settings.focus_team.upper())
    return SessionState(view=view)


async def watch(sync: LeagueSync, state: LeagueState, session: SessionState) -> None:
    """Keeps polling and re-renders the dashboard on every delivered snapshot."""
    console = Console()
    stop_event = asyncio.Event()

    with Live(
        render(session, state, settings.current_week), console=console
    ) as live:

        def redraw(_snapshot) -> None:
            live.update(render(session, state, settings.current_week))

        unsubscribers = [
            sync.teams_feed.subscribe(redraw),
            sync.analytics_feed.subscribe(redraw),
        ]
        try:
            await sync.run(stop_event)
        finally:
            stop_event.set()
            for unsubscribe in unsubscribers:
                unsubscribe()


async def main() -> None:
    """Main entry point for the application."""
    logger.info("Starting NFL Lab dashboard")

    supabase_client = await initialize_supabase()
    if not supabase_client:
        logger.critical("Failed to initialize Supabase client. Exiting.")
        return

    sync = LeagueSync(supabase_client)
    state = LeagueState(sync.teams_feed, sync.analytics_feed)
    session = initial_session()

    try:
        if settings.watch:
            await watch(sync, state, session)
            return

        await sync.refresh()
        if state.loading:
            logger.error("No team data could be loaded from Supabase.")
            return
        Console().print(render(session, state, settings.current_week))
    finally:
        state.close()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)

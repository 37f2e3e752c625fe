import asyncio

from nfl_lab.sync.league_sync import LeagueState, LeagueSync

from conftest import FakeSupabaseClient


def make_sync(client):
    return LeagueSync(client, teams_table="teams", analytics_table="analytics",
                      poll_interval_seconds=0.01)


def test_refresh_publishes_both_collections(fake_client):
    sync = make_sync(fake_client)
    state = LeagueState(sync.teams_feed, sync.analytics_feed)
    assert state.loading

    assert asyncio.run(sync.refresh()) is True

    assert not state.loading
    assert [t.id for t in state.snapshot.teams] == ["PHI", "DAL", "NYG", "WAS"]
    assert set(state.snapshot.analytics) == {"PHI", "DAL"}


def test_unchanged_collections_are_not_republished(fake_client):
    sync = make_sync(fake_client)
    deliveries = []
    sync.teams_feed.subscribe(deliveries.append)

    asyncio.run(sync.refresh())
    assert asyncio.run(sync.refresh()) is False
    assert len(deliveries) == 1

    fake_client.tables["teams"][1]["wins"] = 7
    assert asyncio.run(sync.refresh()) is True
    assert len(deliveries) == 2
    assert deliveries[-1][1].wins == 7


def test_failed_fetch_keeps_previous_snapshot(fake_client):
    sync = make_sync(fake_client)
    state = LeagueState(sync.teams_feed, sync.analytics_feed)
    asyncio.run(sync.refresh())
    before = state.snapshot

    fake_client.tables["teams"] = RuntimeError("offline")
    fake_client.tables["analytics"] = RuntimeError("offline")

    assert asyncio.run(sync.refresh()) is False
    assert state.snapshot is before


def test_duplicate_team_ids_are_not_published(team_rows):
    client = FakeSupabaseClient(
        {"teams": team_rows + [dict(team_rows[0], wins=0)], "analytics": []}
    )
    sync = make_sync(client)
    state = LeagueState(sync.teams_feed, sync.analytics_feed)

    asyncio.run(sync.refresh())

    assert sync.teams_feed.latest is None
    assert state.loading
    assert state.snapshot.analytics == {}


def test_analytics_before_teams_keeps_loading(analytics_rows):
    client = FakeSupabaseClient({"teams": RuntimeError("offline"), "analytics": analytics_rows})
    sync = make_sync(client)
    state = LeagueState(sync.teams_feed, sync.analytics_feed)

    asyncio.run(sync.refresh())

    assert state.loading
    assert set(state.snapshot.analytics) == {"PHI", "DAL"}


def test_closed_state_stops_listening(fake_client):
    sync = make_sync(fake_client)
    state = LeagueState(sync.teams_feed, sync.analytics_feed)
    state.close()

    asyncio.run(sync.refresh())

    assert state.loading
    assert len(sync.teams_feed) == 0


def test_run_polls_until_stopped(fake_client):
    sync = make_sync(fake_client)

    async def scenario():
        stop_event = asyncio.Event()
        task = asyncio.create_task(sync.run(stop_event))
        await asyncio.sleep(0.05)
        stop_event.set()
        await asyncio.wait_for(task, timeout=1)

    asyncio.run(scenario())

    assert fake_client.reads.count("teams") >= 2
    assert sync.teams_feed.latest is not None


def test_refresh_reads_both_tables_concurrently(fake_client):
    asyncio.run(make_sync(fake_client).refresh())

    assert [event for event, _ in fake_client.events[:2]] == ["start", "start"]
    assert {table for _, table in fake_client.events} == {"teams", "analytics"}

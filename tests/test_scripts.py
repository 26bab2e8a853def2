"""Tests for the CSV row parser, the bulk-delete client flow and the cleanup script."""

import pytest
from sqlalchemy import select

import scripts.cleanup_places as cleanup
from discovery.models import JourneyStop, Place
from scripts.bulk_delete_places import run
from scripts.seed_places import RowError, parse_row

ROW = {
    "name": "Toit Brewpub",
    "latitude": "12.9791",
    "longitude": "77.6406",
    "rating": "4.6",
    "category": "bar",
    "ideal_conditions": "rainy|Cool",
    "avoid_conditions": "snowy",
    "opening_hours": "12:00 - 23:30",
    "has_visited": "yes",
}


class TestParseRow:
    def test_valid_row(self):
        values = parse_row(ROW)
        assert values["latitude"] == 12.9791
        assert values["rating"] == 4.6
        assert values["has_visited"] is True
        assert values["weather_suitability"]["ideal_conditions"] == ["rainy", "cool"]
        assert values["weather_suitability"]["avoid_conditions"] == []
        assert values["meta"] == {"opening_hours": {"open": "12:00", "close": "23:30"}}

    def test_unlisted_name(self):
        row = {**ROW, "name": "Random Roadside Dhaba"}
        with pytest.raises(RowError):
            parse_row(row)
        assert parse_row(row, allow_unlisted=True)["name"] == "Random Roadside Dhaba"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"latitude": "13.2"},
            {"longitude": "east"},
            {"rating": "4.65"},
            {"opening_hours": "noon till late"},
            {"name": "  "},
        ],
    )
    def test_rejected_rows(self, overrides):
        with pytest.raises(RowError):
            parse_row({**ROW, **overrides})


class FakeAdminClient:
    def __init__(self, places):
        self.places = places
        self.list_params = None
        self.deleted_payload = None

    def list_places(self, params):
        self.list_params = params
        return self.places

    def bulk_delete(self, payload):
        self.deleted_payload = payload
        return {"deleted": payload["ids"][:-1], "not_found": payload["ids"][-1:]}


PLACES = [
    {"id": "a", "name": "Salt"},
    {"id": "b", "name": "Muro"},
    {"id": "c", "name": "Salt Mango Tree"},
]


class TestBulkDeleteRun:
    def test_filters_become_query_params(self):
        client = FakeAdminClient(PLACES)
        run(client, {"status": "not_visited", "category": ""}, dry_run=True)
        assert client.list_params == {"status": "not_visited"}

    def test_dry_run_selects_without_deleting(self):
        client = FakeAdminClient(PLACES)
        store = run(client, {}, match="salt", dry_run=True)
        assert store.selected == ["a", "c"]
        assert client.deleted_payload is None

    def test_delete_patches_local_state(self):
        client = FakeAdminClient(PLACES)
        store = run(client, {}, match="salt")
        assert client.deleted_payload == {"ids": ["a", "c"]}
        assert [item["id"] for item in store.items] == ["b", "c"]
        assert store.selected == ["c"]


class TestCleanupPlaces:
    async def _build(self, make_place, make_journey):
        salt = await make_place(name="Salt")
        stray = await make_place(name="Random Roadside Dhaba")
        toit = await make_place(name="Toit Brewpub")
        journey = await make_journey([salt, stray, toit], slug="with-a-stray")
        return journey, toit

    async def test_unlisted_places_go_and_stops_stay_dense(
        self, make_place, make_journey, session_factory
    ):
        journey, toit = await self._build(make_place, make_journey)

        assert await cleanup.run_cleanup(session_factory=session_factory) == 1

        async with session_factory() as session:
            names = (await session.execute(select(Place.name).order_by(Place.name))).scalars().all()
            stops = (
                await session.execute(
                    select(JourneyStop.stop_order, JourneyStop.place_id)
                    .where(JourneyStop.journey_id == journey.id)
                    .order_by(JourneyStop.stop_order)
                )
            ).all()
        assert names == ["Salt", "Toit Brewpub"]
        assert [order for order, _ in stops] == [0, 1]
        assert stops[1].place_id == toit.id

    async def test_dry_run_deletes_nothing(self, make_place, make_journey, session_factory):
        await self._build(make_place, make_journey)

        assert await cleanup.run_cleanup(dry_run=True, session_factory=session_factory) == 1

        async with session_factory() as session:
            places = (await session.execute(select(Place.id))).scalars().all()
            stops = (await session.execute(select(JourneyStop.id))).scalars().all()
        assert len(places) == 3
        assert len(stops) == 3


class FakeEngine:
    def __init__(self):
        self.disposed = False

    async def dispose(self):
        self.disposed = True


class TestCleanupRun:
    async def test_engine_disposed_after_failure(self, monkeypatch):
        fake = FakeEngine()

        async def broken_cleanup(dry_run=False):
            raise RuntimeError("database went away")

        monkeypatch.setattr(cleanup, "engine", fake)
        monkeypatch.setattr(cleanup, "run_cleanup", broken_cleanup)

        with pytest.raises(RuntimeError):
            await cleanup.run()
        assert fake.disposed is True

    async def test_engine_disposed_after_dry_run(self, monkeypatch):
        fake = FakeEngine()
        seen = {}

        async def quiet_cleanup(dry_run=False):
            seen["dry_run"] = dry_run
            return 0

        monkeypatch.setattr(cleanup, "engine", fake)
        monkeypatch.setattr(cleanup, "run_cleanup", quiet_cleanup)

        assert await cleanup.run(dry_run=True) == 0
        assert seen == {"dry_run": True}
        assert fake.disposed is True

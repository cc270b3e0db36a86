import sqlite3

import pytest

from ragequit.core.account_store import AccountStore
from ragequit.errors import AccountStoreError

pytestmark = pytest.mark.anyio


@pytest.fixture
def store(db):
    return AccountStore(db)


async def test_favorite_is_unique_per_visitor_and_game(store):
    first = await store.add_favorite("v1", 10)
    again = await store.add_favorite("v1", 10)
    await store.add_favorite("v2", 10)

    assert first == again
    assert len(await store.get_favorites("v1")) == 1
    assert len(await store.get_favorites("v2")) == 1


async def test_favorites_scoped_newest_first_and_capped(store):
    for game_id in (1, 2, 3):
        await store.add_favorite("v1", game_id)
    await store.add_favorite("v2", 99)

    favorites = await store.get_favorites("v1")
    assert [f["game_id"] for f in favorites] == [3, 2, 1]
    assert [f["game_id"] for f in await store.get_favorites("v1", limit=2)] == [3, 2]
    assert [f["game_id"] for f in await store.get_favorites("v1", game_id=2)] == [2]
    assert await store.get_favorites("v1", game_id=99) == []


async def test_remove_favorite(store):
    await store.add_favorite("v1", 5)
    await store.remove_favorite("v1", 5)
    await store.remove_favorite("v1", 5)
    assert await store.get_favorites("v1") == []


async def test_rage_events_round_trip(store):
    stored = await store.add_rage_event("v1", 4, 5, "Malenia again")
    await store.add_rage_event("v1", 2, 1, None)
    events = await store.get_rage_events("v1")

    assert stored["intensity"] == 5 and stored["note"] == "Malenia again"
    assert [(e["game_id"], e["intensity"]) for e in events] == [(2, 1), (4, 5)]
    assert await store.get_rage_events("v2") == []


async def test_intensity_out_of_range_is_refused_by_the_store(store):
    with pytest.raises(AccountStoreError):
        await store.add_rage_event("v1", 4, 6, None)


async def test_user_clips(store):
    first = await store.add_user_clip("v1", 7, "https://youtu.be/abcdefg", "Rage quit")
    second = await store.add_user_clip("v1", 7, "https://clips.example.com/2", None)
    await store.add_user_clip("v2", 7, "https://clips.example.com/3", None)
    await store.add_user_clip("v1", 8, "https://clips.example.com/4", None)

    assert second["id"] > first["id"]
    assert first["created_at"]
    mine = await store.get_user_clips(7, visitor_id="v1")
    assert [c["id"] for c in mine] == [second["id"], first["id"]]
    assert len(await store.get_user_clips(7)) == 3


async def test_sqlite_errors_become_account_store_errors(store, monkeypatch):
    def broken_connection():
        raise sqlite3.OperationalError("database is locked")

    monkeypatch.setattr(store.db, "_get_connection", broken_connection)
    with pytest.raises(AccountStoreError):
        await store.get_favorites("v1")

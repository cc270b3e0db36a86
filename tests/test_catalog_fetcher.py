import pytest

from ragequit.config import LEADERBOARD_BOARDS
from ragequit.services.brief_cache import GameBriefCache
from ragequit.services.catalog_fetcher import CatalogFetcher

pytestmark = pytest.mark.anyio


async def test_briefs_resolve_each_id_once(catalog_client, fake_catalog):
    cache = GameBriefCache(catalog_client)
    briefs = await cache.resolve([1, 2, 1, 2])
    assert briefs == {
        1: {"id": 1, "name": "Elden Ring", "slug": "elden-ring"},
        2: {"id": 2, "name": "Cuphead", "slug": "cuphead"},
    }
    assert fake_catalog.requests.count("/games/1") == 1

    await cache.resolve([1])
    assert fake_catalog.requests.count("/games/1") == 1
    assert cache.get(2)["slug"] == "cuphead"


async def test_unresolvable_ids_are_omitted(catalog_client, fake_catalog):
    fake_catalog.failures["detail:2"] = 500
    briefs = await GameBriefCache(catalog_client).resolve([1, 2, 404])
    assert list(briefs) == [1]


async def test_empty_id_set(catalog_client, fake_catalog):
    assert await GameBriefCache(catalog_client).resolve([]) == {}
    assert fake_catalog.requests == []


async def test_list_games(catalog_client, fake_catalog):
    fetcher = CatalogFetcher(catalog_client)
    assert len(await fetcher.list_games()) == 3
    fake_catalog.failures["games"] = 500
    catalog_client.clear_cache()
    assert await fetcher.list_games() == []


async def test_leaderboards_fail_independently(catalog_client, fake_catalog):
    fake_catalog.failures["leaderboard:toxicity"] = 502
    fake_catalog.failures["leaderboard:cozy"] = "object"
    boards = await CatalogFetcher(catalog_client).load_leaderboards()

    assert list(boards) == list(LEADERBOARD_BOARDS)
    assert boards["toxicity"] == []
    assert boards["cozy"] == []
    assert [g["name"] for g in boards["most-rage"]] == ["Elden Ring", "Cuphead", "Stardew Valley"]
    assert "/leaderboards/difficulty?limit=50" in fake_catalog.requests


async def test_duel_rows(catalog_client):
    duel = await CatalogFetcher(catalog_client).load_duel("1", 3)
    assert duel.left["name"] == "Elden Ring"
    assert duel.right["name"] == "Stardew Valley"
    assert [row.label for row in duel.rows] == ["RageScore", "Difficulty", "Technical", "Toxicity", "UI / Design"]
    first = duel.rows[0]
    assert (first.left_share, first.right_share) == (100, 0)


async def test_duel_with_one_side_missing(catalog_client, fake_catalog):
    fetcher = CatalogFetcher(catalog_client)
    duel = await fetcher.load_duel(1, "")
    assert duel.left is not None and duel.right is None
    assert duel.rows == []

    duel = await fetcher.load_duel(None, 999)
    assert duel.left is None and duel.right is None
    assert fake_catalog.requests.count("/games/999") == 1

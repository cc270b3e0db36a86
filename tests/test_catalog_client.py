import aiohttp
import pytest

from ragequit.errors import RemoteFailure, TransportFailure, ValidationFailure
from ragequit.sources.catalog import CatalogClient

pytestmark = pytest.mark.anyio


async def test_get_games_passes_limit(catalog_client, fake_catalog):
    games = await catalog_client.get_games(limit=2)
    assert [g["name"] for g in games] == ["Elden Ring", "Cuphead"]
    assert "/games?limit=2" in fake_catalog.requests


async def test_responses_are_cached_for_client_lifetime(catalog_client, fake_catalog):
    await catalog_client.get_game(1)
    await catalog_client.get_game(1)
    assert fake_catalog.requests.count("/games/1") == 1

    catalog_client.clear_cache()
    await catalog_client.get_game(1)
    assert fake_catalog.requests.count("/games/1") == 2


async def test_failed_responses_are_not_cached_or_retried(catalog_client, fake_catalog):
    fake_catalog.failures["reviews"] = 503
    with pytest.raises(RemoteFailure) as excinfo:
        await catalog_client.get_reviews(1)
    assert excinfo.value.status == 503
    assert fake_catalog.requests.count("/games/1/reviews?limit=15") == 1

    del fake_catalog.failures["reviews"]
    assert len(await catalog_client.get_reviews(1)) == 2


async def test_non_json_body_is_a_remote_failure(catalog_client, fake_catalog):
    fake_catalog.failures["clips"] = "garbage"
    with pytest.raises(RemoteFailure):
        await catalog_client.get_clips(1)


async def test_list_endpoint_returning_object_is_a_remote_failure(catalog_client, fake_catalog):
    fake_catalog.failures["rage-timeline"] = "object"
    with pytest.raises(RemoteFailure):
        await catalog_client.get_rage_timeline(1)


async def test_detail_without_breakdown_is_a_remote_failure(catalog_client, fake_catalog):
    fake_catalog.failures["detail"] = "object"
    with pytest.raises(RemoteFailure):
        await catalog_client.get_game(1)


async def test_unreachable_backend_is_a_transport_failure(http_session):
    client = CatalogClient(http_session, base_url="http://127.0.0.1:1", timeout=2)
    with pytest.raises(TransportFailure):
        await client.get_games()


async def test_unknown_board_rejected_before_request(catalog_client, fake_catalog):
    with pytest.raises(ValidationFailure):
        await catalog_client.get_leaderboard("speedrun")
    assert fake_catalog.requests == []


async def test_detail_without_name_is_a_remote_failure(catalog_client, fake_catalog):
    del fake_catalog.games[2]["name"]
    with pytest.raises(RemoteFailure):
        await catalog_client.get_game(2)


async def test_query_parameters_are_url_encoded(catalog_client):
    url = catalog_client._build_url("/games", {"q": "git gud & die", "limit": 5})
    assert url.endswith("/games?q=git+gud+%26+die&limit=5")

import copy
from typing import Any, Callable, Dict, List, Optional

import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from ragequit.app import RageQuitApp
from ragequit.core.database import AccountDatabase
from ragequit.models.account import VisitorSession
from ragequit.sources.catalog import CatalogClient

VISITOR = VisitorSession(visitor_id="visitor-1", email="salty@example.com")

GAMES: Dict[int, Dict[str, Any]] = {
    1: {
        "id": 1,
        "name": "Elden Ring",
        "slug": "elden-ring",
        "rage": {
            "rage_score": 82,
            "difficulty_rage": 95,
            "technical_rage": 40,
            "social_toxicity_rage": 55,
            "ui_design_rage": 30,
            "max_achievement_drop": 42.5,
            "max_drop_from": 80.0,
            "max_drop_to": 37.5,
            "max_drop_achievement": "Margit, the Fell Omen",
        },
    },
    2: {
        "id": 2,
        "name": "Cuphead",
        "slug": "cuphead",
        "rage": {
            "rage_score": 70,
            "difficulty_rage": 120,
            "technical_rage": 10,
            "social_toxicity_rage": 20,
            "ui_design_rage": 15,
            "max_achievement_drop": 12.0,
        },
    },
    3: {
        "id": 3,
        "name": "Stardew Valley",
        "slug": "stardew-valley",
        "rage": {
            "rage_score": 0,
            "difficulty_rage": 0,
            "technical_rage": 0,
            "social_toxicity_rage": 0,
            "ui_design_rage": 0,
        },
    },
}

REVIEWS = [
    {"is_positive": False, "language": "english", "review_text": "<b>Margit</b> broke   my controller", "created_at_steam": "2024-03-01T10:00:00Z"},
    {"is_positive": True, "language": None, "review_text": "Worth it", "created_at_steam": None},
]
POSTS = [
    {"title": "Stuck on Malenia", "body": "Send help", "upvotes": 120, "num_comments": 45, "created_utc": "2024-03-02T08:30:00"},
    {"title": "Rant", "body": "", "upvotes": None, "num_comments": None, "created_utc": None},
]
WORDS = [
    {"word": "malenia", "score": 9.0},
    {"word": "crash", "score": 3.0},
    {"word": "git gud", "score": 6.0},
]
TIMELINE = [
    {"date": "2024-01-01", "rage_score": 0, "positive": 10, "negative": 0, "total": 10},
    {"date": "2024-02-01", "rage_score": 50, "positive": 5, "negative": 5, "total": 10},
    {"date": "2024-03-01", "rage_score": 100, "positive": 0, "negative": 10, "total": 10},
]
CLIPS = [
    {"id": 7, "source": "youtube", "url": "https://www.youtube.com/watch?v=abcdef123", "title": "Malenia rage", "thumbnail_url": None},
    {"id": 8, "source": None, "url": "https://clips.example.com/x", "title": None},
]


class FakeCatalog:
    """
    In-process catalog backend. `failures` maps a resource name ("detail",
    "reviews", "reddit", "rage-words", "rage-timeline", "clips", "games",
    "leaderboard:<board>", or "detail:<id>") to an HTTP status or to
    "garbage" (non-JSON body) / "object" (JSON object instead of a list).
    """

    def __init__(self):
        self.games = copy.deepcopy(GAMES)
        self.failures: Dict[str, Any] = {}
        self.requests: List[str] = []

    def _failure(self, *keys: str) -> Optional[web.Response]:
        for key in keys:
            mode = self.failures.get(key)
            if mode is None:
                continue
            if mode == "garbage":
                return web.Response(text="<html>oops</html>", content_type="text/html")
            if mode == "object":
                return web.json_response({"detail": "not a list"})
            return web.json_response({"detail": "failure"}, status=mode)
        return None

    def _summaries(self) -> List[Dict[str, Any]]:
        return [
            {"id": g["id"], "name": g["name"], "slug": g["slug"], "rage_score": g["rage"]["rage_score"]}
            for g in self.games.values()
        ]

    def build_app(self) -> web.Application:
        def listing(name: str, payload: Callable[[], List[Dict[str, Any]]]):
            async def handler(request: web.Request) -> web.Response:
                failure = self._failure(name)
                if failure is not None:
                    return failure
                limit = int(request.query.get("limit", 1000))
                return web.json_response(payload()[:limit])
            return handler

        async def game_detail(request: web.Request) -> web.Response:
            game_id = int(request.match_info["game_id"])
            failure = self._failure("detail", f"detail:{game_id}")
            if failure is not None:
                return failure
            if game_id not in self.games:
                return web.json_response({"detail": "Game not found"}, status=404)
            return web.json_response(self.games[game_id])

        async def leaderboard(request: web.Request) -> web.Response:
            board = request.match_info["board"]
            failure = self._failure(f"leaderboard:{board}")
            if failure is not None:
                return failure
            rows = sorted(self._summaries(), key=lambda g: g["rage_score"], reverse=board != "cozy")
            return web.json_response(rows[: int(request.query.get("limit", 50))])

        @web.middleware
        async def recorder(request: web.Request, handler: Callable):
            self.requests.append(request.path_qs)
            return await handler(request)

        app = web.Application(middlewares=[recorder])
        app.router.add_get("/games", listing("games", self._summaries))
        app.router.add_get("/games/{game_id}", game_detail)
        app.router.add_get("/games/{game_id}/reviews", listing("reviews", lambda: REVIEWS))
        app.router.add_get("/games/{game_id}/reddit", listing("reddit", lambda: POSTS))
        app.router.add_get("/games/{game_id}/rage-words", listing("rage-words", lambda: WORDS))
        app.router.add_get("/games/{game_id}/rage-timeline", listing("rage-timeline", lambda: TIMELINE))
        app.router.add_get("/games/{game_id}/clips", listing("clips", lambda: CLIPS))
        app.router.add_get("/leaderboards/{board}", leaderboard)
        return app


class FakeIdentityProvider:
    def __init__(self, session: Optional[VisitorSession] = None):
        self.session = session
        self.listeners: List[Callable] = []

    async def get_session(self) -> Optional[VisitorSession]:
        return self.session

    def subscribe(self, callback: Callable) -> Callable[[], None]:
        self.listeners.append(callback)
        return lambda: self.listeners.remove(callback)

    def change(self, session: Optional[VisitorSession]) -> None:
        self.session = session
        for listener in list(self.listeners):
            listener(session)

    async def sign_in(self, email: str, password: str) -> VisitorSession:
        self.change(VisitorSession(visitor_id=f"id-{email}", email=email))
        return self.session

    async def sign_up(self, email: str, password: str) -> None:
        return None

    async def sign_out(self) -> None:
        self.change(None)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def fake_catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture
async def catalog_url(fake_catalog: FakeCatalog):
    server = TestServer(fake_catalog.build_app())
    await server.start_server()
    try:
        yield f"http://{server.host}:{server.port}"
    finally:
        await server.close()


@pytest.fixture
async def http_session():
    async with aiohttp.ClientSession() as session:
        yield session


@pytest.fixture
def catalog_client(http_session: aiohttp.ClientSession, catalog_url: str) -> CatalogClient:
    return CatalogClient(http_session, base_url=catalog_url)


@pytest.fixture
def db(tmp_path) -> AccountDatabase:
    return AccountDatabase(str(tmp_path / "account.db"))


@pytest.fixture
def identity() -> FakeIdentityProvider:
    return FakeIdentityProvider(VISITOR)


@pytest.fixture
async def app(http_session, db, identity, catalog_url):
    rage_app = RageQuitApp(http_session, db, provider=identity, api_url=catalog_url)
    await rage_app.start()
    yield rage_app
    rage_app.close()

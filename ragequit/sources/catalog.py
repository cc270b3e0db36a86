# ===== IMPORTS & DEPENDENCIES =====
import logging
import aiohttp
from typing import List, Any

from ragequit.core.base_client import BaseWebClient
from ragequit.models.game import (
    GameSummary, GameDetail, SteamReview, SocialPost,
    RageWord, RageTimelinePoint, CuratedClip
)
from ragequit.config import (
    API_URL, LEADERBOARD_BOARDS, GAMES_LIMIT, LEADERBOARD_LIMIT,
    REVIEWS_LIMIT, REDDIT_LIMIT, RAGE_WORDS_LIMIT
)
from ragequit.errors import RemoteFailure, ValidationFailure

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

DETAIL_REQUIRED_KEYS = ('id', 'name', 'slug', 'rage')

# ===== CORE BUSINESS LOGIC =====
class CatalogClient(BaseWebClient):
    """Read-only client for the catalog/metrics backend."""

    def __init__(self, session: aiohttp.ClientSession, base_url: str = API_URL, **kwargs):
        super().__init__(base_url=base_url, session=session, **kwargs)

    async def _fetch_list(self, path: str, **params) -> List[Any]:
        """Fetches a list endpoint. A body that is not a JSON array counts as a failed response."""
        data = await self._fetch(path, params=params or None)
        if not isinstance(data, list):
            logger.warning(f"⚠️ [{self.__class__.__name__}] Expected a list from {path}, got {type(data).__name__}.")
            raise RemoteFailure(f"{path} did not return a list")
        return data

    async def get_games(self, limit: int = GAMES_LIMIT) -> List[GameSummary]:
        return await self._fetch_list("/games", limit=limit)

    async def get_game(self, game_id: int) -> GameDetail:
        data = await self._fetch(f"/games/{game_id}")
        if not isinstance(data, dict) or any(data.get(key) is None for key in DETAIL_REQUIRED_KEYS):
            logger.warning(f"⚠️ [{self.__class__.__name__}] Game {game_id} detail is missing one of {DETAIL_REQUIRED_KEYS}.")
            raise RemoteFailure(f"/games/{game_id} returned an unexpected document")
        return data

    async def get_reviews(self, game_id: int, limit: int = REVIEWS_LIMIT) -> List[SteamReview]:
        return await self._fetch_list(f"/games/{game_id}/reviews", limit=limit)

    async def get_reddit_posts(self, game_id: int, limit: int = REDDIT_LIMIT) -> List[SocialPost]:
        return await self._fetch_list(f"/games/{game_id}/reddit", limit=limit)

    async def get_rage_words(self, game_id: int, limit: int = RAGE_WORDS_LIMIT) -> List[RageWord]:
        return await self._fetch_list(f"/games/{game_id}/rage-words", limit=limit)

    async def get_rage_timeline(self, game_id: int) -> List[RageTimelinePoint]:
        return await self._fetch_list(f"/games/{game_id}/rage-timeline")

    async def get_clips(self, game_id: int) -> List[CuratedClip]:
        return await self._fetch_list(f"/games/{game_id}/clips")

    async def get_leaderboard(self, board: str, limit: int = LEADERBOARD_LIMIT) -> List[GameSummary]:
        if board not in LEADERBOARD_BOARDS:
            raise ValidationFailure(f"Unknown leaderboard '{board}'.")
        return await self._fetch_list(f"/leaderboards/{board}", limit=limit)

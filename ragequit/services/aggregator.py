# ===== IMPORTS & DEPENDENCIES =====
import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Generic, List, Optional, TypeVar, Union

from ragequit.sources.catalog import CatalogClient
from ragequit.models.game import (
    GameDetail, SteamReview, SocialPost, RageWord, RageTimelinePoint, CuratedClip
)
from ragequit.errors import RageQuitError, MandatoryResourceMissing

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

T = TypeVar('T')


class Outcome(Enum):
    SUCCESS = "success"
    DEFAULT = "default"


# ===== TYPES & INTERFACES =====
@dataclass(frozen=True)
class SubResult(Generic[T]):
    """One optional sub-resource of a game page: the fetched value, or the empty default and why."""
    name: str
    value: T
    outcome: Outcome
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCESS


@dataclass(frozen=True)
class GameAggregate:
    detail: GameDetail
    reviews: SubResult[List[SteamReview]]
    posts: SubResult[List[SocialPost]]
    words: SubResult[List[RageWord]]
    timeline: SubResult[List[RageTimelinePoint]]
    clips: SubResult[List[CuratedClip]]

    @property
    def sub_results(self) -> List[SubResult]:
        return [self.reviews, self.posts, self.words, self.timeline, self.clips]

    @property
    def degraded(self) -> List[str]:
        return [result.name for result in self.sub_results if not result.ok]


@dataclass(frozen=True)
class NotFound:
    game_id: Any
    reason: str


# ===== CORE BUSINESS LOGIC =====
class GameAggregator:
    """
    Builds a game's rage profile from six catalog reads issued together.

    The detail read is mandatory: if it fails the whole result is NotFound and
    nothing else is used. The other five are optional and fall back to an empty
    list on failure. Successful reads are passed through as returned.
    """

    def __init__(self, client: CatalogClient):
        self.client = client

    async def _mandatory(self, game_id: int) -> Optional[GameDetail]:
        try:
            return await self.client.get_game(game_id)
        except RageQuitError as e:
            logger.error(f"❌ [{self.__class__.__name__}] Game {game_id} detail failed: {e}")
            return None

    async def _optional(self, name: str, fetch: Awaitable[List[Any]]) -> SubResult[List[Any]]:
        try:
            value = await fetch
        except RageQuitError as e:
            logger.warning(f"⚠️ [{self.__class__.__name__}] '{name}' degraded to empty: {e}")
            return SubResult(name=name, value=[], outcome=Outcome.DEFAULT, error=str(e))
        return SubResult(name=name, value=value, outcome=Outcome.SUCCESS)

    async def load(self, game_id: Any) -> Union[GameAggregate, NotFound]:
        try:
            numeric_id = int(game_id)
        except (TypeError, ValueError):
            logger.error(f"❌ [{self.__class__.__name__}] No usable game id: {game_id!r}")
            return NotFound(game_id=game_id, reason="invalid id")

        logger.info(f"🚀 [{self.__class__.__name__}] Loading rage profile for game {numeric_id}")
        detail, reviews, posts, words, timeline, clips = await asyncio.gather(
            self._mandatory(numeric_id),
            self._optional("reviews", self.client.get_reviews(numeric_id)),
            self._optional("posts", self.client.get_reddit_posts(numeric_id)),
            self._optional("words", self.client.get_rage_words(numeric_id)),
            self._optional("timeline", self.client.get_rage_timeline(numeric_id)),
            self._optional("clips", self.client.get_clips(numeric_id)),
        )

        if detail is None:
            return NotFound(game_id=game_id, reason="detail unavailable")

        aggregate = GameAggregate(
            detail=detail, reviews=reviews, posts=posts, words=words, timeline=timeline, clips=clips
        )
        if aggregate.degraded:
            logger.info(f"[{self.__class__.__name__}] Game {numeric_id} loaded without: {', '.join(aggregate.degraded)}")
        else:
            logger.info(f"✅ [{self.__class__.__name__}] Game {numeric_id} loaded with all sub-resources.")
        return aggregate

    async def require(self, game_id: Any) -> GameAggregate:
        """Like load(), but raises MandatoryResourceMissing instead of returning NotFound."""
        result = await self.load(game_id)
        if isinstance(result, NotFound):
            raise MandatoryResourceMissing(f"Game {game_id} not found ({result.reason})")
        return result

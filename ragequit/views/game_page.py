# ===== IMPORTS & DEPENDENCIES =====
import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple

from ragequit.core.lifecycle import ViewScope
from ragequit.models.account import RageEventRecord
from ragequit.models.state import FavoriteState, RageEventForm, ClipForm
from ragequit.services.aggregator import GameAggregator, GameAggregate, NotFound
from ragequit.services.brief_cache import GameBriefCache
from ragequit.services.metrics import (
    ChokePoint, WordCloudEntry, choke_point, clamp_percent, gauge_angle, timeline_bars, word_cloud
)
from ragequit.services.mutations import MutationCoordinator
from ragequit.services.reconciler import UserDataReconciler, GamePersonalData
from ragequit.utils.clip_utils import ClipItem, merge_clips
from ragequit.utils.text_utils import review_card, post_card
from ragequit.config import RAGE_BARS
from ragequit.errors import ValidationFailure

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

GAME_UNAVAILABLE = "This game could not be loaded, so nothing can be saved for it."


def _parse_game_id(raw: Any) -> Optional[int]:
    if isinstance(raw, (list, tuple)):
        raw = raw[0] if raw else None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


# ===== CORE BUSINESS LOGIC =====
class GamePageView:
    """A game's rage profile plus the signed-in visitor's favorite flag, clips and forms."""

    def __init__(self, app, raw_game_id: Any):
        self.raw_game_id = raw_game_id
        self.game_id = _parse_game_id(raw_game_id)
        self.scope = ViewScope(f"game {raw_game_id}")

        client = app.new_client()
        self.aggregator = GameAggregator(client)
        self.reconciler = UserDataReconciler(app.gate, app.store, GameBriefCache(client))
        self.mutations = MutationCoordinator(app.gate, app.store, scope=self.scope)

        self.loading = True
        self.aggregate: Optional[GameAggregate] = None
        self.not_found: Optional[NotFound] = None
        self.personal = GamePersonalData()
        self.favorite = FavoriteState(game_id=self.game_id)
        self.rage_form = RageEventForm()
        self.clip_form = ClipForm()
        self.my_rage_events: List[RageEventRecord] = []

    async def load(self) -> None:
        if self.game_id is None:
            logger.error(f"❌ [{self.__class__.__name__}] No game id in route params: {self.raw_game_id!r}")
            self.scope.commit(self._apply, NotFound(game_id=self.raw_game_id, reason="invalid id"), GamePersonalData())
            return

        result, personal = await asyncio.gather(
            self.aggregator.load(self.game_id),
            self.reconciler.load_game(self.game_id),
        )
        self.scope.commit(self._apply, result, personal)

    def _apply(self, result, personal: GamePersonalData) -> None:
        self.loading = False
        if isinstance(result, NotFound):
            self.not_found = result
            return
        self.aggregate = result
        self.personal = personal
        self.favorite.is_favorite = personal.is_favorite

    def unmount(self) -> None:
        self.scope.close()

    # --- Derived display values ---

    @property
    def gauge_angle(self) -> float:
        return gauge_angle(self.aggregate.detail['rage'].get('rage_score', 0)) if self.aggregate else 0.0

    @property
    def rage_bars(self) -> List[Tuple[str, float]]:
        if not self.aggregate:
            return []
        rage = self.aggregate.detail['rage']
        return [(label, clamp_percent(rage.get(key))) for label, key in RAGE_BARS]

    @property
    def choke_point(self) -> Optional[ChokePoint]:
        return choke_point(self.aggregate.detail['rage']) if self.aggregate else None

    @property
    def word_cloud(self) -> List[WordCloudEntry]:
        return word_cloud(self.aggregate.words.value) if self.aggregate else []

    @property
    def timeline_bars(self) -> List[float]:
        return timeline_bars(self.aggregate.timeline.value) if self.aggregate else []

    @property
    def review_cards(self) -> List[Dict[str, str]]:
        return [review_card(r) for r in self.aggregate.reviews.value] if self.aggregate else []

    @property
    def post_cards(self) -> List[Dict[str, str]]:
        return [post_card(p) for p in self.aggregate.posts.value] if self.aggregate else []

    @property
    def clips(self) -> List[ClipItem]:
        curated = self.aggregate.clips.value if self.aggregate else []
        return merge_clips(curated, self.personal.clips)

    # --- Visitor actions ---

    def _loaded_game_id(self) -> int:
        """Id of the game shown on the page. Actions need a game that actually loaded."""
        if self.game_id is None or self.aggregate is None:
            logger.warning(f"⚠️ [{self.__class__.__name__}] Refused action without a loaded game: {self.raw_game_id!r}")
            raise ValidationFailure(GAME_UNAVAILABLE)
        return self.game_id

    async def toggle_favorite(self) -> bool:
        try:
            self._loaded_game_id()
        except ValidationFailure as e:
            self.favorite.error = str(e)
            return False
        return await self.mutations.toggle_favorite(self.favorite)

    async def submit_rage(self, intensity: Any, note: str = "") -> bool:
        self.rage_form.intensity = intensity
        self.rage_form.note = note
        try:
            game_id = self._loaded_game_id()
        except ValidationFailure as e:
            self.rage_form.error = str(e)
            return False
        return await self.mutations.submit_rage_event(game_id, self.rage_form, self.my_rage_events)

    async def submit_clip(self, url: str, title: str = "") -> bool:
        self.clip_form.url = url
        self.clip_form.title = title
        try:
            game_id = self._loaded_game_id()
        except ValidationFailure as e:
            self.clip_form.error = str(e)
            return False
        return await self.mutations.submit_clip(game_id, self.clip_form, self.personal.clips)

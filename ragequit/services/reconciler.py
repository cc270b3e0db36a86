# ===== IMPORTS & DEPENDENCIES =====
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ragequit.core.account_store import AccountStore
from ragequit.core.session import SessionGate
from ragequit.services.brief_cache import GameBriefCache
from ragequit.models.account import FavoriteRecord, RageEventRecord, UserClipRecord, VisitorSession
from ragequit.models.game import GameBrief
from ragequit.utils.text_utils import game_label
from ragequit.config import HISTORY_PAGE_SIZE, USER_CLIPS_PAGE_SIZE
from ragequit.errors import AccountStoreError

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# ===== TYPES & INTERFACES =====
@dataclass(frozen=True)
class HistoryRow:
    """A personal record joined with its game's brief. Unresolved games keep a fallback label."""
    game_id: int
    name: str
    created_at: str
    slug: Optional[str] = None
    link: Optional[str] = None
    intensity: Optional[int] = None
    note: Optional[str] = None


@dataclass
class AccountHistory:
    session_missing: bool = False
    favorites: List[FavoriteRecord] = field(default_factory=list)
    rage_events: List[RageEventRecord] = field(default_factory=list)
    favorite_rows: List[HistoryRow] = field(default_factory=list)
    rage_rows: List[HistoryRow] = field(default_factory=list)
    degraded: List[str] = field(default_factory=list)


@dataclass
class GamePersonalData:
    signed_in: bool = False
    is_favorite: bool = False
    clips: List[UserClipRecord] = field(default_factory=list)
    degraded: List[str] = field(default_factory=list)


# ===== CORE BUSINESS LOGIC =====
def _join(game_id: int, created_at: str, brief: Optional[GameBrief], **extra) -> HistoryRow:
    return HistoryRow(
        game_id=game_id,
        name=game_label(game_id, brief),
        created_at=created_at,
        slug=brief['slug'] if brief else None,
        link=f"/game/{brief['id']}" if brief else None,
        **extra
    )


class UserDataReconciler:
    """
    Reads the signed-in visitor's records from the account store and joins them
    with catalog briefs for display.

    Without a session every read yields an empty result; that is gating, not an
    error. Store failures are absorbed per read and reported in `degraded`.
    """

    def __init__(self, gate: SessionGate, store: AccountStore, briefs: GameBriefCache):
        self.gate = gate
        self.store = store
        self.briefs = briefs

    async def _visitor(self) -> Optional[VisitorSession]:
        # an unresolved gate must not be mistaken for "signed out"
        await self.gate.wait_resolved()
        return self.gate.session

    async def load_history(self, limit: int = HISTORY_PAGE_SIZE) -> AccountHistory:
        visitor = await self._visitor()
        if visitor is None:
            return AccountHistory(session_missing=True)

        history = AccountHistory()
        favorites, events = await asyncio.gather(
            self.store.get_favorites(visitor.visitor_id, limit=limit),
            self.store.get_rage_events(visitor.visitor_id, limit=limit),
            return_exceptions=True
        )
        for name, result in (("favorites", favorites), ("rage_events", events)):
            if isinstance(result, AccountStoreError):
                logger.warning(f"⚠️ [{self.__class__.__name__}] Could not read {name}: {result}")
                history.degraded.append(name)
            elif isinstance(result, BaseException):
                raise result
            else:
                setattr(history, name, result)

        briefs: Dict[int, GameBrief] = await self.briefs.resolve(
            [f['game_id'] for f in history.favorites] + [e['game_id'] for e in history.rage_events]
        )
        history.favorite_rows = [
            _join(f['game_id'], f['created_at'], briefs.get(f['game_id'])) for f in history.favorites
        ]
        history.rage_rows = [
            _join(e['game_id'], e['created_at'], briefs.get(e['game_id']), intensity=e['intensity'], note=e.get('note'))
            for e in history.rage_events
        ]
        logger.info(
            f"[{self.__class__.__name__}] Loaded {len(history.favorites)} favorite(s) and "
            f"{len(history.rage_events)} rage event(s) for visitor {visitor.visitor_id}"
        )
        return history

    async def load_game(self, game_id: int, limit: int = USER_CLIPS_PAGE_SIZE) -> GamePersonalData:
        """The visitor's favorite flag and own clips for one game."""
        visitor = await self._visitor()
        if visitor is None:
            return GamePersonalData()

        data = GamePersonalData(signed_in=True)
        favorites, clips = await asyncio.gather(
            self.store.get_favorites(visitor.visitor_id, game_id=game_id, limit=1),
            self.store.get_user_clips(game_id, visitor_id=visitor.visitor_id, limit=limit),
            return_exceptions=True
        )
        if isinstance(favorites, AccountStoreError):
            logger.warning(f"⚠️ [{self.__class__.__name__}] Could not read favorite flag for game {game_id}: {favorites}")
            data.degraded.append("favorite")
        elif isinstance(favorites, BaseException):
            raise favorites
        else:
            data.is_favorite = len(favorites) > 0

        if isinstance(clips, AccountStoreError):
            logger.warning(f"⚠️ [{self.__class__.__name__}] Could not read clips for game {game_id}: {clips}")
            data.degraded.append("clips")
        elif isinstance(clips, BaseException):
            raise clips
        else:
            data.clips = clips
        return data

# ===== IMPORTS & DEPENDENCIES =====
import asyncio
import logging
from typing import List, Optional

from ragequit.core.database import AccountDatabase
from ragequit.models.account import FavoriteRecord, RageEventRecord, UserClipRecord
from ragequit.config import HISTORY_PAGE_SIZE, USER_CLIPS_PAGE_SIZE

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# ===== CORE BUSINESS LOGIC =====
class AccountStore:
    """
    Async read/write access to a visitor's personal records.

    Every call takes the visitor id explicitly; there is no ambient "current
    user". Database work runs in a worker thread so the event loop never blocks.
    Failures surface as AccountStoreError.
    """

    def __init__(self, db: AccountDatabase):
        self.db = db

    async def get_favorites(self, visitor_id: str, game_id: Optional[int] = None,
                            limit: int = HISTORY_PAGE_SIZE) -> List[FavoriteRecord]:
        return await asyncio.to_thread(self.db.get_favorites, visitor_id, game_id, limit)

    async def get_rage_events(self, visitor_id: str, limit: int = HISTORY_PAGE_SIZE) -> List[RageEventRecord]:
        return await asyncio.to_thread(self.db.get_rage_events, visitor_id, limit)

    async def get_user_clips(self, game_id: int, visitor_id: Optional[str] = None,
                             limit: int = USER_CLIPS_PAGE_SIZE) -> List[UserClipRecord]:
        return await asyncio.to_thread(self.db.get_user_clips, game_id, visitor_id, limit)

    async def add_favorite(self, visitor_id: str, game_id: int) -> FavoriteRecord:
        return await asyncio.to_thread(self.db.add_favorite, visitor_id, game_id)

    async def remove_favorite(self, visitor_id: str, game_id: int) -> None:
        await asyncio.to_thread(self.db.remove_favorite, visitor_id, game_id)

    async def add_rage_event(self, visitor_id: str, game_id: int, intensity: int,
                             note: Optional[str] = None) -> RageEventRecord:
        return await asyncio.to_thread(self.db.add_rage_event, visitor_id, game_id, intensity, note)

    async def add_user_clip(self, visitor_id: str, game_id: int, url: str,
                            title: Optional[str] = None) -> UserClipRecord:
        return await asyncio.to_thread(self.db.add_user_clip, visitor_id, game_id, url, title)

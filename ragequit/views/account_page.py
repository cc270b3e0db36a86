# ===== IMPORTS & DEPENDENCIES =====
import logging
from typing import List, Optional

from ragequit.core.lifecycle import ViewScope
from ragequit.services.brief_cache import GameBriefCache
from ragequit.services.metrics import HistoryStats, Trophy, evaluate_trophies, history_stats
from ragequit.services.reconciler import AccountHistory, UserDataReconciler

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# ===== CORE BUSINESS LOGIC =====
class AccountView:
    """The visitor's rage profile: trophies, favorites and recent rage events."""

    def __init__(self, app):
        self.scope = ViewScope("account")
        self.reconciler = UserDataReconciler(app.gate, app.store, GameBriefCache(app.new_client()))
        self.loading = True
        self.history = AccountHistory()
        self.stats: Optional[HistoryStats] = None
        self.trophies: List[Trophy] = []

    @property
    def session_missing(self) -> bool:
        return self.history.session_missing

    async def load(self) -> None:
        history = await self.reconciler.load_history()
        self.scope.commit(self._apply, history)

    def _apply(self, history: AccountHistory) -> None:
        self.history = history
        self.stats = history_stats(history.rage_events, history.favorites)
        self.trophies = evaluate_trophies(history.rage_events, history.favorites)
        self.loading = False

    def unmount(self) -> None:
        self.scope.close()

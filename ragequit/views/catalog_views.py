# ===== IMPORTS & DEPENDENCIES =====
import logging
from typing import Dict, List, Optional, Tuple

from ragequit.core.lifecycle import ViewScope
from ragequit.models.game import GameSummary
from ragequit.services.catalog_fetcher import CatalogFetcher, Duel, GameId
from ragequit.services.metrics import clamp_percent
from ragequit.config import LEADERBOARD_BOARDS, COMPARE_GAMES_LIMIT

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)


def summary_row(game: GameSummary) -> Tuple[int, str, int, float]:
    """(id, name, rounded RageScore, bar width %) for one listed game."""
    score = game.get('rage_score') or 0
    return game['id'], game['name'], round(score), clamp_percent(score)


# ===== CORE BUSINESS LOGIC =====
class HomeView:
    def __init__(self, app):
        self.scope = ViewScope("home")
        self.fetcher = CatalogFetcher(app.new_client())
        self.loading = True
        self.games: List[GameSummary] = []

    async def load(self) -> None:
        games = await self.fetcher.list_games()
        self.scope.commit(self._apply, games)

    def _apply(self, games: List[GameSummary]) -> None:
        self.games = games
        self.loading = False

    def unmount(self) -> None:
        self.scope.close()


class LeaderboardsView:
    def __init__(self, app):
        self.scope = ViewScope("leaderboards")
        self.fetcher = CatalogFetcher(app.new_client())
        self.loading = True
        self.boards: Dict[str, List[GameSummary]] = {board: [] for board in LEADERBOARD_BOARDS}

    async def load(self) -> None:
        boards = await self.fetcher.load_leaderboards()
        self.scope.commit(self._apply, boards)

    def _apply(self, boards: Dict[str, List[GameSummary]]) -> None:
        self.boards.update(boards)
        self.loading = False

    @property
    def sections(self) -> List[Tuple[str, str, List[GameSummary]]]:
        return [(title, caption, self.boards.get(board, [])) for board, (title, caption) in LEADERBOARD_BOARDS.items()]

    def unmount(self) -> None:
        self.scope.close()


class DuelView:
    """
    Two-game comparison. Only the most recent selection may update the view:
    a slower response for an earlier pick is dropped.
    """

    def __init__(self, app):
        self.scope = ViewScope("duel")
        self.fetcher = CatalogFetcher(app.new_client())
        self.games: List[GameSummary] = []
        self.left_id: GameId = None
        self.right_id: GameId = None
        self.duel = Duel()
        self._generation = 0

    async def load(self) -> None:
        games = await self.fetcher.list_games(limit=COMPARE_GAMES_LIMIT)
        self.scope.commit(setattr, self, 'games', games)

    async def select(self, left_id: GameId = None, right_id: GameId = None) -> Optional[Duel]:
        self.left_id, self.right_id = left_id, right_id
        self._generation += 1
        generation = self._generation

        duel = await self.fetcher.load_duel(left_id, right_id)
        if generation != self._generation:
            logger.debug(f"[{self.__class__.__name__}] Dropped duel for an outdated selection.")
            return None
        self.scope.commit(setattr, self, 'duel', duel)
        return duel

    def unmount(self) -> None:
        self.scope.close()

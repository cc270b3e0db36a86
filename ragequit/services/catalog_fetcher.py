# ===== IMPORTS & DEPENDENCIES =====
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from ragequit.sources.catalog import CatalogClient
from ragequit.models.game import GameSummary, GameDetail
from ragequit.services.metrics import DuelRow, duel_row
from ragequit.config import GAMES_LIMIT, LEADERBOARD_LIMIT, LEADERBOARD_BOARDS, DUEL_FIELDS
from ragequit.errors import RageQuitError

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

GameId = Union[int, str, None]

# ===== TYPES & INTERFACES =====
@dataclass
class Duel:
    left: Optional[GameDetail] = None
    right: Optional[GameDetail] = None
    rows: List[DuelRow] = field(default_factory=list)


# ===== CORE BUSINESS LOGIC =====
class CatalogFetcher:
    """Game listings for the home page, the leaderboards and the duel picker."""

    def __init__(self, client: CatalogClient):
        self.client = client

    async def list_games(self, limit: int = GAMES_LIMIT) -> List[GameSummary]:
        try:
            return await self.client.get_games(limit=limit)
        except RageQuitError as e:
            logger.error(f"❌ [{self.__class__.__name__}] Failed to load games: {e}")
            return []

    async def load_leaderboards(self, limit: int = LEADERBOARD_LIMIT) -> Dict[str, List[GameSummary]]:
        """Fetches every board at once; a failed board is an empty board."""
        boards = list(LEADERBOARD_BOARDS)
        results = await asyncio.gather(
            *(self.client.get_leaderboard(board, limit=limit) for board in boards),
            return_exceptions=True
        )

        leaderboards: Dict[str, List[GameSummary]] = {}
        for board, result in zip(boards, results):
            if isinstance(result, list):
                leaderboards[board] = result
                logger.info(f"✅ [{self.__class__.__name__}] Board '{board}' has {len(result)} games.")
            elif isinstance(result, RageQuitError):
                logger.warning(f"⚠️ [{self.__class__.__name__}] Board '{board}' unavailable: {result}")
                leaderboards[board] = []
            else:
                raise result
        return leaderboards

    async def get_detail(self, game_id: GameId) -> Optional[GameDetail]:
        if game_id is None or str(game_id).strip() == "":
            return None
        try:
            return await self.client.get_game(int(game_id))
        except ValueError:
            logger.warning(f"⚠️ [{self.__class__.__name__}] Not a game id: '{game_id}'")
            return None
        except RageQuitError as e:
            logger.warning(f"⚠️ [{self.__class__.__name__}] Failed to load game {game_id}: {e}")
            return None

    async def load_duel(self, left_id: GameId, right_id: GameId) -> Duel:
        left, right = await asyncio.gather(self.get_detail(left_id), self.get_detail(right_id))
        duel = Duel(left=left, right=right)
        if left and right:
            duel.rows = [
                duel_row(label, left['rage'].get(key, 0), right['rage'].get(key, 0))
                for label, key in DUEL_FIELDS
            ]
        return duel

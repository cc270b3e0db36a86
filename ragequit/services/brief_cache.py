# ===== IMPORTS & DEPENDENCIES =====
import asyncio
import logging
from typing import Dict, Iterable, Optional

from ragequit.sources.catalog import CatalogClient
from ragequit.models.game import GameBrief
from ragequit.errors import RageQuitError

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# ===== CORE BUSINESS LOGIC =====
class GameBriefCache:
    """
    Resolves game ids to name/slug briefs.

    Lookups are independent: an id the catalog cannot answer for is simply
    absent from the result. Resolved briefs are kept for the cache's lifetime.
    """

    def __init__(self, client: CatalogClient):
        self.client = client
        self._briefs: Dict[int, GameBrief] = {}

    def get(self, game_id: int) -> Optional[GameBrief]:
        return self._briefs.get(game_id)

    async def resolve(self, game_ids: Iterable[int]) -> Dict[int, GameBrief]:
        unique_ids = list(dict.fromkeys(game_ids))
        missing = [game_id for game_id in unique_ids if game_id not in self._briefs]

        if missing:
            logger.info(f"[{self.__class__.__name__}] Resolving {len(missing)} game brief(s).")
            results = await asyncio.gather(*(self.client.get_game(game_id) for game_id in missing), return_exceptions=True)
            for game_id, result in zip(missing, results):
                if isinstance(result, RageQuitError):
                    logger.warning(f"⚠️ [{self.__class__.__name__}] Game {game_id} left unresolved: {result}")
                    continue
                if isinstance(result, BaseException):
                    raise result
                self._briefs[game_id] = GameBrief(id=result['id'], name=result['name'], slug=result['slug'])

        return {game_id: self._briefs[game_id] for game_id in unique_ids if game_id in self._briefs}

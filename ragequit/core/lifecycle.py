# ===== IMPORTS & DEPENDENCIES =====
import logging
from typing import Callable, Any

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# ===== CORE BUSINESS LOGIC =====
class ViewScope:
    """Liveness flag for one mounted view. Updates committed after close() are dropped."""

    def __init__(self, name: str = "view"):
        self.name = name
        self._alive = True

    @property
    def alive(self) -> bool:
        return self._alive

    def close(self) -> None:
        self._alive = False

    def commit(self, update: Callable[..., Any], *args, **kwargs) -> bool:
        """Applies a state update if the view is still mounted. Returns whether it ran."""
        if not self._alive:
            logger.debug(f"[{self.__class__.__name__}] Dropped late update for unmounted {self.name}")
            return False
        update(*args, **kwargs)
        return True

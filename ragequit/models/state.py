# ===== TYPES & INTERFACES =====

from dataclasses import dataclass
from typing import Optional

from ragequit.config import DEFAULT_INTENSITY

# Local, view-owned state that mutations update optimistically.


@dataclass
class FavoriteState:
    game_id: Optional[int]
    is_favorite: bool = False
    busy: bool = False
    error: Optional[str] = None


@dataclass
class RageEventForm:
    intensity: int = DEFAULT_INTENSITY
    note: str = ""
    submitting: bool = False
    message: Optional[str] = None
    error: Optional[str] = None

    def clear(self) -> None:
        self.intensity = DEFAULT_INTENSITY
        self.note = ""


@dataclass
class ClipForm:
    url: str = ""
    title: str = ""
    submitting: bool = False
    message: Optional[str] = None
    error: Optional[str] = None

    def clear(self) -> None:
        self.url = ""
        self.title = ""

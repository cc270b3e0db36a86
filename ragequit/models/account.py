# ===== TYPES & INTERFACES =====

from dataclasses import dataclass
from typing import TypedDict, Optional


class FavoriteRecord(TypedDict):
    """At most one per (visitor, game)."""
    game_id: int
    created_at: str


class RageEventRecord(TypedDict):
    """Append-only; `intensity` is an integer between 1 and 5."""
    game_id: int
    intensity: int
    note: Optional[str]
    created_at: str


class UserClipRecord(TypedDict):
    id: int
    game_id: int
    url: str
    title: Optional[str]
    created_at: str


@dataclass(frozen=True)
class VisitorSession:
    """
    The signed-in visitor. Frozen so that a subscriber can never observe a
    half-updated session.
    """
    visitor_id: str
    email: Optional[str] = None

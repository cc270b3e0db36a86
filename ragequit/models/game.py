# ===== TYPES & INTERFACES =====

from typing import TypedDict, Optional


class GameBrief(TypedDict):
    """Display name and slug for a game id, resolved from the catalog."""
    id: int
    name: str
    slug: str


class GameSummary(TypedDict):
    """
    One row of a listing, leaderboard or duel picker.

    `rage_score` is nominally 0-100 but is not clamped by the catalog;
    anything that draws it as a width or height must clamp first.
    """
    id: int
    name: str
    slug: str
    rage_score: float


class RageBreakdown(TypedDict, total=False):
    """
    The catalog's rage breakdown for one game.

    The four `max_drop*` fields come together or not at all. A breakdown with
    only some of them is treated as having no achievement data.
    """
    rage_score: float
    difficulty_rage: float
    technical_rage: float
    social_toxicity_rage: float
    ui_design_rage: float
    max_achievement_drop: Optional[float]
    max_drop_from: Optional[float]
    max_drop_to: Optional[float]
    max_drop_achievement: Optional[str]


class GameDetail(TypedDict):
    id: int
    name: str
    slug: str
    rage: RageBreakdown


class SteamReview(TypedDict, total=False):
    is_positive: bool
    language: Optional[str]
    review_text: str
    created_at_steam: Optional[str]


class SocialPost(TypedDict, total=False):
    title: str
    body: str
    upvotes: Optional[int]
    num_comments: Optional[int]
    created_utc: Optional[str]


class RageWord(TypedDict):
    word: str
    score: float


class RageTimelinePoint(TypedDict):
    date: str
    rage_score: float
    positive: int
    negative: int
    total: int


class CuratedClip(TypedDict, total=False):
    id: int
    source: Optional[str]
    url: str
    title: Optional[str]
    thumbnail_url: Optional[str]

# ===== IMPORTS & DEPENDENCIES =====
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Iterable

from ragequit.config import TROPHIES, DUEL_MARKER_MIN_SHARE
from ragequit.models.account import FavoriteRecord, RageEventRecord
from ragequit.models.game import RageBreakdown, RageWord, RageTimelinePoint

# Every number the pages show is derived here. No I/O.

# ===== TYPES & INTERFACES =====
@dataclass(frozen=True)
class HistoryStats:
    total_events: int
    distinct_games: int
    max_intensity: int
    favorite_count: int


@dataclass(frozen=True)
class Trophy:
    key: str
    title: str
    description: str
    unlocked: bool


@dataclass(frozen=True)
class WordCloudEntry:
    word: str
    score: float
    weight: float
    size_rem: float
    opacity: float


@dataclass(frozen=True)
class ChokePoint:
    drop: float
    drop_from: float
    drop_to: float
    achievement: str


@dataclass(frozen=True)
class DuelRow:
    label: str
    left: int
    right: int
    left_share: float
    right_share: float
    show_left_marker: bool
    show_right_marker: bool


# ===== CORE BUSINESS LOGIC =====
def clamp_percent(value: Optional[float]) -> float:
    """Clamps a value to [0, 100] before it is used as a width or height percentage."""
    if value is None:
        return 0.0
    return max(0.0, min(100.0, float(value)))


def gauge_angle(rage_score: float) -> float:
    return max(0.0, min(360.0, (rage_score / 100) * 360))


def distinct_game_count(events: Iterable[RageEventRecord]) -> int:
    return len({event['game_id'] for event in events})


def max_intensity(events: Iterable[RageEventRecord]) -> int:
    return max((event['intensity'] for event in events), default=0)


def history_stats(events: Sequence[RageEventRecord], favorites: Sequence[FavoriteRecord]) -> HistoryStats:
    return HistoryStats(
        total_events=len(events),
        distinct_games=distinct_game_count(events),
        max_intensity=max_intensity(events),
        favorite_count=len(favorites),
    )


def evaluate_trophies(events: Sequence[RageEventRecord], favorites: Sequence[FavoriteRecord]) -> List[Trophy]:
    """
    Evaluates the trophy table against a visitor's history.

    Each trophy is a threshold on a count or maximum that can only grow as
    history grows, so an unlocked trophy stays unlocked.
    """
    stats = history_stats(events, favorites)
    return [
        Trophy(key=key, title=title, description=description, unlocked=getattr(stats, stat) >= threshold)
        for key, title, description, stat, threshold in TROPHIES
    ]


def normalize_word_weights(scores: Sequence[float]) -> List[float]:
    """Maps scores onto [0, 1]. When every score is equal, every weight is 0.5."""
    if not scores:
        return []
    low, high = min(scores), max(scores)
    if high == low:
        return [0.5 for _ in scores]
    return [(score - low) / (high - low) for score in scores]


def word_cloud(words: Sequence[RageWord]) -> List[WordCloudEntry]:
    weights = normalize_word_weights([w['score'] for w in words])
    return [
        WordCloudEntry(
            word=w['word'],
            score=w['score'],
            weight=weight,
            size_rem=0.8 + weight * 1.6,
            opacity=0.4 + weight * 0.6,
        )
        for w, weight in zip(words, weights)
    ]


def timeline_bars(points: Sequence[RageTimelinePoint]) -> List[float]:
    """Bar height per point as a percentage of the series maximum; all zeros stay zero."""
    if not points:
        return []
    highest = max(p['rage_score'] for p in points)
    if highest <= 0:
        return [0.0 for _ in points]
    return [clamp_percent(p['rage_score'] / highest * 100) for p in points]


def duel_shares(left: float, right: float) -> Tuple[float, float]:
    """Each side's share of the total. Both shares are 0 when both sides are 0."""
    total = (left + right) or 1
    return left / total * 100, right / total * 100


def duel_row(label: str, left: float, right: float) -> DuelRow:
    left_share, right_share = duel_shares(left, right)
    return DuelRow(
        label=label,
        left=round(left),
        right=round(right),
        left_share=left_share,
        right_share=right_share,
        show_left_marker=left_share > DUEL_MARKER_MIN_SHARE,
        show_right_marker=right_share > DUEL_MARKER_MIN_SHARE,
    )


def choke_point(rage: RageBreakdown) -> Optional[ChokePoint]:
    """
    The biggest achievement drop-off, or None when there is not enough data.

    A breakdown that carries only some of the drop fields is malformed and is
    treated the same as one that carries none.
    """
    drop = rage.get('max_achievement_drop')
    drop_from = rage.get('max_drop_from')
    drop_to = rage.get('max_drop_to')
    if not drop or drop_from is None or drop_to is None:
        return None
    return ChokePoint(
        drop=drop,
        drop_from=drop_from,
        drop_to=drop_to,
        achievement=rage.get('max_drop_achievement') or "Unknown achievement",
    )

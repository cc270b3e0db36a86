# ===== IMPORTS & DEPENDENCIES =====
import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from ragequit.models.game import CuratedClip
from ragequit.models.account import UserClipRecord

# ===== CONFIGURATION & CONSTANTS =====
YOUTUBE_ID_PATTERN = re.compile(r'(?:v=|youtu\.be/)([A-Za-z0-9_-]{6,})')
YOUTUBE_EMBED_URL = "https://www.youtube.com/embed/{video_id}"


class ClipKind(Enum):
    CURATED = "curated"
    PERSONAL = "personal"


# ===== TYPES & INTERFACES =====
@dataclass(frozen=True)
class ClipItem:
    """A clip shown on a game page, whether curated by the catalog or posted by the visitor."""
    kind: ClipKind
    id: int
    url: str
    title: Optional[str] = None
    source: Optional[str] = None
    thumbnail_url: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_curated(cls, clip: CuratedClip) -> "ClipItem":
        return cls(
            kind=ClipKind.CURATED,
            id=clip.get('id', 0),
            url=clip.get('url', ''),
            title=clip.get('title'),
            source=clip.get('source'),
            thumbnail_url=clip.get('thumbnail_url'),
        )

    @classmethod
    def from_personal(cls, clip: UserClipRecord) -> "ClipItem":
        return cls(
            kind=ClipKind.PERSONAL,
            id=clip['id'],
            url=clip['url'],
            title=clip.get('title'),
            created_at=clip.get('created_at'),
        )

    @property
    def display_title(self) -> str:
        return self.title or "Rage clip"

    @property
    def source_label(self) -> str:
        if self.kind is ClipKind.PERSONAL:
            return "you"
        return self.source or "clip"

    @property
    def is_youtube(self) -> bool:
        return "youtube.com" in self.url or "youtu.be" in self.url

    @property
    def embed_url(self) -> str:
        """Embeddable player URL for YouTube links, the original URL otherwise."""
        if not self.is_youtube:
            return self.url
        match = YOUTUBE_ID_PATTERN.search(self.url)
        if not match:
            return self.url
        return YOUTUBE_EMBED_URL.format(video_id=match.group(1))


# ===== UTILITY FUNCTIONS =====
def merge_clips(curated: Sequence[CuratedClip], personal: Sequence[UserClipRecord]) -> List[ClipItem]:
    """Visitor's own clips first (as stored, newest first), then curated clips in catalog order."""
    return [ClipItem.from_personal(c) for c in personal] + [ClipItem.from_curated(c) for c in curated]

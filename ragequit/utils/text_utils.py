# ===== IMPORTS & DEPENDENCIES =====
import re
import logging
from datetime import datetime
from typing import Dict, Optional
from bs4 import BeautifulSoup

from ragequit.models.game import GameBrief, SteamReview, SocialPost

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# ===== UTILITY FUNCTIONS =====

def plain_text(html_text: Optional[str]) -> str:
    """Strips markup from a review or post body and collapses whitespace."""
    if not html_text:
        return ""
    if '<' not in html_text:
        return re.sub(r'\s+', ' ', html_text).strip()

    soup = BeautifulSoup(html_text, 'lxml')
    return re.sub(r'\s+', ' ', soup.get_text(separator=' ', strip=True)).strip()


def format_date(value: Optional[str]) -> str:
    """ISO timestamp -> YYYY-MM-DD, or an empty string when missing or unparsable."""
    if not value:
        return ""
    try:
        return datetime.fromisoformat(value.replace('Z', '+00:00')).date().isoformat()
    except ValueError:
        logger.debug(f"[format_date] Unparsable date: '{value}'")
        return ""


def game_label(game_id: int, brief: Optional[GameBrief]) -> str:
    return brief['name'] if brief else f"Game #{game_id}"


def review_card(review: SteamReview) -> Dict[str, str]:
    positive = bool(review.get('is_positive'))
    return {
        'tone': "Positive" if positive else "Negative",
        'date': format_date(review.get('created_at_steam')),
        'text': plain_text(review.get('review_text')),
        'language': review.get('language') or "",
    }


def post_card(post: SocialPost) -> Dict[str, str]:
    meta = []
    upvotes = post.get('upvotes')
    comments = post.get('num_comments')
    # bool is an int subclass but never a count
    if isinstance(upvotes, (int, float)) and not isinstance(upvotes, bool):
        meta.append(f"{upvotes} upvotes")
    if isinstance(comments, (int, float)) and not isinstance(comments, bool):
        meta.append(f"{comments} comments")
    return {
        'title': post.get('title') or "",
        'date': format_date(post.get('created_utc')),
        'body': plain_text(post.get('body')),
        'meta': " • ".join(meta),
    }

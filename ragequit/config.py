# ===== CONFIGURATION & CONSTANTS =====
import os

# --- General Settings ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
API_URL = os.getenv("RAGEQUIT_API_URL", "http://localhost:8000").rstrip("/")
ACCOUNT_DB_PATH = os.getenv("RAGEQUIT_ACCOUNT_DB", "data/account.db")
REQUEST_TIMEOUT = float(os.getenv("RAGEQUIT_REQUEST_TIMEOUT", "15"))
DEFAULT_CACHE_TTL = 300  # a view's data is considered fresh for 5 minutes

# --- Catalog API Headers ---
COMMON_HEADERS = {
    'User-Agent': 'ragequit-display/1.0',
    'Accept-Language': 'en-US,en;q=0.9',
    'Accept': 'application/json, text/plain, */*',
    'Accept-Encoding': 'gzip, deflate',
    'Connection': 'keep-alive'
}

# --- Page Limits ---
GAMES_LIMIT = 50
COMPARE_GAMES_LIMIT = 100
LEADERBOARD_LIMIT = 50
REVIEWS_LIMIT = 15
REDDIT_LIMIT = 15
RAGE_WORDS_LIMIT = 40
HISTORY_PAGE_SIZE = 50
USER_CLIPS_PAGE_SIZE = 20

# --- Leaderboards ---
# board key -> (title, caption), in display order
LEADERBOARD_BOARDS = {
    "most-rage": ("Most Rage", "Highest overall RageScore."),
    "difficulty": ("Difficulty Hell", "Games that punish you the hardest."),
    "technical": ("Technical Disasters", "Crashes, bugs and broken netcode."),
    "toxicity": ("Toxic Communities", "Where the chat is worse than the game."),
    "cozy": ("Cozy Corner", "Lowest rage. Relax, nobody is screaming here."),
}

# --- Duel Rows ---
# label -> breakdown field
DUEL_FIELDS = [
    ("RageScore", "rage_score"),
    ("Difficulty", "difficulty_rage"),
    ("Technical", "technical_rage"),
    ("Toxicity", "social_toxicity_rage"),
    ("UI / Design", "ui_design_rage"),
]
DUEL_MARKER_MIN_SHARE = 12

# --- Trophies ---
# key, title, description, history stat, threshold
TROPHIES = [
    ("first_tilt", "First Tilt", "Log at least one rage event.", "total_events", 1),
    ("serial_rager", "Serial Rager", "Log 10 or more rage events.", "total_events", 10),
    ("multi_game_meltdown", "Multi-Game Meltdown", "Rage in 3 or more different games.", "distinct_games", 3),
    ("max_salt", "Max Salt", "Record a rage with intensity 5.", "max_intensity", 5),
    ("game_hoarder", "Game Hoarder", "Favorite 5 or more games.", "favorite_count", 5),
]

# --- Rage Events ---
MIN_INTENSITY = 1
MAX_INTENSITY = 5
DEFAULT_INTENSITY = 3

# --- Game Page ---
# breakdown bars under the gauge: label -> breakdown field
RAGE_BARS = [
    ("Difficulty", "difficulty_rage"),
    ("Technical", "technical_rage"),
    ("Social Toxicity", "social_toxicity_rage"),
    ("UI / Design", "ui_design_rage"),
]

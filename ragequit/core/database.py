# ===== IMPORTS & DEPENDENCIES =====
import sqlite3
import logging
import os
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Dict, Any

from ragequit.errors import AccountStoreError
from ragequit.models.account import FavoriteRecord, RageEventRecord, UserClipRecord

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# ===== CORE BUSINESS LOGIC =====
class AccountDatabase:
    """Handles all account store operations: accounts, favorites, rage events and clips."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        directory = os.path.dirname(db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self._create_tables()
        logger.info(f"[{self.__class__.__name__}] Database initialized at: {self.db_path}")

    def _get_connection(self) -> sqlite3.Connection:
        """Returns a new database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    def _execute(self, query: str, params: tuple = ()) -> List[Dict[str, Any]]:
        """Runs one statement in its own connection and returns the fetched rows as dicts."""
        conn = None
        try:
            conn = self._get_connection()
            with conn:
                cursor = conn.execute(query, params)
                return [dict(row) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            logger.error(f"[{self.__class__.__name__}] Query failed: {e}", exc_info=True)
            raise AccountStoreError(str(e)) from e
        finally:
            if conn is not None:
                conn.close()

    def _create_tables(self):
        """Creates required tables if they don't exist."""
        conn = self._get_connection()
        try:
            with conn:
                conn.executescript("""
                    CREATE TABLE IF NOT EXISTS accounts (
                        visitor_id TEXT PRIMARY KEY,
                        email TEXT UNIQUE NOT NULL,
                        password_hash TEXT NOT NULL,
                        salt TEXT NOT NULL,
                        created_at TEXT NOT NULL
                    );
                    CREATE TABLE IF NOT EXISTS favorite_games (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        visitor_id TEXT NOT NULL,
                        game_id INTEGER NOT NULL,
                        created_at TEXT NOT NULL,
                        UNIQUE(visitor_id, game_id)
                    );
                    CREATE TABLE IF NOT EXISTS rage_events (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        visitor_id TEXT NOT NULL,
                        game_id INTEGER NOT NULL,
                        intensity INTEGER NOT NULL CHECK (intensity BETWEEN 1 AND 5),
                        note TEXT,
                        created_at TEXT NOT NULL
                    );
                    CREATE TABLE IF NOT EXISTS user_clips (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        visitor_id TEXT NOT NULL,
                        game_id INTEGER NOT NULL,
                        url TEXT NOT NULL,
                        title TEXT,
                        created_at TEXT NOT NULL
                    );
                """)
            logger.info(f"[{self.__class__.__name__}] Database tables verified/created.")
        except sqlite3.Error as e:
            raise AccountStoreError(f"Could not create tables: {e}") from e
        finally:
            conn.close()

    # --- Accounts ---

    def create_account(self, email: str, password_hash: str, salt: str) -> str:
        """Stores a new account and returns its visitor id."""
        visitor_id = uuid.uuid4().hex
        self._execute(
            "INSERT INTO accounts (visitor_id, email, password_hash, salt, created_at) VALUES (?, ?, ?, ?, ?)",
            (visitor_id, email.lower(), password_hash, salt, self._now())
        )
        logger.info(f"[{self.__class__.__name__}] Created account {visitor_id}")
        return visitor_id

    def get_account(self, email: str) -> Optional[Dict[str, Any]]:
        rows = self._execute(
            "SELECT visitor_id, email, password_hash, salt FROM accounts WHERE email = ?",
            (email.lower(),)
        )
        return rows[0] if rows else None

    # --- Favorites ---

    def add_favorite(self, visitor_id: str, game_id: int) -> FavoriteRecord:
        """Adds a favorite; an existing one for the same game is kept as is."""
        self._execute(
            "INSERT OR IGNORE INTO favorite_games (visitor_id, game_id, created_at) VALUES (?, ?, ?)",
            (visitor_id, game_id, self._now())
        )
        rows = self._execute(
            "SELECT game_id, created_at FROM favorite_games WHERE visitor_id = ? AND game_id = ?",
            (visitor_id, game_id)
        )
        logger.info(f"[{self.__class__.__name__}] Favorite stored for visitor={visitor_id}, game={game_id}")
        return FavoriteRecord(**rows[0])

    def remove_favorite(self, visitor_id: str, game_id: int) -> None:
        self._execute(
            "DELETE FROM favorite_games WHERE visitor_id = ? AND game_id = ?",
            (visitor_id, game_id)
        )
        logger.info(f"[{self.__class__.__name__}] Favorite removed for visitor={visitor_id}, game={game_id}")

    def get_favorites(self, visitor_id: str, game_id: Optional[int] = None, limit: int = 50) -> List[FavoriteRecord]:
        """Returns the visitor's favorites, newest first, optionally for one game only."""
        query = "SELECT game_id, created_at FROM favorite_games WHERE visitor_id = ?"
        params: tuple = (visitor_id,)
        if game_id is not None:
            query += " AND game_id = ?"
            params += (game_id,)
        query += " ORDER BY created_at DESC, id DESC LIMIT ?"
        return [FavoriteRecord(**row) for row in self._execute(query, params + (limit,))]

    # --- Rage events ---

    def add_rage_event(self, visitor_id: str, game_id: int, intensity: int, note: Optional[str]) -> RageEventRecord:
        created_at = self._now()
        self._execute(
            "INSERT INTO rage_events (visitor_id, game_id, intensity, note, created_at) VALUES (?, ?, ?, ?, ?)",
            (visitor_id, game_id, intensity, note, created_at)
        )
        logger.info(f"[{self.__class__.__name__}] Rage event stored for visitor={visitor_id}, game={game_id}, intensity={intensity}")
        return RageEventRecord(game_id=game_id, intensity=intensity, note=note, created_at=created_at)

    def get_rage_events(self, visitor_id: str, limit: int = 50) -> List[RageEventRecord]:
        rows = self._execute(
            "SELECT game_id, intensity, note, created_at FROM rage_events WHERE visitor_id = ? "
            "ORDER BY created_at DESC, id DESC LIMIT ?",
            (visitor_id, limit)
        )
        return [RageEventRecord(**row) for row in rows]

    # --- User clips ---

    def add_user_clip(self, visitor_id: str, game_id: int, url: str, title: Optional[str]) -> UserClipRecord:
        """Stores a clip link and returns it with its generated id and timestamp."""
        rows = self._execute(
            "INSERT INTO user_clips (visitor_id, game_id, url, title, created_at) VALUES (?, ?, ?, ?, ?) "
            "RETURNING id, game_id, url, title, created_at",
            (visitor_id, game_id, url, title, self._now())
        )
        logger.info(f"[{self.__class__.__name__}] Clip stored for visitor={visitor_id}, game={game_id}")
        return UserClipRecord(**rows[0])

    def get_user_clips(self, game_id: int, visitor_id: Optional[str] = None, limit: int = 20) -> List[UserClipRecord]:
        query = "SELECT id, game_id, url, title, created_at FROM user_clips WHERE game_id = ?"
        params: tuple = (game_id,)
        if visitor_id is not None:
            query += " AND visitor_id = ?"
            params += (visitor_id,)
        query += " ORDER BY created_at DESC, id DESC LIMIT ?"
        return [UserClipRecord(**row) for row in self._execute(query, params + (limit,))]

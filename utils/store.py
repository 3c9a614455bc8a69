"""
Persistent SQLite store for chats and reservations.
"""
import json
import sqlite3
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional
from config import Config
from utils.logger import app_logger


class ChatOwnershipError(Exception):
    """Raised when a chat id is written by a user who does not own it."""


@dataclass
class ChatRecord:
    id: str
    user_id: str
    messages: List[dict]
    created_at: float


@dataclass
class ReservationRecord:
    id: str
    user_id: str
    details: Any  # decoded JSON, or the raw text when the stored blob is not JSON
    has_completed_payment: bool
    created_at: float


class BookingStore:
    """
    SQLite-backed persistence for chats and reservations.
    """

    def __init__(self, db_path: Optional[str] = None):
        """
        Initialize the store.

        Args:
            db_path: Path to SQLite database file (default: Config.DATABASE_PATH)
        """
        if db_path is None:
            db_path = Config.DATABASE_PATH
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        self._db_path = db_path
        self._local = threading.local()
        self._init_db()

        app_logger.info(f"Booking store initialized with SQLite: {self._db_path}")

    def _get_conn(self) -> sqlite3.Connection:
        """Get thread-local database connection."""
        if not hasattr(self._local, 'conn'):
            self._local.conn = sqlite3.connect(self._db_path, check_same_thread=False)
            self._local.conn.row_factory = sqlite3.Row
        return self._local.conn

    def _init_db(self) -> None:
        """Initialize database schema."""
        conn = self._get_conn()
        cursor = conn.cursor()

        # WAL mode for concurrent readers during streaming writes
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA synchronous=NORMAL")
        cursor.execute("PRAGMA busy_timeout=5000")

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS chats (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                messages TEXT NOT NULL,
                created_at REAL NOT NULL
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS reservations (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                details TEXT NOT NULL,
                has_completed_payment INTEGER NOT NULL DEFAULT 0,
                created_at REAL NOT NULL
            )
        """)

        cursor.execute("CREATE INDEX IF NOT EXISTS idx_chats_user ON chats(user_id)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_reservations_user ON reservations(user_id)")

        conn.commit()

    # Chats

    def get_chat_by_id(self, chat_id: str) -> Optional[ChatRecord]:
        cursor = self._get_conn().cursor()
        cursor.execute("SELECT * FROM chats WHERE id = ?", (chat_id,))
        row = cursor.fetchone()
        if row is None:
            return None
        return ChatRecord(
            id=row['id'],
            user_id=row['user_id'],
            messages=json.loads(row['messages']),
            created_at=row['created_at']
        )

    def save_chat(self, chat_id: str, messages: List[dict], user_id: str) -> None:
        """
        Create the chat or replace its messages.

        Raises:
            ChatOwnershipError: the chat exists and belongs to another user
        """
        existing = self.get_chat_by_id(chat_id)
        if existing is not None and existing.user_id != user_id:
            raise ChatOwnershipError(f"Chat {chat_id} belongs to another user")

        conn = self._get_conn()
        cursor = conn.cursor()
        messages_json = json.dumps(messages)

        if existing is None:
            cursor.execute(
                "INSERT INTO chats (id, user_id, messages, created_at) VALUES (?, ?, ?, ?)",
                (chat_id, user_id, messages_json, time.time())
            )
        else:
            cursor.execute(
                "UPDATE chats SET messages = ? WHERE id = ? AND user_id = ?",
                (messages_json, chat_id, user_id)
            )
        conn.commit()
        app_logger.debug(f"Store: saved chat {chat_id} ({len(messages)} messages)")

    def delete_chat_by_id(self, chat_id: str) -> bool:
        conn = self._get_conn()
        cursor = conn.cursor()
        cursor.execute("DELETE FROM chats WHERE id = ?", (chat_id,))
        conn.commit()
        return cursor.rowcount > 0

    # Reservations

    def create_reservation(self, reservation_id: str, user_id: str, details: dict) -> None:
        conn = self._get_conn()
        cursor = conn.cursor()
        cursor.execute(
            """
            INSERT INTO reservations (id, user_id, details, has_completed_payment, created_at)
            VALUES (?, ?, ?, 0, ?)
            """,
            (reservation_id, user_id, json.dumps(details), time.time())
        )
        conn.commit()

    def get_reservation_by_id(self, reservation_id: str) -> Optional[ReservationRecord]:
        cursor = self._get_conn().cursor()
        cursor.execute("SELECT * FROM reservations WHERE id = ?", (reservation_id,))
        row = cursor.fetchone()
        if row is None:
            return None

        try:
            details = json.loads(row['details'])
        except json.JSONDecodeError:
            app_logger.warning(f"Store: reservation {reservation_id} has non-JSON details")
            details = row['details']

        return ReservationRecord(
            id=row['id'],
            user_id=row['user_id'],
            details=details,
            has_completed_payment=bool(row['has_completed_payment']),
            created_at=row['created_at']
        )

    def update_reservation(self, reservation_id: str, has_completed_payment: bool) -> bool:
        """Write path for the external payment flow."""
        conn = self._get_conn()
        cursor = conn.cursor()
        cursor.execute(
            "UPDATE reservations SET has_completed_payment = ? WHERE id = ?",
            (int(has_completed_payment), reservation_id)
        )
        conn.commit()
        return cursor.rowcount > 0


# Global store instance, opened on first use
_store: Optional[BookingStore] = None


def get_store() -> BookingStore:
    """Get the global booking store instance."""
    global _store
    if _store is None:
        _store = BookingStore()
    return _store

"""
SQLite-backed conversation store.

Keeps in-flight conversations across a process restart when a file path is
configured. Implements exactly the same interface as
InMemoryConversationStore and can be swapped without touching the engine.

Design:
- One table: conversation_state
- Columns: sender_id (primary key), state (JSON), updated_at
- Non-fatal: failures are logged; a failed read returns None
"""

import json
import logging
import sqlite3
from typing import Optional

from intake.state.base import ConversationStore
from intake.state.types import ConversationState

logger = logging.getLogger(__name__)


class SQLiteConversationStore(ConversationStore):
    """
    SQLite store holding one JSON-encoded ConversationState per sender.

    A single connection is kept open for the lifetime of the store so that
    ':memory:' databases survive between calls.
    """

    def __init__(self, db_path: Optional[str] = None):
        """
        Args:
            db_path: Path to SQLite database file.
                    If None, uses ':memory:' (useful for testing).
        """
        self.db_path = db_path or ":memory:"
        self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self._initialize_db()

    def _initialize_db(self) -> None:
        """Create the schema if it does not exist yet."""
        try:
            cursor = self._conn.cursor()

            if self.db_path != ":memory:":
                cursor.execute("PRAGMA journal_mode=WAL")

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS conversation_state (
                    sender_id TEXT PRIMARY KEY,
                    state TEXT NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
            self._conn.commit()

            logger.debug(f"SQLite conversation store initialized: {self.db_path}")
        except sqlite3.Error as e:
            logger.error(f"Failed to initialize SQLite conversation store: {str(e)}")

    def get(self, sender_id: str) -> Optional[ConversationState]:
        try:
            cursor = self._conn.execute(
                "SELECT state FROM conversation_state WHERE sender_id = ?",
                (sender_id,),
            )
            row = cursor.fetchone()
        except sqlite3.Error as e:
            logger.error(f"SQLite error during read: {sender_id}, {str(e)}")
            return None

        if row is None:
            return None

        try:
            return ConversationState.from_dict(json.loads(row[0]))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.error(f"Corrupted conversation state: {sender_id}, {str(e)}")
            return None

    def set(self, sender_id: str, state: ConversationState) -> None:
        try:
            self._conn.execute(
                """
                INSERT INTO conversation_state (sender_id, state)
                VALUES (?, ?)
                ON CONFLICT(sender_id)
                DO UPDATE SET state = excluded.state, updated_at = CURRENT_TIMESTAMP
                """,
                (sender_id, json.dumps(state.to_dict())),
            )
            self._conn.commit()
        except (sqlite3.Error, TypeError) as e:
            logger.error(f"SQLite error during write: {sender_id}, {str(e)}")

    def delete(self, sender_id: str) -> None:
        try:
            self._conn.execute(
                "DELETE FROM conversation_state WHERE sender_id = ?",
                (sender_id,),
            )
            self._conn.commit()
        except sqlite3.Error as e:
            logger.error(f"SQLite error during delete: {sender_id}, {str(e)}")

    def close(self) -> None:
        self._conn.close()

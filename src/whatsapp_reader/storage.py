"""SQLite-backed key-value storage for the conversation collection and settings."""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from .config import DEFAULT_MY_NAME, STORAGE_KEYS
from .models import Conversation

logger = logging.getLogger(__name__)

_CONVERSATIONS = TypeAdapter(list[Conversation])


class KeyValueStore:
    """String key-value entries persisted between sessions.

    The conversation collection lives under a single key as a JSON array of
    plain records, the same shape the parser and merger produce.
    """

    def __init__(self, db_path: Path):
        db_path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(str(db_path))
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA journal_mode=WAL")
        self._migrate()

    def _migrate(self):
        self.conn.executescript("""
            CREATE TABLE IF NOT EXISTS entries (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS import_metadata (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                import_time TEXT NOT NULL,
                file_paths TEXT,
                conversations_imported INTEGER,
                messages_imported INTEGER
            );
        """)
        self.conn.commit()

    def __enter__(self) -> KeyValueStore:
        return self

    def __exit__(self, *exc_info):
        self.close()

    def get(self, key: str) -> str | None:
        row = self.conn.execute(
            "SELECT value FROM entries WHERE key = ?", (key,)
        ).fetchone()
        return row["value"] if row else None

    def set(self, key: str, value: str):
        self.conn.execute(
            """INSERT INTO entries (key, value, updated_at) VALUES (?, ?, ?)
               ON CONFLICT(key) DO UPDATE SET value = excluded.value,
                                              updated_at = excluded.updated_at""",
            (key, value, _now()),
        )
        self.conn.commit()

    def remove(self, key: str):
        self.conn.execute("DELETE FROM entries WHERE key = ?", (key,))
        self.conn.commit()

    def load_conversations(self) -> list[Conversation]:
        """Load the saved collection; corrupted data is dropped, not raised."""
        key = STORAGE_KEYS["chats"]
        raw = self.get(key)
        if raw is None:
            return []

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                logger.warning("Stored conversations are not a list, ignoring")
                return []
            return _CONVERSATIONS.validate_python(data)
        except (json.JSONDecodeError, ValidationError):
            logger.warning("Discarding corrupted conversation data", exc_info=True)
            self.remove(key)
            return []

    def save_conversations(self, conversations: list[Conversation]):
        """Persist the collection; an empty collection clears the key."""
        key = STORAGE_KEYS["chats"]
        if not conversations:
            self.remove(key)
            return
        self.set(key, _CONVERSATIONS.dump_json(conversations, by_alias=True).decode("utf-8"))

    def get_my_name(self) -> str:
        saved = self.get(STORAGE_KEYS["my_name"])
        return (saved or "").strip() or DEFAULT_MY_NAME

    def set_my_name(self, name: str):
        self.set(STORAGE_KEYS["my_name"], name.strip() or DEFAULT_MY_NAME)

    def record_import(self, file_paths: list[str], conversations: int, messages: int):
        self.conn.execute(
            "INSERT INTO import_metadata (import_time, file_paths, conversations_imported, messages_imported) VALUES (?, ?, ?, ?)",
            (_now(), json.dumps(file_paths), conversations, messages),
        )
        self.conn.commit()

    def list_imports(self, limit: int = 10) -> list[dict]:
        """Most recent imports first."""
        rows = self.conn.execute(
            """SELECT import_time, file_paths, conversations_imported, messages_imported
               FROM import_metadata ORDER BY id DESC LIMIT ?""",
            (limit,),
        ).fetchall()
        return [{**dict(r), "file_paths": json.loads(r["file_paths"] or "[]")} for r in rows]

    def close(self):
        self.conn.close()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()

"""Prompt templates keyed by name, e.g. `turning_of_year_reading`."""

from __future__ import annotations

import uuid
from typing import Optional

from .base import SqliteStore, utcnow


class PromptStore(SqliteStore):
    SCHEMA = (
        """
        CREATE TABLE IF NOT EXISTS prompts (
            id TEXT PRIMARY KEY,
            key TEXT NOT NULL UNIQUE,
            content TEXT NOT NULL,
            created_at TEXT NOT NULL,
            updated_at TEXT
        )
        """,
    )

    def get_template(self, key: str) -> Optional[str]:
        with self.connect() as conn:
            row = conn.execute("SELECT content FROM prompts WHERE key = ?", (key,)).fetchone()
        return row["content"] if row else None

    def upsert(self, key: str, content: str) -> None:
        now = utcnow()
        with self.connect() as conn:
            conn.execute(
                """
                INSERT INTO prompts (id, key, content, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET content = excluded.content, updated_at = excluded.updated_at
                """,
                (str(uuid.uuid4()), key, content, now, now),
            )

"""Shared SQLite plumbing for the stores."""

from __future__ import annotations

import os
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Tuple


def utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


class SqliteStore:
    SCHEMA: Tuple[str, ...] = ()

    def __init__(self, db_path: str):
        self.db_path = db_path

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_db(self) -> None:
        """Create tables if needed."""
        parent = os.path.dirname(self.db_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with self.connect() as conn:
            for stmt in self.SCHEMA:
                conn.execute(stmt)

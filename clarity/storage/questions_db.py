"""Questionnaire questions.

Options are stored as `value|Title|Description` strings, the same encoding
the seed data uses; `parse_option` unpacks one for display.
"""

from __future__ import annotations

import json
import uuid
from typing import Any, Dict, List, Optional

from ..models import QuestionChoice, QuestionCreate, QuestionUpdate
from .base import SqliteStore, utcnow


def parse_option(raw: str) -> QuestionChoice:
    parts = raw.split("|")
    value = parts[0] if parts[0] else raw
    title = parts[1] if len(parts) > 1 and parts[1] else raw
    description = parts[2] if len(parts) > 2 else ""
    label = f"{title} — {description}" if description else title
    return QuestionChoice(value=value, title=title, description=description, label=label)


class QuestionStore(SqliteStore):
    SCHEMA = (
        """
        CREATE TABLE IF NOT EXISTS questions (
            id TEXT PRIMARY KEY,
            text TEXT NOT NULL,
            options TEXT NOT NULL,
            sort_order INTEGER NOT NULL,
            category TEXT,
            created_at TEXT NOT NULL,
            updated_at TEXT
        )
        """,
        "CREATE INDEX IF NOT EXISTS idx_questions_category ON questions(category)",
    )

    def list_questions(self) -> List[Dict[str, Any]]:
        with self.connect() as conn:
            rows = conn.execute("SELECT * FROM questions ORDER BY sort_order ASC").fetchall()
        return [_row_to_dict(r) for r in rows]

    def get_question(self, question_id: str) -> Optional[Dict[str, Any]]:
        with self.connect() as conn:
            row = conn.execute("SELECT * FROM questions WHERE id = ?", (question_id,)).fetchone()
        return _row_to_dict(row) if row else None

    def by_category(self, category: str) -> List[Dict[str, Any]]:
        with self.connect() as conn:
            rows = conn.execute(
                "SELECT * FROM questions WHERE category = ? ORDER BY sort_order DESC", (category,)
            ).fetchall()
        return [_row_to_dict(r) for r in rows]

    def create_question(self, data: QuestionCreate) -> Dict[str, Any]:
        question_id = str(uuid.uuid4())
        now = utcnow()
        with self.connect() as conn:
            conn.execute(
                """
                INSERT INTO questions (id, text, options, sort_order, category, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (question_id, data.text, json.dumps(data.options), data.order, data.category, now, now),
            )
        return self.get_question(question_id)

    def update_question(self, question_id: str, data: QuestionUpdate) -> Optional[Dict[str, Any]]:
        changes = data.model_dump(exclude_unset=True)
        columns = {"text": "text", "options": "options", "order": "sort_order", "category": "category"}

        assignments = []
        params: List[Any] = []
        for field, value in changes.items():
            if value is None and field != "category":
                continue
            if field == "options":
                value = json.dumps(value)
            assignments.append(f"{columns[field]} = ?")
            params.append(value)
        assignments.append("updated_at = ?")
        params.append(utcnow())
        params.append(question_id)

        with self.connect() as conn:
            updated = conn.execute(f"UPDATE questions SET {', '.join(assignments)} WHERE id = ?", params).rowcount
            if updated == 0:
                return None
        return self.get_question(question_id)

    def delete_question(self, question_id: str) -> bool:
        with self.connect() as conn:
            deleted = conn.execute("DELETE FROM questions WHERE id = ?", (question_id,)).rowcount
        return deleted > 0

    def delete_category(self, category: str) -> int:
        with self.connect() as conn:
            return conn.execute("DELETE FROM questions WHERE category = ?", (category,)).rowcount


def _row_to_dict(row) -> Dict[str, Any]:
    q = dict(row)
    options = json.loads(q["options"] or "[]")
    return {
        "id": q["id"],
        "text": q["text"],
        "options": options,
        "choices": [parse_option(o) for o in options],
        "order": q["sort_order"],
        "category": q["category"],
        "created_at": q["created_at"],
        "updated_at": q["updated_at"],
    }

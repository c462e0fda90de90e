"""SQLite storage for generated readings."""

import json
import uuid
from typing import Any, Dict, List, Optional

from ..models import Reading
from .base import SqliteStore, utcnow


class ReadingStore(SqliteStore):
    SCHEMA = (
        """
        CREATE TABLE IF NOT EXISTS readings (
            reading_id TEXT PRIMARY KEY,
            reading_type TEXT NOT NULL CHECK (reading_type IN ('clarity', 'guidance', 'insight')),
            card_drawn TEXT NOT NULL,
            card_element TEXT NOT NULL,
            card_meaning TEXT NOT NULL,
            interpretation TEXT NOT NULL,
            guidance_message TEXT NOT NULL,
            action_steps TEXT NOT NULL,
            affirmation TEXT NOT NULL,
            focus_area TEXT,
            mood TEXT,
            created_at TEXT NOT NULL
        )
        """,
        "CREATE INDEX IF NOT EXISTS idx_readings_created ON readings(created_at)",
    )

    def save_reading(
        self,
        reading: Reading,
        focus_area: Optional[str] = None,
        mood: Optional[str] = None,
        reading_type: str = "clarity",
    ) -> Dict[str, Any]:
        """Store a reading and return its record."""
        reading_id = str(uuid.uuid4())
        created_at = utcnow()

        with self.connect() as conn:
            conn.execute(
                """
                INSERT INTO readings (
                    reading_id, reading_type, card_drawn, card_element, card_meaning,
                    interpretation, guidance_message, action_steps, affirmation,
                    focus_area, mood, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    reading_id,
                    reading_type,
                    reading.card_drawn,
                    reading.card_element,
                    reading.card_meaning,
                    reading.interpretation,
                    reading.guidance_message,
                    json.dumps(list(reading.action_steps)),
                    reading.affirmation,
                    focus_area,
                    mood,
                    created_at,
                ),
            )

        return {
            "reading_id": reading_id,
            "reading_type": reading_type,
            "focus_area": focus_area,
            "mood": mood,
            "created_at": created_at,
            "reading": reading,
        }

    def get_reading(self, reading_id: str) -> Optional[Dict[str, Any]]:
        with self.connect() as conn:
            row = conn.execute("SELECT * FROM readings WHERE reading_id = ?", (reading_id,)).fetchone()
        return _row_to_record(row) if row else None

    def list_readings(self, limit: int = 100) -> List[Dict[str, Any]]:
        with self.connect() as conn:
            rows = conn.execute(
                "SELECT * FROM readings ORDER BY created_at DESC, rowid DESC LIMIT ?", (limit,)
            ).fetchall()
        return [_row_to_record(r) for r in rows]


def _row_to_record(row) -> Dict[str, Any]:
    r = dict(row)
    reading = Reading(
        card_drawn=r["card_drawn"],
        card_element=r["card_element"],
        card_meaning=r["card_meaning"],
        interpretation=r["interpretation"],
        guidance_message=r["guidance_message"],
        action_steps=json.loads(r["action_steps"] or "[]"),
        affirmation=r["affirmation"],
    )
    return {
        "reading_id": r["reading_id"],
        "reading_type": r["reading_type"],
        "focus_area": r["focus_area"],
        "mood": r["mood"],
        "created_at": r["created_at"],
        "reading": reading,
    }

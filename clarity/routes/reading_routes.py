"""FastAPI routes for generating and retrieving readings."""

from __future__ import annotations

import logging
import sqlite3
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from ..deps import get_reading_pipeline, get_reading_store
from ..models import ReadingRequest, ReadingResponse, StoredReadingResponse
from ..reading import ReadingPipeline
from ..storage.readings_db import ReadingStore

log = logging.getLogger("clarity.routes.reading")
router = APIRouter(prefix="/api/reading", tags=["reading"])


@router.post("", response_model=ReadingResponse)
def create_reading(
    req: ReadingRequest,
    pipeline: ReadingPipeline = Depends(get_reading_pipeline),
    store: ReadingStore = Depends(get_reading_store),
) -> ReadingResponse:
    """Draw a card and generate a reading for a questionnaire profile."""
    p = req.personality_profile
    log.info(
        "reading request O=%d C=%d E=%d A=%d N=%d focus=%s mood=%s",
        p.openness, p.conscientiousness, p.extraversion, p.agreeableness, p.neuroticism,
        req.focus_area, req.mood,
    )

    # ReadingGenerationFailed propagates to the app-level handler
    reading = pipeline.run(p, req.focus_area, req.mood)

    reading_id = None
    try:
        reading_id = store.save_reading(reading, focus_area=req.focus_area, mood=req.mood)["reading_id"]
    except sqlite3.Error as e:
        log.warning("reading not saved error=%s", e)

    return ReadingResponse(reading_id=reading_id, reading=reading)


@router.get("", response_model=List[StoredReadingResponse])
def recent_readings(
    limit: int = Query(20, ge=1, le=100),
    store: ReadingStore = Depends(get_reading_store),
) -> List[StoredReadingResponse]:
    """Most recent readings first."""
    return [StoredReadingResponse(**record) for record in store.list_readings(limit)]


@router.get("/{reading_id}", response_model=StoredReadingResponse)
def get_reading_by_id(reading_id: str, store: ReadingStore = Depends(get_reading_store)) -> StoredReadingResponse:
    record = store.get_reading(reading_id)
    if not record:
        raise HTTPException(status_code=404, detail=f"Reading not found: {reading_id}")
    return StoredReadingResponse(**record)

"""FastAPI routes for the mystical card catalog.

Endpoints:
- GET /api/cards
- GET /api/cards/{name}
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, HTTPException

from ..cards import MYSTICAL_CARDS, CatalogError, get_card

router = APIRouter(prefix="/api/cards", tags=["cards"])


@router.get("")
def cards() -> Dict[str, Any]:
    return {"cards": [c.model_dump() for c in MYSTICAL_CARDS]}


@router.get("/{name}")
def card(name: str) -> Dict[str, Any]:
    try:
        c = get_card(name)
    except CatalogError:
        raise HTTPException(status_code=404, detail=f"Unknown card: {name}")
    return {"card": c.model_dump()}

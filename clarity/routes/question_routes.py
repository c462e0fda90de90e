"""FastAPI routes for the questionnaire catalog.

Endpoints:
- GET /api/questions
- GET /api/questions/{question_id}
- GET /api/questions/category/{category}
- POST /api/questions
- PATCH /api/questions/{question_id}
- DELETE /api/questions/{question_id}
"""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException

from ..deps import get_question_store
from ..models import Question, QuestionCreate, QuestionUpdate
from ..storage.questions_db import QuestionStore

router = APIRouter(prefix="/api/questions", tags=["questions"])


@router.get("", response_model=List[Question])
def all_questions(store: QuestionStore = Depends(get_question_store)) -> List[Dict[str, Any]]:
    return store.list_questions()


@router.get("/category/{category}", response_model=List[Question])
def questions_by_category(category: str, store: QuestionStore = Depends(get_question_store)) -> List[Dict[str, Any]]:
    return store.by_category(category)


@router.get("/{question_id}", response_model=Question)
def question(question_id: str, store: QuestionStore = Depends(get_question_store)) -> Dict[str, Any]:
    q = store.get_question(question_id)
    if not q:
        raise HTTPException(status_code=404, detail=f"Unknown question_id: {question_id}")
    return q


@router.post("", response_model=Question, status_code=201)
def create_question(req: QuestionCreate, store: QuestionStore = Depends(get_question_store)) -> Dict[str, Any]:
    return store.create_question(req)


@router.patch("/{question_id}", response_model=Question)
def update_question(
    question_id: str,
    req: QuestionUpdate,
    store: QuestionStore = Depends(get_question_store),
) -> Dict[str, Any]:
    q = store.update_question(question_id, req)
    if not q:
        raise HTTPException(status_code=404, detail=f"Unknown question_id: {question_id}")
    return q


@router.delete("/{question_id}")
def delete_question(question_id: str, store: QuestionStore = Depends(get_question_store)) -> Dict[str, Any]:
    if not store.delete_question(question_id):
        raise HTTPException(status_code=404, detail=f"Unknown question_id: {question_id}")
    return {"ok": True}

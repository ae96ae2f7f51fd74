# guardiao/routers/suggestions.py
"""Suggestions inbox. Anyone sends; admins answer, re-status or delete."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from guardiao.constants import SuggestionStatus
from guardiao.database import get_db
from guardiao.models.suggestion import Suggestion
from guardiao.routers.dependencies import commit_or_500, get_actor
from guardiao.schemas.suggestion import SuggestionAnswer, SuggestionCreate, SuggestionOut, SuggestionStatusUpdate
from guardiao.services.actor import Actor
from guardiao.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


def _require_admin(actor: Actor):
    if not actor.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")


def _get_or_404(db: Session, suggestion_id: int) -> Suggestion:
    suggestion = db.query(Suggestion).filter(Suggestion.id == suggestion_id).first()
    if not suggestion:
        raise HTTPException(status_code=404, detail="Suggestion not found")
    return suggestion


@router.post("/suggestions", response_model=SuggestionOut, summary="Send a suggestion")
def create_suggestion(body: SuggestionCreate, db: Session = Depends(get_db), actor: Actor = Depends(get_actor)):
    suggestion = Suggestion(
        user_id=actor.id,
        user_name=actor.name,
        user_rank=body.user_rank,
        user_sector=body.user_sector,
        category=body.category,
        title=body.title.strip(),
        description=body.description.strip(),
        status=SuggestionStatus.PENDING.value,
        created_at=datetime.utcnow(),
    )
    db.add(suggestion)
    commit_or_500(db, "register suggestion")
    logger.info(f"[SUGGESTION] New from {actor.name}: {suggestion.title}")
    return suggestion


@router.get("/suggestions", response_model=list[SuggestionOut], summary="List suggestions")
def list_suggestions(status: Optional[SuggestionStatus] = None, limit: int = 100, db: Session = Depends(get_db)):
    q = db.query(Suggestion)
    if status:
        q = q.filter(Suggestion.status == status.value)
    return q.order_by(Suggestion.created_at.desc()).limit(limit).all()


@router.put("/suggestions/{suggestion_id}/answer", response_model=SuggestionOut, summary="Answer a suggestion")
def answer_suggestion(suggestion_id: int, body: SuggestionAnswer, db: Session = Depends(get_db),
                      actor: Actor = Depends(get_actor)):
    _require_admin(actor)
    suggestion = _get_or_404(db, suggestion_id)
    suggestion.admin_answer = body.answer.strip()
    suggestion.status = SuggestionStatus.ANSWERED.value
    commit_or_500(db, f"answer suggestion {suggestion_id}")
    return suggestion


@router.put("/suggestions/{suggestion_id}/status", response_model=SuggestionOut, summary="Change suggestion status")
def set_suggestion_status(suggestion_id: int, body: SuggestionStatusUpdate, db: Session = Depends(get_db),
                          actor: Actor = Depends(get_actor)):
    _require_admin(actor)
    suggestion = _get_or_404(db, suggestion_id)
    suggestion.status = body.status.value
    commit_or_500(db, f"update suggestion {suggestion_id}")
    return suggestion


@router.delete("/suggestions/{suggestion_id}", summary="Delete a suggestion")
def delete_suggestion(suggestion_id: int, db: Session = Depends(get_db), actor: Actor = Depends(get_actor)):
    _require_admin(actor)
    db.delete(_get_or_404(db, suggestion_id))
    commit_or_500(db, f"delete suggestion {suggestion_id}")
    return {"status": "removed", "id": suggestion_id}

# guardiao/routers/occurrences.py
"""
Occurrences (security incidents) and their chain-of-command dispatch.
Workflow rejections map to 403/409/422; database failures to 500 with the
driver message.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from guardiao.config import settings
from guardiao.database import get_db
from guardiao.models.occurrence import Occurrence
from guardiao.routers.dependencies import get_actor
from guardiao.schemas.occurrence import (
    AIAnalysisOut, NoteRequest, OccurrenceCreate, OccurrenceOut, OccurrenceUpdate, TransitionRequest,
)
from guardiao.services import ai_service, occurrence_service
from guardiao.services.actor import Actor
from guardiao.services.errors import NotFoundError, StoreError
from guardiao.services.occurrence_workflow import TransitionRejected
from guardiao.services.statistics_service import occurrence_statistics

router = APIRouter()

_REJECTION_STATUS = {
    TransitionRejected.NOT_ADMIN: 403,
    TransitionRejected.COMMENT_REQUIRED: 422,
    TransitionRejected.SECTOR_REQUIRED: 422,
}


def _run(action, *args):
    try:
        return action(*args)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except TransitionRejected as e:
        raise HTTPException(status_code=_REJECTION_STATUS.get(e.reason, 409),
                            detail={"reason": e.reason, "message": e.message})
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/occurrences", response_model=OccurrenceOut, summary="Register an occurrence")
def create_occurrence(body: OccurrenceCreate, db: Session = Depends(get_db), actor: Actor = Depends(get_actor)):
    return _run(occurrence_service.create_occurrence, db, body, actor)


@router.get("/occurrences", response_model=list[OccurrenceOut], summary="List occurrences")
def list_occurrences(status: Optional[str] = None, urgency: Optional[str] = None, category: Optional[str] = None,
                     search: Optional[str] = None, limit: int = 100, db: Session = Depends(get_db)):
    return occurrence_service.list_occurrences(db, status=status, urgency=urgency, category=category,
                                               search=search, limit=limit)


@router.get("/occurrences/stats", summary="Occurrence counts for charts")
def occurrence_stats(db: Session = Depends(get_db)):
    return occurrence_statistics(db.query(Occurrence).all())


@router.get("/occurrences/insights", response_model=AIAnalysisOut, summary="AI trends over recent occurrences")
async def occurrence_insights(db: Session = Depends(get_db)):
    recent = occurrence_service.list_occurrences(db, limit=settings.AI_INSIGHTS_MAX_OCCURRENCES)
    return AIAnalysisOut(analysis=await ai_service.dashboard_insights(recent))


@router.get("/occurrences/{occurrence_id}", response_model=OccurrenceOut, summary="Occurrence detail")
def get_occurrence(occurrence_id: int, db: Session = Depends(get_db)):
    return _run(occurrence_service.get_occurrence, db, occurrence_id)


@router.post("/occurrences/{occurrence_id}/transition", response_model=OccurrenceOut,
             summary="Move an occurrence along the chain of command")
def transition(occurrence_id: int, body: TransitionRequest, db: Session = Depends(get_db),
               actor: Actor = Depends(get_actor)):
    return _run(occurrence_service.transition_occurrence, db, occurrence_id, actor, body.target, body.comment)


@router.post("/occurrences/{occurrence_id}/notes", response_model=OccurrenceOut,
             summary="Add a remark without changing status")
def add_note(occurrence_id: int, body: NoteRequest, db: Session = Depends(get_db),
             actor: Actor = Depends(get_actor)):
    return _run(occurrence_service.add_note, db, occurrence_id, actor, body.comment)


@router.patch("/occurrences/{occurrence_id}", response_model=OccurrenceOut, summary="Edit occurrence fields")
def edit(occurrence_id: int, body: OccurrenceUpdate, db: Session = Depends(get_db),
         actor: Actor = Depends(get_actor)):
    return _run(occurrence_service.edit_occurrence, db, occurrence_id, actor, body.model_dump(exclude_unset=True))


@router.post("/occurrences/{occurrence_id}/analysis", response_model=AIAnalysisOut,
             summary="AI risk analysis of one occurrence")
async def analyze(occurrence_id: int, db: Session = Depends(get_db)):
    occurrence = _run(occurrence_service.get_occurrence, db, occurrence_id)
    return AIAnalysisOut(occurrence_id=occurrence_id, analysis=await ai_service.analyze_occurrence(occurrence))

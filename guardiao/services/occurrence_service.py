# guardiao/services/occurrence_service.py
"""
Occurrence persistence: registration, dispatch (status transitions), notes
and direct field edits.

Status changes and notes append to the timeline; field edits do not.
Every write goes through a single commit; a database failure rolls the
session back and is re-raised as StoreError with the driver message.
"""

from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from guardiao.models.occurrence import Occurrence, TimelineEntry
from guardiao.schemas.occurrence import OccurrenceCreate
from guardiao.services.actor import Actor
from guardiao.services.errors import NotFoundError, StoreError
from guardiao.services.occurrence_workflow import Status, TransitionRejected, attempt_transition
from guardiao.utils.logger import get_logger

logger = get_logger(__name__)

EDITABLE_FIELDS = {"title", "description", "location", "urgency", "sector", "assigned_to"}
REGISTERED_COMMENT = "Ocorrência registrada no sistema."


def _commit(db: Session, what: str):
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"[WORKFLOW] Failed to {what}: {e}")
        raise StoreError(str(e)) from e


def _append_timeline(occurrence: Occurrence, status: Status, actor: Actor, comment: str) -> TimelineEntry:
    """Append a timeline entry whose timestamp is strictly after the previous one."""
    now = datetime.utcnow()
    if occurrence.timeline:
        last = max(e.timestamp for e in occurrence.timeline)
        if now <= last:
            now = last + timedelta(microseconds=1)

    entry = TimelineEntry(status=status.value, updated_by=actor.name, timestamp=now, comment=comment)
    occurrence.timeline.append(entry)
    occurrence.status = status.value
    return entry


def get_occurrence(db: Session, occurrence_id: int) -> Occurrence:
    occurrence = db.query(Occurrence).filter(Occurrence.id == occurrence_id).first()
    if not occurrence:
        raise NotFoundError("Occurrence", occurrence_id)
    return occurrence


def list_occurrences(db: Session, status: Optional[str] = None, urgency: Optional[str] = None,
                     category: Optional[str] = None, search: Optional[str] = None, limit: int = 100):
    q = db.query(Occurrence)
    if status:
        q = q.filter(Occurrence.status == status)
    if urgency:
        q = q.filter(Occurrence.urgency == urgency)
    if category:
        q = q.filter(Occurrence.category == category)
    if search:
        pattern = f"%{search}%"
        q = q.filter(or_(
            Occurrence.title.ilike(pattern),
            Occurrence.location.ilike(pattern),
            Occurrence.description.ilike(pattern),
        ))
    return q.order_by(Occurrence.date.desc()).limit(limit).all()


def create_occurrence(db: Session, data: OccurrenceCreate, actor: Actor) -> Occurrence:
    occurrence = Occurrence(
        title=data.title,
        type=data.type,
        category=data.category,
        urgency=data.urgency.value,
        date=data.date or datetime.utcnow(),
        location=data.location,
        description=data.description,
        creator=actor.name,
        sector=data.sector,
        created_at=datetime.utcnow(),
        timeline=[],
    )
    _append_timeline(occurrence, Status.REGISTERED, actor, REGISTERED_COMMENT)
    db.add(occurrence)
    _commit(db, "register occurrence")
    logger.info(f"[WORKFLOW] Occurrence registered by {actor.name}: {data.title} ({data.urgency.value})")
    return occurrence


def transition_occurrence(db: Session, occurrence_id: int, actor: Actor, target: Status,
                          comment: Optional[str] = None) -> Occurrence:
    occurrence = get_occurrence(db, occurrence_id)
    previous = occurrence.status
    try:
        draft = attempt_transition(previous, actor, target, comment, sector=occurrence.sector)
    except TransitionRejected as e:
        logger.warning(f"[WORKFLOW] #{occurrence_id} {actor.name} ({actor.access_level.value}) "
                       f"{previous} → {Status(target).value} rejected: {e.reason}")
        raise

    _append_timeline(occurrence, draft.status, actor, draft.comment)
    _commit(db, f"move occurrence {occurrence_id}")
    logger.info(f"[WORKFLOW] #{occurrence_id} {previous} → {draft.status.value} by {actor.name}")
    return occurrence


def add_note(db: Session, occurrence_id: int, actor: Actor, comment: str) -> Occurrence:
    """Record a remark on the timeline without changing the status."""
    occurrence = get_occurrence(db, occurrence_id)
    if occurrence.status == Status.CLOSED.value:
        raise TransitionRejected(TransitionRejected.CLOSED, "Ocorrência arquivada não admite novas anotações.")
    if not (comment or "").strip():
        raise TransitionRejected(TransitionRejected.COMMENT_REQUIRED, "Escreva o parecer antes de registrar.")

    _append_timeline(occurrence, Status(occurrence.status), actor, comment.strip())
    _commit(db, f"annotate occurrence {occurrence_id}")
    logger.info(f"[WORKFLOW] #{occurrence_id} note by {actor.name}")
    return occurrence


def edit_occurrence(db: Session, occurrence_id: int, actor: Actor, changes: dict) -> Occurrence:
    """Direct field edit by an admin. Not recorded on the timeline."""
    occurrence = get_occurrence(db, occurrence_id)
    if not actor.is_admin:
        raise TransitionRejected(TransitionRejected.NOT_ADMIN, "Apenas gestores podem editar ocorrências.")
    if occurrence.status == Status.CLOSED.value:
        raise TransitionRejected(TransitionRejected.CLOSED, "Ocorrência arquivada não pode ser editada.")

    applied = {}
    for key, value in changes.items():
        if key not in EDITABLE_FIELDS or value is None:
            continue
        value = getattr(value, "value", value)
        setattr(occurrence, key, value)
        applied[key] = value

    if applied:
        _commit(db, f"edit occurrence {occurrence_id}")
        logger.info(f"[WORKFLOW] #{occurrence_id} edited by {actor.name}: {sorted(applied)}")
    return occurrence

# guardiao/services/access_control_service.py
"""
Gate operator workflow: manual access registration, the daily gate log and
auto-fill lookups (last known data for a document number or plate).
"""

from datetime import date, datetime, time
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from guardiao.config import settings
from guardiao.constants import AccessMode
from guardiao.models.access_log import AccessLog
from guardiao.schemas.access_log import AccessLogCreate
from guardiao.services.actor import Actor
from guardiao.services.errors import StoreError
from guardiao.utils.logger import get_logger

logger = get_logger(__name__)


def _clean(value: Optional[str], upper: bool = False) -> Optional[str]:
    value = (value or "").strip()
    if not value:
        return None
    return value.upper() if upper else value


def register_access(db: Session, data: AccessLogCreate, actor: Actor) -> AccessLog:
    """Insert one gate crossing. Vehicle fields are only kept for vehicle access."""
    is_vehicle = data.access_mode == AccessMode.VEHICLE
    now = datetime.now()
    entry = AccessLog(
        timestamp=now,
        guard_gate=data.guard_gate.value,
        name=data.name.strip().upper(),
        characteristic=data.characteristic.value,
        identification=data.identification.strip(),
        access_mode=data.access_mode.value,
        access_category=data.access_category.value,
        vehicle_model=_clean(data.vehicle_model, upper=True) if is_vehicle else None,
        vehicle_plate=_clean(data.vehicle_plate, upper=True) if is_vehicle else None,
        authorizer=_clean(data.authorizer),
        authorizer_id=_clean(data.authorizer_id),
        destination=_clean(data.destination),
        registered_by=actor.id,
        created_at=datetime.utcnow(),
    )
    db.add(entry)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"[ACCESS] Failed to register {entry.name} at {entry.guard_gate}: {e}")
        raise StoreError(str(e)) from e

    logger.info(f"[ACCESS] {entry.guard_gate} {entry.access_category} {entry.access_mode} "
                f"| {entry.name} | by {actor.id}")
    return entry


def query_access_logs(db: Session, start: Optional[date] = None, end: Optional[date] = None,
                      gate: Optional[str] = None, search: Optional[str] = None,
                      limit: Optional[int] = None):
    """
    Access rows newest first. `start`/`end` bound the timestamp by whole days;
    `search` is a case-insensitive contains over name, document and plate.
    """
    q = db.query(AccessLog)
    if start:
        q = q.filter(AccessLog.timestamp >= datetime.combine(start, time.min))
    if end:
        q = q.filter(AccessLog.timestamp <= datetime.combine(end, time.max))
    if gate:
        q = q.filter(AccessLog.guard_gate == gate)
    if search:
        pattern = f"%{search.strip()}%"
        q = q.filter(or_(
            AccessLog.name.ilike(pattern),
            AccessLog.identification.ilike(pattern),
            AccessLog.vehicle_plate.ilike(pattern),
        ))
    return q.order_by(AccessLog.timestamp.desc()).limit(limit or settings.ACCESS_LIST_LIMIT).all()


def lookup_latest(db: Session, identification: Optional[str] = None,
                  plate: Optional[str] = None) -> Optional[AccessLog]:
    """Most recent entry for a document number or plate, used to pre-fill the gate form."""
    if identification:
        criterion = AccessLog.identification == identification.strip()
    elif plate:
        criterion = AccessLog.vehicle_plate == plate.strip().upper()
    else:
        return None
    return db.query(AccessLog).filter(criterion).order_by(AccessLog.timestamp.desc()).first()

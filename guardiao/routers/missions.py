# guardiao/routers/missions.py
"""Mission orders (OMIS): register, list, move status, remove."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_
from sqlalchemy.orm import Session

from guardiao.constants import MissionStatus
from guardiao.database import get_db
from guardiao.models.mission_order import MissionOrder
from guardiao.routers.dependencies import commit_or_500, get_actor
from guardiao.schemas.mission_order import MissionOrderCreate, MissionOrderOut, MissionStatusUpdate
from guardiao.services.actor import Actor
from guardiao.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post("/mission-orders", response_model=MissionOrderOut, summary="Register a mission order")
def create_mission_order(body: MissionOrderCreate, db: Session = Depends(get_db), actor: Actor = Depends(get_actor)):
    omis_number = body.omis_number.strip()
    existing = db.query(MissionOrder).filter(MissionOrder.omis_number == omis_number).first()
    if existing:
        raise HTTPException(status_code=400, detail=f"OMIS {omis_number} already registered")
    order = MissionOrder(
        omis_number=omis_number,
        mission_type=body.mission_type,
        description=body.description,
        location=body.location,
        start_at=body.start_at,
        end_at=body.end_at,
        requester=body.requester,
        status=MissionStatus.REQUESTED.value,
        created_by=actor.id,
        created_at=datetime.utcnow(),
    )
    db.add(order)
    commit_or_500(db, f"register OMIS {order.omis_number}")
    logger.info(f"[MISSION] OMIS {order.omis_number} registered by {actor.name}")
    return order


@router.get("/mission-orders", response_model=list[MissionOrderOut], summary="List mission orders")
def list_mission_orders(status: Optional[MissionStatus] = None, search: Optional[str] = None,
                        limit: int = 100, db: Session = Depends(get_db)):
    q = db.query(MissionOrder)
    if status:
        q = q.filter(MissionOrder.status == status.value)
    if search:
        pattern = f"%{search.strip()}%"
        q = q.filter(or_(
            MissionOrder.omis_number.ilike(pattern),
            MissionOrder.mission_type.ilike(pattern),
            MissionOrder.requester.ilike(pattern),
            MissionOrder.location.ilike(pattern),
        ))
    return q.order_by(MissionOrder.start_at.desc()).limit(limit).all()


@router.put("/mission-orders/{order_id}/status", response_model=MissionOrderOut, summary="Change mission status")
def set_mission_status(order_id: int, body: MissionStatusUpdate, db: Session = Depends(get_db),
                       actor: Actor = Depends(get_actor)):
    if not actor.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    order = db.query(MissionOrder).filter(MissionOrder.id == order_id).first()
    if not order:
        raise HTTPException(status_code=404, detail="Mission order not found")
    order.status = body.status.value
    commit_or_500(db, f"update OMIS {order.omis_number}")
    logger.info(f"[MISSION] OMIS {order.omis_number} → {body.status.value} by {actor.name}")
    return order


@router.delete("/mission-orders/{order_id}", summary="Remove a mission order")
def delete_mission_order(order_id: int, db: Session = Depends(get_db), actor: Actor = Depends(get_actor)):
    if not actor.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    order = db.query(MissionOrder).filter(MissionOrder.id == order_id).first()
    if not order:
        raise HTTPException(status_code=404, detail="Mission order not found")
    omis_number = order.omis_number
    db.delete(order)
    commit_or_500(db, f"remove OMIS {omis_number}")
    return {"status": "removed", "omis": omis_number}

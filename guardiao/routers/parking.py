# guardiao/routers/parking.py
"""Parking permit requests for external vehicles and their review."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from guardiao.constants import ParkingStatus
from guardiao.database import get_db
from guardiao.models.parking_request import ParkingRequest
from guardiao.routers.dependencies import commit_or_500, get_actor
from guardiao.schemas.parking_request import ParkingRequestCreate, ParkingRequestOut, ParkingStatusUpdate
from guardiao.services.actor import Actor
from guardiao.services.statistics_service import parking_statistics
from guardiao.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post("/parking-requests", response_model=ParkingRequestOut, summary="Request a parking permit")
def create_parking_request(body: ParkingRequestCreate, db: Session = Depends(get_db)):
    """Open to visitors, no operator identity required."""
    request = ParkingRequest(
        full_name=body.full_name.strip().upper(),
        rank=body.rank.strip().upper() or "—",
        force=body.force,
        person_type=body.person_type.value,
        organization=body.organization.strip().upper() or "—",
        phone=body.phone,
        email=body.email,
        identification=body.identification.strip().upper() or None,
        vehicle_model=body.vehicle_model.strip().upper(),
        vehicle_plate=body.vehicle_plate.strip().upper(),
        vehicle_color=body.vehicle_color.strip().upper(),
        start_date=body.start_date,
        end_date=body.end_date,
        status=ParkingStatus.PENDING.value,
        created_at=datetime.utcnow(),
    )
    db.add(request)
    commit_or_500(db, f"register parking request for {request.vehicle_plate}")
    logger.info(f"[PARKING] Request for plate {request.vehicle_plate} ({request.full_name})")
    return request


@router.get("/parking-requests", response_model=list[ParkingRequestOut], summary="List parking requests")
def list_parking_requests(status: Optional[ParkingStatus] = None, plate: Optional[str] = None,
                          limit: int = 200, db: Session = Depends(get_db)):
    q = db.query(ParkingRequest)
    if status:
        q = q.filter(ParkingRequest.status == status.value)
    if plate:
        q = q.filter(ParkingRequest.vehicle_plate.ilike(f"%{plate.strip()}%"))
    return q.order_by(ParkingRequest.created_at.desc()).limit(limit).all()


@router.get("/parking-requests/stats", summary="Parking request counts for charts")
def parking_stats(db: Session = Depends(get_db)):
    return parking_statistics(db.query(ParkingRequest).all())


@router.put("/parking-requests/{request_id}/status", response_model=ParkingRequestOut,
            summary="Approve or deny a parking request")
def set_parking_status(request_id: int, body: ParkingStatusUpdate, db: Session = Depends(get_db),
                       actor: Actor = Depends(get_actor)):
    if not actor.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    request = db.query(ParkingRequest).filter(ParkingRequest.id == request_id).first()
    if not request:
        raise HTTPException(status_code=404, detail="Parking request not found")
    request.status = body.status.value
    request.reviewed_by = actor.name
    commit_or_500(db, f"review parking request {request_id}")
    logger.info(f"[PARKING] #{request_id} {body.status.value} by {actor.name}")
    return request


@router.delete("/parking-requests/{request_id}", summary="Remove a parking request")
def delete_parking_request(request_id: int, db: Session = Depends(get_db), actor: Actor = Depends(get_actor)):
    if not actor.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    request = db.query(ParkingRequest).filter(ParkingRequest.id == request_id).first()
    if not request:
        raise HTTPException(status_code=404, detail="Parking request not found")
    db.delete(request)
    commit_or_500(db, f"remove parking request {request_id}")
    return {"status": "removed", "id": request_id}

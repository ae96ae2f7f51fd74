# guardiao/routers/access_control.py
"""
Guard-gate access control.
POST /access-control            register one crossing (operator form)
POST /access-control/import     bulk import pasted spreadsheet text
GET  /access-control            gate log (day range, gate, search)
GET  /access-control/export     same filters, tab-separated text
GET  /access-control/stats      chart aggregations
GET  /access-control/lookup     last known data for a document/plate
WS   /access-control/lookup/ws  debounced auto-fill while typing
"""

import asyncio
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from guardiao.config import settings
from guardiao.database import SessionLocal, get_db
from guardiao.routers.dependencies import get_actor
from guardiao.schemas.access_log import (
    AccessImportOut, AccessImportRequest, AccessLogCreate, AccessLogOut, AccessLookupOut,
)
from guardiao.services import ai_service
from guardiao.services.access_control_service import lookup_latest, query_access_logs, register_access
from guardiao.services.access_import_parser import export_access_logs
from guardiao.services.access_import_service import import_access_logs
from guardiao.services.actor import Actor
from guardiao.services.debouncer import Debouncer
from guardiao.services.errors import StoreError
from guardiao.services.statistics_service import access_statistics, filter_access_records
from guardiao.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post("/access-control", response_model=AccessLogOut, summary="Register a gate crossing")
def create_access(body: AccessLogCreate, db: Session = Depends(get_db), actor: Actor = Depends(get_actor)):
    try:
        return register_access(db, body, actor)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/access-control/import", response_model=AccessImportOut, summary="Import pasted spreadsheet rows")
def import_access(body: AccessImportRequest, db: Session = Depends(get_db), actor: Actor = Depends(get_actor)):
    """
    Always answers 200: the result tells how many rows went in and, on a
    database failure, which batch stopped the import.
    """
    return import_access_logs(db, body.text, actor)


@router.get("/access-control", response_model=list[AccessLogOut], summary="Gate access log")
def list_access(day: Optional[date] = None, start: Optional[date] = None, end: Optional[date] = None,
                gate: Optional[str] = None, search: Optional[str] = None, limit: Optional[int] = None,
                db: Session = Depends(get_db)):
    """`day` is shorthand for start=end=day. Search matches name, document or plate."""
    if day:
        start = end = day
    return query_access_logs(db, start=start, end=end, gate=gate, search=search, limit=limit)


@router.get("/access-control/export", response_class=PlainTextResponse, summary="Export gate log as TSV")
def export_access(start: Optional[date] = None, end: Optional[date] = None, gate: Optional[str] = None,
                  db: Session = Depends(get_db)):
    rows = query_access_logs(db, start=start, end=end, gate=gate, limit=settings.STATISTICS_LIST_LIMIT)
    return PlainTextResponse(export_access_logs(rows), media_type="text/tab-separated-values")


def _access_stats(db, start, end, gate, characteristic, access_mode, hour_start, hour_end) -> dict:
    rows = query_access_logs(db, start=start, end=end, limit=settings.STATISTICS_LIST_LIMIT)
    rows = filter_access_records(rows, gate=gate, characteristic=characteristic, access_mode=access_mode,
                                 hour_start=hour_start, hour_end=hour_end)
    return access_statistics(rows)


@router.get("/access-control/stats", summary="Access statistics for charts")
def access_stats(start: Optional[date] = None, end: Optional[date] = None, gate: Optional[str] = None,
                 characteristic: Optional[str] = None, access_mode: Optional[str] = None,
                 hour_start: Optional[int] = None, hour_end: Optional[int] = None,
                 db: Session = Depends(get_db)):
    return _access_stats(db, start, end, gate, characteristic, access_mode, hour_start, hour_end)


@router.get("/access-control/stats/summary", summary="AI reading of the access statistics")
async def access_stats_summary(start: Optional[date] = None, end: Optional[date] = None,
                               gate: Optional[str] = None, db: Session = Depends(get_db)):
    stats = _access_stats(db, start, end, gate, None, None, None, None)
    return {"summary": await ai_service.access_statistics_summary(stats)}


def _lookup_out(entry) -> AccessLookupOut:
    if not entry:
        return AccessLookupOut(found=False)
    return AccessLookupOut(
        found=True,
        name=entry.name,
        characteristic=entry.characteristic,
        identification=entry.identification,
        vehicle_model=entry.vehicle_model,
        vehicle_plate=entry.vehicle_plate,
        destination=entry.destination,
    )


@router.get("/access-control/lookup", response_model=AccessLookupOut, summary="Auto-fill lookup")
def lookup_access(identification: Optional[str] = None, plate: Optional[str] = None,
                  db: Session = Depends(get_db)):
    return _lookup_out(lookup_latest(db, identification=identification, plate=plate))


def _lookup_sync(key: tuple) -> AccessLookupOut:
    field_name, value = key
    db = SessionLocal()
    try:
        if field_name == "plate":
            return _lookup_out(lookup_latest(db, plate=value))
        return _lookup_out(lookup_latest(db, identification=value))
    finally:
        db.close()


@router.websocket("/access-control/lookup/ws")
async def lookup_ws(websocket: WebSocket):
    """
    Client sends {"field": "identification" | "plate", "value": "..."} on every
    keystroke; the server answers once typing settles, only for the latest input.
    """
    await websocket.accept()

    async def lookup(key):
        return await asyncio.to_thread(_lookup_sync, key)

    async def deliver(key, result: AccessLookupOut):
        await websocket.send_json({"field": key[0], "value": key[1], "result": result.model_dump()})

    debouncer = Debouncer(lookup, deliver)
    try:
        while True:
            message = await websocket.receive_json()
            if not isinstance(message, dict):
                logger.warning(f"[LOOKUP] Ignoring non-object message: {message!r}")
                continue
            field_name = message.get("field", "identification")
            value = (message.get("value") or "").strip()
            if len(value) < 3:
                debouncer.cancel()
                continue
            debouncer.submit((field_name, value))
    except WebSocketDisconnect:
        logger.debug("[LOOKUP] Client disconnected")
    finally:
        await debouncer.close()

# guardiao/services/access_import_service.py
"""
Bulk import of pasted gate spreadsheets into the access_control table.

Rows are parsed and inserted in the same pass (no preview, no duplicate
check). Inserts go in fixed-size batches, committed one after another; the
first failing batch stops the import and earlier batches stay committed.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from guardiao.config import settings
from guardiao.models.access_log import AccessLog
from guardiao.services.access_import_parser import parse_access_log_text
from guardiao.services.actor import Actor
from guardiao.utils.logger import get_logger

logger = get_logger(__name__)

NO_RECORDS_MESSAGE = "Nenhum registro válido encontrado. Verifique se copiou o cabeçalho da planilha."


@dataclass
class ImportResult:
    status: str                # ok | empty | error
    inserted: int
    parsed: int
    message: str
    failed_batch: Optional[int] = None


def import_access_logs(db: Session, text: str, actor: Actor,
                       batch_size: Optional[int] = None) -> ImportResult:
    batch_size = batch_size or settings.IMPORT_BATCH_SIZE
    candidates = parse_access_log_text(text, registered_by=actor.id)

    if not candidates:
        logger.info(f"[IMPORT] {actor.id}: nothing to import")
        return ImportResult(status="empty", inserted=0, parsed=0, message=NO_RECORDS_MESSAGE)

    inserted = 0
    for batch_no, start in enumerate(range(0, len(candidates), batch_size), start=1):
        batch = candidates[start:start + batch_size]
        created_at = datetime.utcnow()
        try:
            db.add_all([AccessLog(**c.to_row(), created_at=created_at) for c in batch])
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"[IMPORT] Batch {batch_no} failed after {inserted} rows: {e}")
            return ImportResult(
                status="error",
                inserted=inserted,
                parsed=len(candidates),
                message=str(e),
                failed_batch=batch_no,
            )
        inserted += len(batch)
        logger.info(f"[IMPORT] Batch {batch_no} committed ({len(batch)} rows)")

    logger.info(f"[IMPORT] {actor.id} imported {inserted} access records")
    return ImportResult(
        status="ok",
        inserted=inserted,
        parsed=len(candidates),
        message=f"{inserted} registros importados com sucesso.",
    )

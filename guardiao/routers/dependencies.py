# guardiao/routers/dependencies.py
"""
Shared router dependencies.
Authentication happens upstream; the gateway forwards the operator identity
in X-Actor-* headers and every write endpoint receives it as an Actor.
"""

from typing import Optional

from fastapi import Header, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from guardiao.constants import AccessLevel
from guardiao.services.actor import Actor
from guardiao.utils.logger import get_logger

logger = get_logger(__name__)


def get_actor(
    x_actor_id: Optional[str] = Header(None),
    x_actor_name: Optional[str] = Header(None),
    x_actor_admin: bool = Header(False),
    x_actor_level: AccessLevel = Header(AccessLevel.N1),
) -> Actor:
    if not x_actor_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing X-Actor-Id header")
    return Actor(
        id=x_actor_id,
        name=x_actor_name or x_actor_id,
        is_admin=x_actor_admin,
        access_level=x_actor_level,
    )


def commit_or_500(db: Session, what: str):
    """Commit a router-level write; on failure roll back and return the driver message as a 500."""
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"[STORE] Failed to {what}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

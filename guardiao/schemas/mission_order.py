# guardiao/schemas/mission_order.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from guardiao.constants import MissionStatus


class MissionOrderCreate(BaseModel):
    omis_number: str = Field(..., min_length=1, max_length=50)
    mission_type: str
    description: str = ""
    location: str = ""
    start_at: datetime
    end_at: Optional[datetime] = None
    requester: str


class MissionStatusUpdate(BaseModel):
    status: MissionStatus


class MissionOrderOut(BaseModel):
    id: int
    omis_number: str
    mission_type: str
    description: Optional[str]
    location: Optional[str]
    start_at: datetime
    end_at: Optional[datetime]
    requester: str
    status: str
    created_by: str
    created_at: datetime

    class Config:
        from_attributes = True

# guardiao/schemas/occurrence.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from guardiao.constants import Urgency
from guardiao.services.occurrence_workflow import Status


class OccurrenceCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    type: str
    category: str
    urgency: Urgency = Urgency.MEDIUM
    date: Optional[datetime] = None          # defaults to now
    location: str = ""
    description: str = ""
    sector: Optional[str] = None


class OccurrenceUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    urgency: Optional[Urgency] = None
    sector: Optional[str] = None
    assigned_to: Optional[str] = None


class TransitionRequest(BaseModel):
    target: Status
    comment: Optional[str] = None


class NoteRequest(BaseModel):
    comment: str = Field(..., min_length=1)


class TimelineEntryOut(BaseModel):
    id: int
    status: str
    updated_by: str
    timestamp: datetime
    comment: Optional[str]

    class Config:
        from_attributes = True


class OccurrenceOut(BaseModel):
    id: int
    title: str
    type: str
    category: str
    urgency: str
    status: str
    date: datetime
    location: Optional[str]
    description: Optional[str]
    creator: str
    sector: Optional[str]
    assigned_to: Optional[str]
    created_at: Optional[datetime]
    timeline: list[TimelineEntryOut] = []

    class Config:
        from_attributes = True


class AIAnalysisOut(BaseModel):
    occurrence_id: Optional[int] = None
    analysis: str

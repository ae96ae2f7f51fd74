# guardiao/schemas/suggestion.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from guardiao.constants import SuggestionStatus


class SuggestionCreate(BaseModel):
    category: str
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    user_rank: Optional[str] = None
    user_sector: Optional[str] = None


class SuggestionAnswer(BaseModel):
    answer: str = Field(..., min_length=1)


class SuggestionStatusUpdate(BaseModel):
    status: SuggestionStatus


class SuggestionOut(BaseModel):
    id: int
    user_id: str
    user_name: str
    user_rank: Optional[str]
    user_sector: Optional[str]
    category: str
    title: str
    description: str
    status: str
    admin_answer: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True

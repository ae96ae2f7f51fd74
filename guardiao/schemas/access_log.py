# guardiao/schemas/access_log.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from guardiao.constants import AccessCategory, AccessMode, Characteristic, GuardGate


class AccessLogCreate(BaseModel):
    guard_gate: GuardGate = GuardGate.G1
    name: str = Field(..., min_length=1)
    characteristic: Characteristic = Characteristic.MILITAR
    identification: str = ""
    access_mode: AccessMode = AccessMode.PEDESTRIAN
    access_category: AccessCategory = AccessCategory.ENTRY
    vehicle_model: Optional[str] = None
    vehicle_plate: Optional[str] = None
    authorizer: Optional[str] = None
    authorizer_id: Optional[str] = None
    destination: Optional[str] = None


class AccessLogOut(BaseModel):
    id: int
    timestamp: datetime
    guard_gate: str
    name: str
    characteristic: str
    identification: Optional[str]
    access_mode: str
    access_category: str
    vehicle_model: Optional[str]
    vehicle_plate: Optional[str]
    destination: Optional[str]
    authorizer: Optional[str]
    authorizer_id: Optional[str]
    registered_by: str

    class Config:
        from_attributes = True


class AccessImportRequest(BaseModel):
    text: str


class AccessImportOut(BaseModel):
    status: str
    inserted: int
    parsed: int
    message: str
    failed_batch: Optional[int] = None


class AccessLookupOut(BaseModel):
    found: bool
    name: Optional[str] = None
    characteristic: Optional[str] = None
    identification: Optional[str] = None
    vehicle_model: Optional[str] = None
    vehicle_plate: Optional[str] = None
    destination: Optional[str] = None

# guardiao/schemas/parking_request.py
from pydantic import BaseModel, Field, model_validator
from datetime import date, datetime
from typing import Optional

from guardiao.constants import Characteristic, ParkingStatus


class ParkingRequestCreate(BaseModel):
    full_name: str = Field(..., min_length=1)
    rank: str = ""
    force: Optional[str] = None
    person_type: Characteristic = Characteristic.MILITAR
    organization: str = ""
    phone: Optional[str] = None
    email: Optional[str] = None
    identification: str = ""
    vehicle_model: str = Field(..., min_length=1)
    vehicle_plate: str = Field(..., min_length=1)
    vehicle_color: str = ""
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def check_period(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ParkingStatusUpdate(BaseModel):
    status: ParkingStatus


class ParkingRequestOut(BaseModel):
    id: int
    full_name: str
    rank: Optional[str]
    force: Optional[str]
    person_type: str
    organization: Optional[str]
    phone: Optional[str]
    email: Optional[str]
    identification: Optional[str]
    vehicle_model: str
    vehicle_plate: str
    vehicle_color: Optional[str]
    start_date: date
    end_date: date
    status: str
    reviewed_by: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True

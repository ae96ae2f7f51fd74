# guardiao/models/parking_request.py
"""
Parking permit requests for external vehicles (visitors, contractors,
personnel from other organisations). Reviewed by the access-control section.
"""

from sqlalchemy import Column, Integer, String, DateTime, Date
from guardiao.database import Base


class ParkingRequest(Base):
    __tablename__ = "parking_requests"

    id = Column(Integer, primary_key=True, autoincrement=True)
    full_name = Column(String(200), nullable=False)
    rank = Column(String(30))
    force = Column(String(50))
    person_type = Column(String(30), nullable=False, index=True)   # MILITAR | CIVIL | ...
    organization = Column(String(100))
    phone = Column(String(30))
    email = Column(String(200))
    identification = Column(String(100))
    vehicle_model = Column(String(100), nullable=False)
    vehicle_plate = Column(String(20), nullable=False, index=True)
    vehicle_color = Column(String(30))
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, index=True)         # Pendente | Aprovado | Negado
    reviewed_by = Column(String(200))
    created_at = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<ParkingRequest {self.id} plate={self.vehicle_plate} status={self.status}>"

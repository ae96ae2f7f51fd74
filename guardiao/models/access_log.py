# guardiao/models/access_log.py
"""
Guard-gate access log table (`access_control`).
One row per person/vehicle crossing a gate, written by the gate operator form
or by the spreadsheet importer. Rows are never updated after insert.
"""

from sqlalchemy import Column, Integer, String, DateTime
from guardiao.database import Base


class AccessLog(Base):
    __tablename__ = "access_control"

    id = Column(Integer, primary_key=True, autoincrement=True)
    timestamp = Column(DateTime, nullable=False, index=True)
    guard_gate = Column(String(20), nullable=False, index=True)   # PORTÃO G1 | G2 | G3
    name = Column(String(200), nullable=False)
    characteristic = Column(String(20), nullable=False)            # MILITAR | CIVIL | PRESTADOR | ENTREGADOR
    identification = Column(String(100), index=True)
    access_mode = Column(String(20), nullable=False)               # Pedestre | Veículo
    access_category = Column(String(20), nullable=False)           # Entrada | Saída
    vehicle_model = Column(String(100))
    vehicle_plate = Column(String(20), index=True)
    destination = Column(String(200))
    authorizer = Column(String(200))
    authorizer_id = Column(String(100))
    registered_by = Column(String(100), nullable=False)
    created_at = Column(DateTime)

    def __repr__(self):
        return f"<AccessLog {self.id} gate={self.guard_gate} name={self.name} cat={self.access_category}>"

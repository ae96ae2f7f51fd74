# guardiao/models/mission_order.py
"""
Mission orders (OMIS). The OMIS number is an opaque document identifier.
"""

from sqlalchemy import Column, Integer, String, DateTime, Text
from guardiao.database import Base


class MissionOrder(Base):
    __tablename__ = "mission_orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    omis_number = Column(String(50), unique=True, nullable=False, index=True)
    mission_type = Column(String(100), nullable=False)
    description = Column(Text)
    location = Column(String(200))
    start_at = Column(DateTime, nullable=False)
    end_at = Column(DateTime)
    requester = Column(String(200), nullable=False)
    status = Column(String(30), nullable=False, index=True)   # Solicitada | Aprovada | Em andamento | Concluída | Cancelada
    created_by = Column(String(100), nullable=False)
    created_at = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<MissionOrder {self.omis_number} status={self.status}>"

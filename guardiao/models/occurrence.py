# guardiao/models/occurrence.py
"""
Security occurrences and their dispatch timeline.
`occurrences.status` caches the status of the latest timeline entry; the
timeline table is append-only and is the authoritative history.
"""

from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from guardiao.database import Base


class Occurrence(Base):
    __tablename__ = "occurrences"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    type = Column(String(100), nullable=False)
    category = Column(String(100), nullable=False, index=True)
    urgency = Column(String(20), nullable=False, index=True)   # Baixa | Média | Alta | Crítica
    status = Column(String(60), nullable=False, index=True)
    date = Column(DateTime, nullable=False)
    location = Column(String(200))
    description = Column(Text)
    creator = Column(String(200), nullable=False)
    sector = Column(String(100))
    assigned_to = Column(String(200))
    created_at = Column(DateTime)

    timeline = relationship(
        "TimelineEntry",
        back_populates="occurrence",
        order_by="TimelineEntry.timestamp",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Occurrence {self.id} status={self.status} urgency={self.urgency}>"


class TimelineEntry(Base):
    __tablename__ = "occurrence_timeline"

    id = Column(Integer, primary_key=True, autoincrement=True)
    occurrence_id = Column(Integer, ForeignKey("occurrences.id"), nullable=False, index=True)
    status = Column(String(60), nullable=False)
    updated_by = Column(String(200), nullable=False)
    timestamp = Column(DateTime, nullable=False)
    comment = Column(Text)

    occurrence = relationship("Occurrence", back_populates="timeline")

    def __repr__(self):
        return f"<TimelineEntry {self.id} occ={self.occurrence_id} status={self.status}>"

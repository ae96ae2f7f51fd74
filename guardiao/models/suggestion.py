# guardiao/models/suggestion.py
"""
Suggestions inbox. Any user can send one; admins answer or change status.
"""

from sqlalchemy import Column, Integer, String, DateTime, Text
from guardiao.database import Base


class Suggestion(Base):
    __tablename__ = "suggestions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(100), nullable=False)
    user_name = Column(String(200), nullable=False)
    user_rank = Column(String(20))
    user_sector = Column(String(100))
    category = Column(String(100), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    status = Column(String(30), nullable=False, index=True)   # Pendente | Em análise | Respondida | Arquivada
    admin_answer = Column(Text)
    created_at = Column(DateTime, nullable=False, index=True)

    def __repr__(self):
        return f"<Suggestion {self.id} status={self.status}>"

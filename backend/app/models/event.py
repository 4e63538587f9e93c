"""
Модель мероприятия
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, TIMESTAMP
from sqlalchemy.sql import func
from ..database import Base


class Event(Base):
    """Мероприятие (встреча, группа поддержки, лекция)"""

    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    date = Column(DateTime, nullable=False, index=True)
    place = Column(String(255), nullable=True)
    image_url = Column(String(500), nullable=True)
    is_published = Column(Boolean, nullable=False, default=True)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Event {self.title} {self.date}>"

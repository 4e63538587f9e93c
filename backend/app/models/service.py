"""
Модель услуги (направления помощи)
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, JSON, TIMESTAMP
from sqlalchemy.sql import func
from ..database import Base


class Service(Base):
    """Направление психологической помощи"""

    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String(120), nullable=False, unique=True, index=True)
    title = Column(String(200), nullable=False)
    intro = Column(Text, nullable=False, default="")
    blocks = Column(JSON, nullable=False, default=list)  # [{"title": ..., "text": ...}]
    is_published = Column(Boolean, nullable=False, default=False)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Service {self.title} ({self.slug})>"

"""
Модель фотоотчёта (галерея)
"""
from sqlalchemy import Column, Integer, String, Boolean, TIMESTAMP
from sqlalchemy.sql import func
from ..database import Base


class PhotoReport(Base):
    """Фотография в галерее"""

    __tablename__ = "photo_reports"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    image_url = Column(String(500), nullable=False)
    is_published = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(TIMESTAMP, server_default=func.now())

    def __repr__(self):
        return f"<PhotoReport {self.title}>"

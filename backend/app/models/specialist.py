"""
Модель специалиста
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, TIMESTAMP
from sqlalchemy.sql import func
from ..database import Base


class Specialist(Base):
    """Специалист (психолог, консультант)"""

    __tablename__ = "specialists"

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String(120), nullable=False, unique=True, index=True)
    name = Column(String(120), nullable=False)
    role = Column(String(120), nullable=False)
    badge = Column(String(120), nullable=False)
    badge_tone = Column(String(20), nullable=False, default="indigo")  # indigo, rose, amber
    excerpt = Column(Text, nullable=False, default="")
    bio = Column(Text, nullable=False, default="")
    image_url = Column(String(500), nullable=True)
    is_published = Column(Boolean, nullable=False, default=False)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Specialist {self.name} ({self.slug})>"

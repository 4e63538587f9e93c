"""
Модель отзыва
"""
from datetime import datetime
from enum import Enum

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean
from ..database import Base


class ReviewStatus(str, Enum):
    """Статусы модерации отзыва"""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Review(Base):
    """Отзыв посетителя сайта"""

    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    text = Column(Text, nullable=False)  # 20-1000 символов
    author_name = Column(String(60), nullable=True)
    rating = Column(Integer, nullable=True)  # 1-5 или пусто
    is_anonymous = Column(Boolean, nullable=False, default=False)
    status = Column(String(20), nullable=False, default=ReviewStatus.PENDING.value, index=True)
    ip_hash = Column(String(64), nullable=True, index=True)  # sha256, не сам IP
    created_at = Column(DateTime, nullable=False, default=datetime.now, index=True)
    approved_at = Column(DateTime, nullable=True)

    def __repr__(self):
        return f"<Review #{self.id} ({self.status})>"

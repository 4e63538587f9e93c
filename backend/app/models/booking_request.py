"""
Модель заявки с сайта
"""
from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, Boolean
from sqlalchemy.sql import func
from ..database import Base


class BookingRequest(Base):
    """Заявка на консультацию с главной страницы"""

    __tablename__ = "booking_requests"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    phone = Column(String(40), nullable=False, index=True)
    email = Column(String(100), nullable=True)
    message = Column(Text, nullable=True)
    status = Column(String(20), default="new")  # new, contacted, closed
    telegram_sent = Column(Boolean, default=False)
    created_at = Column(TIMESTAMP, server_default=func.now())

    def __repr__(self):
        return f"<BookingRequest {self.name} ({self.status})>"

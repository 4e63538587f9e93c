"""
Модель переопределённого текста сайта
"""
from sqlalchemy import Column, String, Text, TIMESTAMP
from sqlalchemy.sql import func
from ..database import Base


class SiteText(Base):
    """Значение текстового блока, заданное в админке.

    Нет строки для ключа - используется текст по умолчанию.
    """

    __tablename__ = "site_texts"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<SiteText {self.key}>"

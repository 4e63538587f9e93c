"""
Схемы заявок на консультацию
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import EmailStr, Field, field_validator

from .common import CamelModel


class BookingCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=1, max_length=40)
    email: Optional[EmailStr] = None
    message: Optional[str] = None

    @field_validator("email", "message", mode="before")
    @classmethod
    def empty_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class BookingOut(CamelModel):
    id: int
    name: str
    phone: str
    email: Optional[str] = None
    message: Optional[str] = None
    status: str
    telegram_sent: bool
    created_at: Optional[datetime] = None

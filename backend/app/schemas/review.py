"""
Схемы отзывов
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator

from .common import CamelModel

TRUTHY_STRINGS = {"true", "on", "1", "yes"}


class ReviewCreate(CamelModel):
    """Отзыв из публичной формы. Поле-ловушка website проверяется до схемы."""

    text: str = Field(..., min_length=20, max_length=1000)
    name: Optional[str] = Field(None, max_length=60)
    rating: Optional[int] = Field(None, ge=1, le=5)
    is_anonymous: bool = False

    @field_validator("name", "rating", mode="before")
    @classmethod
    def empty_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("is_anonymous", mode="before")
    @classmethod
    def coerce_anonymous(cls, v: Any) -> Any:
        # Чекбокс формы приходит как "on", fetch-клиент шлёт true/"true"
        if v is None:
            return False
        if isinstance(v, str):
            return v.strip().lower() in TRUTHY_STRINGS
        return v


class PublicReview(CamelModel):
    """Отзыв в публичном списке - с готовыми подписью и звёздами"""

    id: int
    text: str
    author: str
    rating: Optional[int] = None
    stars: str
    created_at: datetime


class AdminReview(CamelModel):
    id: int
    text: str
    author_name: Optional[str] = None
    rating: Optional[int] = None
    is_anonymous: bool
    status: str
    created_at: datetime
    approved_at: Optional[datetime] = None

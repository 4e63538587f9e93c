"""
Схемы контента: мероприятия, услуги, специалисты, фотоотчёты
"""
from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import Field, field_validator

from .common import CamelModel
from ..services.content import is_valid_image_url


# ==================== Мероприятия ====================

class EventIn(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    date: datetime
    place: Optional[str] = None
    image_url: Optional[str] = None
    is_published: bool = True


class EventOut(CamelModel):
    id: int
    title: str
    description: str
    date: datetime
    place: Optional[str] = None
    image_url: Optional[str] = None
    is_published: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ==================== Услуги ====================

class ServiceBlock(CamelModel):
    title: str = ""
    text: str = ""


class ServiceIn(CamelModel):
    slug: str
    title: str = Field(..., min_length=1, max_length=200)
    intro: str = ""
    blocks: List[ServiceBlock] = []
    is_published: bool = False
    sort_order: int = 0


class ServiceOut(CamelModel):
    id: int
    slug: str
    title: str
    intro: str
    blocks: List[ServiceBlock]
    is_published: bool
    sort_order: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ==================== Специалисты ====================

BadgeTone = Literal["indigo", "rose", "amber"]


class SpecialistIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=120)
    role: str = Field(..., min_length=1, max_length=120)
    badge: str = Field(..., min_length=1, max_length=120)
    slug: str = ""  # пусто - берётся из имени
    badge_tone: BadgeTone = "indigo"
    excerpt: str = ""
    bio: str = ""
    image_url: Optional[str] = None
    is_published: bool = False
    sort_order: int = 0

    @field_validator("badge_tone", mode="before")
    @classmethod
    def default_tone(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return "indigo"
        return v


class SpecialistOut(CamelModel):
    id: int
    slug: str
    name: str
    role: str
    badge: str
    badge_tone: str
    excerpt: str
    bio: str
    image_url: Optional[str] = None
    is_published: bool
    sort_order: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ==================== Фотоотчёты ====================

class PhotoReportIn(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    image_url: str
    is_published: bool = True
    sort_order: int = 0

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, v: str) -> str:
        if not is_valid_image_url(v):
            raise ValueError("imageUrl must start with http(s)://, /uploads/ or /images/")
        return v


class PhotoReportOut(CamelModel):
    id: int
    title: str
    image_url: str
    is_published: bool
    sort_order: int
    created_at: Optional[datetime] = None

"""
Данные публичных страниц для фронтенда

Каждая страница собирается из базы при первом запросе и хранится в кеше
по своему пути ("/", "/reviews", "/services/slug"), пока изменения в админке
не сбросят этот путь.
"""
from datetime import datetime, timedelta
from typing import Iterable, List, Type

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..config import get_settings
from ..database import get_db
from ..errors import ApiError
from ..models.event import Event
from ..models.photo_report import PhotoReport
from ..models.service import Service
from ..models.specialist import Specialist
from ..schemas.content import EventOut, PhotoReportOut, ServiceOut, SpecialistOut
from ..services.page_cache import page_cache
from ..services.reviews import get_approved_reviews, to_public
from ..services.site_texts import get_site_texts

settings = get_settings()
router = APIRouter(prefix="/api/pages", tags=["pages"])

HOME_EVENTS_LIMIT = 3
# Прошедшие мероприятия остаются в списке ещё сутки
EVENTS_GRACE = timedelta(hours=24)


def _dump(schema: Type[BaseModel], items: Iterable) -> List[dict]:
    return [schema.model_validate(item).model_dump(mode="json", by_alias=True) for item in items]


def _upcoming_events(db: Session):
    return db.query(Event).filter(
        Event.is_published == True,
        Event.date >= datetime.now() - EVENTS_GRACE
    ).order_by(Event.date.asc(), Event.id.asc())


def _published_specialists(db: Session) -> List[Specialist]:
    return db.query(Specialist).filter(
        Specialist.is_published == True
    ).order_by(Specialist.sort_order.asc(), Specialist.created_at.desc(), Specialist.id.desc()).all()


def _reviews_payload(db: Session, limit: int) -> List[dict]:
    reviews = [to_public(r) for r in get_approved_reviews(db, limit)]
    return [r.model_dump(mode="json", by_alias=True) for r in reviews]


@router.get("/home")
def home_page(db: Session = Depends(get_db)):
    def build():
        return {
            "texts": get_site_texts(db),
            "upcomingEvents": _dump(EventOut, _upcoming_events(db).limit(HOME_EVENTS_LIMIT).all()),
            "specialists": _dump(SpecialistOut, _published_specialists(db)),
            "reviews": _reviews_payload(db, settings.REVIEWS_SECTION_LIMIT),
        }

    return page_cache.get_or_build("/", build)


@router.get("/reviews")
def reviews_page(db: Session = Depends(get_db)):
    return page_cache.get_or_build(
        "/reviews",
        lambda: {"reviews": _reviews_payload(db, settings.REVIEWS_PAGE_LIMIT)}
    )


@router.get("/services")
def services_page(db: Session = Depends(get_db)):
    def build():
        services = db.query(Service).filter(
            Service.is_published == True
        ).order_by(Service.sort_order.asc(), Service.created_at.desc(), Service.id.desc()).all()
        return {"services": _dump(ServiceOut, services)}

    return page_cache.get_or_build("/services", build)


@router.get("/services/{slug}")
def service_page(slug: str, db: Session = Depends(get_db)):
    def build():
        service = db.query(Service).filter(
            Service.slug == slug,
            Service.is_published == True
        ).first()
        if service is None:
            raise ApiError(404, "NOT_FOUND")
        return {"service": ServiceOut.model_validate(service).model_dump(mode="json", by_alias=True)}

    return page_cache.get_or_build(f"/services/{slug}", build)


@router.get("/specialists/{slug}")
def specialist_page(slug: str, db: Session = Depends(get_db)):
    def build():
        specialist = db.query(Specialist).filter(
            Specialist.slug == slug,
            Specialist.is_published == True
        ).first()
        if specialist is None:
            raise ApiError(404, "NOT_FOUND")
        return {"specialist": SpecialistOut.model_validate(specialist).model_dump(mode="json", by_alias=True)}

    return page_cache.get_or_build(f"/specialists/{slug}", build)


@router.get("/events")
def events_page(db: Session = Depends(get_db)):
    return page_cache.get_or_build(
        "/events",
        lambda: {"events": _dump(EventOut, _upcoming_events(db).all())}
    )


@router.get("/events/{event_id}")
def event_page(event_id: int, db: Session = Depends(get_db)):
    def build():
        event = db.query(Event).filter(
            Event.id == event_id,
            Event.is_published == True
        ).first()
        if event is None:
            raise ApiError(404, "NOT_FOUND")
        return {"event": EventOut.model_validate(event).model_dump(mode="json", by_alias=True)}

    return page_cache.get_or_build(f"/events/{event_id}", build)


@router.get("/gallery")
def gallery_page(db: Session = Depends(get_db)):
    def build():
        photos = db.query(PhotoReport).filter(
            PhotoReport.is_published == True
        ).order_by(PhotoReport.sort_order.asc(), PhotoReport.created_at.desc(), PhotoReport.id.desc()).all()
        return {"photos": _dump(PhotoReportOut, photos)}

    return page_cache.get_or_build("/gallery", build)

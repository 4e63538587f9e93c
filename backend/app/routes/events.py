"""
API роутер мероприятий
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ..database import get_db
from ..errors import ApiError, get_or_404
from ..models.event import Event
from ..schemas.content import EventIn, EventOut
from ..security import is_admin, require_admin
from ..services.content import blank_to_none, normalize_image_url, to_local_naive
from ..services.page_cache import revalidate_path

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/events", tags=["events"])


def _apply(event: Event, payload: EventIn) -> None:
    event.title = payload.title
    event.description = payload.description
    event.date = to_local_naive(payload.date)
    event.place = blank_to_none(payload.place)
    event.image_url = normalize_image_url(payload.image_url)
    event.is_published = payload.is_published


def _revalidate(event_id: int) -> None:
    revalidate_path("/", "/events", f"/events/{event_id}")


@router.get("", response_model=List[EventOut])
def list_events(request: Request, db: Session = Depends(get_db)):
    """Мероприятия по дате; гостям - только опубликованные"""
    query = db.query(Event)
    if not is_admin(request):
        query = query.filter(Event.is_published == True)
    return query.order_by(Event.date.asc(), Event.id.asc()).all()


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: int, request: Request, db: Session = Depends(get_db)):
    event = get_or_404(db, Event, event_id)
    if not event.is_published and not is_admin(request):
        raise ApiError(404, "NOT_FOUND")
    return event


@router.post("", response_model=EventOut, status_code=201, dependencies=[Depends(require_admin)])
def create_event(payload: EventIn, db: Session = Depends(get_db)):
    event = Event()
    _apply(event, payload)
    db.add(event)
    db.commit()
    db.refresh(event)

    logger.info("Создано мероприятие #%s: %s", event.id, event.title)
    _revalidate(event.id)
    return event


@router.api_route(
    "/{event_id}",
    methods=["PATCH", "PUT"],
    response_model=EventOut,
    dependencies=[Depends(require_admin)],
)
def update_event(event_id: int, payload: EventIn, db: Session = Depends(get_db)):
    event = get_or_404(db, Event, event_id)
    _apply(event, payload)
    db.commit()
    db.refresh(event)

    logger.info("Обновлено мероприятие #%s", event.id)
    _revalidate(event.id)
    return event


@router.delete("/{event_id}", dependencies=[Depends(require_admin)])
def delete_event(event_id: int, db: Session = Depends(get_db)):
    event = get_or_404(db, Event, event_id)
    db.delete(event)
    db.commit()

    logger.info("Удалено мероприятие #%s", event_id)
    _revalidate(event_id)
    return {"ok": True}

"""
API роутер специалистов
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ..database import get_db
from ..errors import ApiError, ensure_unique_slug, get_or_404
from ..models.specialist import Specialist
from ..schemas.content import SpecialistIn, SpecialistOut
from ..security import is_admin, require_admin
from ..services.content import normalize_image_url, normalize_slug
from ..services.page_cache import revalidate_path

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/specialists", tags=["specialists"])


def _slug_for(payload: SpecialistIn) -> str:
    # Пустой slug - из имени
    slug = normalize_slug(payload.slug or payload.name)
    if not slug:
        raise ApiError(400, "INVALID_SLUG")
    return slug


def _apply(specialist: Specialist, payload: SpecialistIn, slug: str) -> None:
    specialist.slug = slug
    specialist.name = payload.name
    specialist.role = payload.role
    specialist.badge = payload.badge
    specialist.badge_tone = payload.badge_tone
    specialist.excerpt = payload.excerpt
    specialist.bio = payload.bio
    specialist.image_url = normalize_image_url(payload.image_url)
    specialist.is_published = payload.is_published
    specialist.sort_order = payload.sort_order


def _revalidate(*slugs: str) -> None:
    revalidate_path("/", "/admin/specialists", *[f"/specialists/{slug}" for slug in slugs])


@router.get("", response_model=List[SpecialistOut])
def list_specialists(request: Request, db: Session = Depends(get_db)):
    query = db.query(Specialist)
    if not is_admin(request):
        query = query.filter(Specialist.is_published == True)
    return query.order_by(
        Specialist.sort_order.asc(),
        Specialist.created_at.desc(),
        Specialist.id.desc()
    ).all()


@router.get("/{specialist_id}", response_model=SpecialistOut)
def get_specialist(specialist_id: int, request: Request, db: Session = Depends(get_db)):
    specialist = get_or_404(db, Specialist, specialist_id)
    if not specialist.is_published and not is_admin(request):
        raise ApiError(404, "NOT_FOUND")
    return specialist


@router.post("", response_model=SpecialistOut, status_code=201, dependencies=[Depends(require_admin)])
def create_specialist(payload: SpecialistIn, db: Session = Depends(get_db)):
    slug = _slug_for(payload)
    ensure_unique_slug(db, Specialist, slug)

    specialist = Specialist()
    _apply(specialist, payload, slug)
    db.add(specialist)
    db.commit()
    db.refresh(specialist)

    logger.info("Добавлен специалист %s", specialist.slug)
    _revalidate(specialist.slug)
    return specialist


@router.api_route(
    "/{specialist_id}",
    methods=["PATCH", "PUT"],
    response_model=SpecialistOut,
    dependencies=[Depends(require_admin)],
)
def update_specialist(specialist_id: int, payload: SpecialistIn, db: Session = Depends(get_db)):
    specialist = get_or_404(db, Specialist, specialist_id)
    slug = _slug_for(payload)
    ensure_unique_slug(db, Specialist, slug, exclude_id=specialist.id)

    old_slug = specialist.slug
    _apply(specialist, payload, slug)
    db.commit()
    db.refresh(specialist)

    logger.info("Обновлён специалист %s", specialist.slug)
    _revalidate(old_slug, specialist.slug)
    return specialist


@router.delete("/{specialist_id}", dependencies=[Depends(require_admin)])
def delete_specialist(specialist_id: int, db: Session = Depends(get_db)):
    specialist = get_or_404(db, Specialist, specialist_id)
    slug = specialist.slug
    db.delete(specialist)
    db.commit()

    logger.info("Удалён специалист %s", slug)
    _revalidate(slug)
    return {"ok": True}

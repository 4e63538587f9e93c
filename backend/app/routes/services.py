"""
API роутер направлений помощи (услуг)
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ..database import get_db
from ..errors import ApiError, ensure_unique_slug, get_or_404
from ..models.service import Service
from ..schemas.content import ServiceIn, ServiceOut
from ..security import is_admin, require_admin
from ..services.content import normalize_blocks, normalize_slug
from ..services.page_cache import revalidate_path
from ..services.service_defaults import DEFAULT_SERVICES

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/services", tags=["services"])


def _clean_slug(raw: str) -> str:
    slug = normalize_slug(raw)
    if not slug:
        raise ApiError(400, "INVALID_SLUG")
    return slug


def _apply(service: Service, payload: ServiceIn, slug: str) -> None:
    service.slug = slug
    service.title = payload.title
    service.intro = payload.intro
    service.blocks = normalize_blocks(payload.blocks)
    service.is_published = payload.is_published
    service.sort_order = payload.sort_order


@router.get("", response_model=List[ServiceOut])
def list_services(request: Request, db: Session = Depends(get_db)):
    query = db.query(Service)
    if not is_admin(request):
        query = query.filter(Service.is_published == True)
    return query.order_by(Service.sort_order.asc(), Service.created_at.desc(), Service.id.desc()).all()


@router.get("/{service_id}", response_model=ServiceOut)
def get_service(service_id: int, request: Request, db: Session = Depends(get_db)):
    service = get_or_404(db, Service, service_id)
    if not service.is_published and not is_admin(request):
        raise ApiError(404, "NOT_FOUND")
    return service


@router.post("", response_model=ServiceOut, status_code=201, dependencies=[Depends(require_admin)])
def create_service(payload: ServiceIn, db: Session = Depends(get_db)):
    slug = _clean_slug(payload.slug)
    ensure_unique_slug(db, Service, slug)

    service = Service()
    _apply(service, payload, slug)
    db.add(service)
    db.commit()
    db.refresh(service)

    logger.info("Создана услуга %s", service.slug)
    revalidate_path("/services", f"/services/{service.slug}")
    return service


@router.post("/seed", dependencies=[Depends(require_admin)])
def seed_services(db: Session = Depends(get_db)):
    """Заполнить направления по умолчанию; существующие slug перезаписываются"""
    for item in DEFAULT_SERVICES:
        service = db.query(Service).filter(Service.slug == item["slug"]).first()
        if service is None:
            service = Service(slug=item["slug"])
            db.add(service)
        service.title = item["title"]
        service.intro = item["intro"]
        service.blocks = normalize_blocks(item["blocks"])
        service.sort_order = item["sort_order"]
        service.is_published = True
    db.commit()

    logger.info("Направления по умолчанию заполнены: %s", len(DEFAULT_SERVICES))
    revalidate_path("/services", *[f"/services/{item['slug']}" for item in DEFAULT_SERVICES])
    return {"ok": True, "count": len(DEFAULT_SERVICES)}


@router.api_route(
    "/{service_id}",
    methods=["PATCH", "PUT"],
    response_model=ServiceOut,
    dependencies=[Depends(require_admin)],
)
def update_service(service_id: int, payload: ServiceIn, db: Session = Depends(get_db)):
    service = get_or_404(db, Service, service_id)
    slug = _clean_slug(payload.slug)
    ensure_unique_slug(db, Service, slug, exclude_id=service.id)

    old_slug = service.slug
    _apply(service, payload, slug)
    db.commit()
    db.refresh(service)

    logger.info("Обновлена услуга %s", service.slug)
    revalidate_path("/services", f"/services/{old_slug}", f"/services/{service.slug}")
    return service


@router.delete("/{service_id}", dependencies=[Depends(require_admin)])
def delete_service(service_id: int, db: Session = Depends(get_db)):
    service = get_or_404(db, Service, service_id)
    slug = service.slug
    db.delete(service)
    db.commit()

    logger.info("Удалена услуга %s", slug)
    revalidate_path("/services", f"/services/{slug}")
    return {"ok": True}

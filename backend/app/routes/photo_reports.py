"""
API роутер фотоотчётов (галерея)
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ..database import get_db
from ..errors import ApiError, get_or_404
from ..models.photo_report import PhotoReport
from ..schemas.content import PhotoReportIn, PhotoReportOut
from ..security import is_admin, require_admin
from ..services.page_cache import revalidate_path

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/photo-reports", tags=["gallery"])

GALLERY_PAGES = ("/gallery", "/admin/gallery")


def _apply(photo: PhotoReport, payload: PhotoReportIn) -> None:
    photo.title = payload.title
    photo.image_url = payload.image_url
    photo.is_published = payload.is_published
    photo.sort_order = payload.sort_order


@router.get("", response_model=List[PhotoReportOut])
def list_photo_reports(request: Request, db: Session = Depends(get_db)):
    query = db.query(PhotoReport)
    if not is_admin(request):
        query = query.filter(PhotoReport.is_published == True)
    return query.order_by(
        PhotoReport.sort_order.asc(),
        PhotoReport.created_at.desc(),
        PhotoReport.id.desc()
    ).all()


@router.get("/{photo_id}", response_model=PhotoReportOut)
def get_photo_report(photo_id: int, request: Request, db: Session = Depends(get_db)):
    photo = get_or_404(db, PhotoReport, photo_id)
    if not photo.is_published and not is_admin(request):
        raise ApiError(404, "NOT_FOUND")
    return photo


@router.post("", response_model=PhotoReportOut, status_code=201, dependencies=[Depends(require_admin)])
def create_photo_report(payload: PhotoReportIn, db: Session = Depends(get_db)):
    photo = PhotoReport()
    _apply(photo, payload)
    db.add(photo)
    db.commit()
    db.refresh(photo)

    logger.info("Добавлено фото #%s", photo.id)
    revalidate_path(*GALLERY_PAGES)
    return photo


@router.api_route(
    "/{photo_id}",
    methods=["PATCH", "PUT"],
    response_model=PhotoReportOut,
    dependencies=[Depends(require_admin)],
)
def update_photo_report(photo_id: int, payload: PhotoReportIn, db: Session = Depends(get_db)):
    photo = get_or_404(db, PhotoReport, photo_id)
    _apply(photo, payload)
    db.commit()
    db.refresh(photo)

    revalidate_path(*GALLERY_PAGES)
    return photo


@router.delete("/{photo_id}", dependencies=[Depends(require_admin)])
def delete_photo_report(photo_id: int, db: Session = Depends(get_db)):
    photo = get_or_404(db, PhotoReport, photo_id)
    db.delete(photo)
    db.commit()

    logger.info("Удалено фото #%s", photo_id)
    revalidate_path(*GALLERY_PAGES)
    return {"ok": True}

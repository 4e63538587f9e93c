"""
Модерация отзывов (только администратор)
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Form
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.review import ReviewStatus
from ..schemas.review import AdminReview
from ..security import require_admin
from ..services.reviews import approve_review, delete_review, list_reviews_for_admin, reject_review

router = APIRouter(
    prefix="/api/admin/reviews",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)

# Список отзывов в админ-панели
ADMIN_REVIEWS_URL = "/admin/review/list"


def _back_to_list() -> RedirectResponse:
    return RedirectResponse(ADMIN_REVIEWS_URL, status_code=303)


@router.get("", response_model=List[AdminReview])
def list_reviews(status: Optional[ReviewStatus] = None, db: Session = Depends(get_db)):
    return list_reviews_for_admin(db, status)


@router.post("/approve")
def approve(id: Optional[int] = Form(None), db: Session = Depends(get_db)):
    if id is not None:
        approve_review(db, id)
    return _back_to_list()


@router.post("/reject")
def reject(id: Optional[int] = Form(None), db: Session = Depends(get_db)):
    if id is not None:
        reject_review(db, id)
    return _back_to_list()


@router.post("/delete")
def delete(id: Optional[int] = Form(None), db: Session = Depends(get_db)):
    if id is not None:
        delete_review(db, id)
    return _back_to_list()

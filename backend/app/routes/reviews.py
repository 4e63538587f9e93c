"""
API роутер отзывов: форма на сайте и публичный список
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session

from ..config import get_settings
from ..database import get_db
from ..schemas.review import PublicReview, ReviewCreate
from ..services.client_ip import get_client_ip, hash_ip
from ..services.reviews import RateLimited, get_approved_reviews, submit_review, to_public

settings = get_settings()
logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["reviews"])


@router.post("/reviews")
async def create_review(request: Request, db: Session = Depends(get_db)):
    """Отзыв с сайта.

    Всегда HTTP 200, результат в теле: {"ok": true} или
    {"ok": false, "error": "validation" | "rate_limited" | "server_error"}.
    """
    try:
        try:
            raw = await request.json()
        except ValueError:
            return {"ok": False, "error": "validation"}

        if not isinstance(raw, dict):
            return {"ok": False, "error": "validation"}

        # Поле-ловушка: боту отвечаем успехом, но ничего не сохраняем
        website = raw.get("website")
        if str(website if website is not None else "").strip():
            logger.info("Отзыв отброшен: заполнено поле-ловушка")
            return {"ok": True}

        try:
            data = ReviewCreate.model_validate(raw)
        except ValidationError:
            return {"ok": False, "error": "validation"}

        ip_hash = hash_ip(get_client_ip(request))

        try:
            submit_review(db, data, ip_hash)
        except RateLimited:
            return {"ok": False, "error": "rate_limited"}

        return {"ok": True}
    except Exception:
        logger.exception("Ошибка сохранения отзыва")
        db.rollback()
        return {"ok": False, "error": "server_error"}


@router.get("/reviews", response_model=List[PublicReview])
def list_reviews(
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db)
):
    """Опубликованные отзывы, новые первыми"""
    limit = min(limit or settings.REVIEWS_SECTION_LIMIT, settings.REVIEWS_PAGE_LIMIT)
    return [to_public(r) for r in get_approved_reviews(db, limit)]

"""
Сервис отзывов: приём с сайта, модерация, публичный список

Жизненный цикл отзыва:
    PENDING  --approve-->  APPROVED
    PENDING  --reject--->  REJECTED
    REJECTED --approve-->  APPROVED
    APPROVED --reject--->  REJECTED
Повторное действие с тем же статусом допустимо (approved_at обновляется).
Удалить можно в любом статусе. Обратно в PENDING отзыв не возвращается.
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy.orm import Session

from ..config import get_settings
from ..models.review import Review, ReviewStatus
from ..schemas.review import PublicReview, ReviewCreate
from .page_cache import revalidate_path

settings = get_settings()
logger = logging.getLogger(__name__)

ANONYMOUS_AUTHOR = "Анонимно"
NO_RATING = "—"
STAR_FILLED = "★"
STAR_EMPTY = "☆"

# Страницы, на которых виден результат модерации
REVIEW_PAGES = ("/", "/reviews", "/admin/reviews")


class RateLimited(Exception):
    """Слишком много отзывов с одного IP за окно"""


# ==================== ПРИЁМ ОТЗЫВА ====================

def count_recent_submissions(db: Session, ip_hash: str, now: Optional[datetime] = None) -> int:
    now = now or datetime.now()
    window_start = now - timedelta(minutes=settings.REVIEW_RATE_LIMIT_WINDOW_MINUTES)
    return db.query(Review).filter(
        Review.ip_hash == ip_hash,
        Review.created_at > window_start
    ).count()


def submit_review(db: Session, data: ReviewCreate, ip_hash: Optional[str]) -> Review:
    """Сохранить отзыв со статусом PENDING.

    Лимит мягкий: подсчёт и вставка - два отдельных запроса без блокировки,
    параллельные отправки могут ненадолго превысить лимит.
    Без ip_hash (IP не определён) лимит не проверяется.
    """
    if ip_hash:
        recent = count_recent_submissions(db, ip_hash)
        if recent >= settings.REVIEW_RATE_LIMIT_MAX:
            logger.info("Отзыв отклонён лимитом: %s отзывов за окно", recent)
            raise RateLimited()

    review = Review(
        text=data.text,
        rating=data.rating,
        is_anonymous=data.is_anonymous,
        author_name=None if data.is_anonymous else (data.name or None),
        status=ReviewStatus.PENDING.value,
        ip_hash=ip_hash,
    )
    db.add(review)
    db.commit()
    db.refresh(review)

    logger.info("Новый отзыв #%s ожидает модерации", review.id)
    return review


# ==================== МОДЕРАЦИЯ ====================

def _get_review(db: Session, review_id: int) -> Review:
    # .one() бросает NoResultFound - ошибка уходит наверх, не глушится
    return db.query(Review).filter(Review.id == review_id).one()


def approve_review(db: Session, review_id: int) -> Review:
    review = _get_review(db, review_id)
    review.status = ReviewStatus.APPROVED.value
    review.approved_at = datetime.now()
    db.commit()
    db.refresh(review)

    revalidate_path(*REVIEW_PAGES)
    logger.info("Отзыв #%s опубликован", review_id)
    return review


def reject_review(db: Session, review_id: int) -> Review:
    review = _get_review(db, review_id)
    review.status = ReviewStatus.REJECTED.value
    db.commit()
    db.refresh(review)

    revalidate_path(*REVIEW_PAGES)
    logger.info("Отзыв #%s отклонён", review_id)
    return review


def delete_review(db: Session, review_id: int) -> None:
    review = _get_review(db, review_id)
    db.delete(review)
    db.commit()

    revalidate_path(*REVIEW_PAGES)
    logger.info("Отзыв #%s удалён", review_id)


# ==================== СПИСКИ ====================

def get_approved_reviews(db: Session, limit: Optional[int] = None) -> List[Review]:
    """Опубликованные отзывы, новые первыми"""
    limit = limit or settings.REVIEWS_SECTION_LIMIT
    return db.query(Review).filter(
        Review.status == ReviewStatus.APPROVED.value
    ).order_by(Review.created_at.desc(), Review.id.desc()).limit(limit).all()


def list_reviews_for_admin(db: Session, status: Optional[ReviewStatus] = None) -> List[Review]:
    query = db.query(Review)
    if status is not None:
        query = query.filter(Review.status == status.value)
    return query.order_by(Review.created_at.desc(), Review.id.desc()).all()


def display_author(review: Review) -> str:
    if review.is_anonymous or not review.author_name:
        return ANONYMOUS_AUTHOR
    return review.author_name


def render_stars(rating: Optional[int]) -> str:
    if not rating:
        return NO_RATING
    filled = max(0, min(5, rating))
    return STAR_FILLED * filled + STAR_EMPTY * (5 - filled)


def to_public(review: Review) -> PublicReview:
    return PublicReview(
        id=review.id,
        text=review.text,
        author=display_author(review),
        rating=review.rating,
        stars=render_stars(review.rating),
        created_at=review.created_at,
    )

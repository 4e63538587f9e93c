"""
API роутер заявок на консультацию
"""
import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.booking_request import BookingRequest
from ..schemas.booking import BookingCreate, BookingOut
from ..security import require_admin
from ..services.notifications import NotificationService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["booking"])


@router.post("/booking")
async def create_booking(payload: BookingCreate, db: Session = Depends(get_db)):
    """Заявка с сайта; уведомление в Telegram не влияет на ответ"""
    booking = BookingRequest(
        name=payload.name,
        phone=payload.phone,
        email=payload.email,
        message=payload.message,
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)
    logger.info("Новая заявка #%s", booking.id)

    if await NotificationService().notify_booking_request(booking):
        booking.telegram_sent = True
        db.commit()

    return {"ok": True, "id": booking.id}


@router.get("/admin/bookings", response_model=List[BookingOut], dependencies=[Depends(require_admin)])
def list_bookings(db: Session = Depends(get_db)):
    return db.query(BookingRequest).order_by(BookingRequest.created_at.desc(), BookingRequest.id.desc()).all()

"""
SQLAlchemy модели для базы данных
"""
from .review import Review, ReviewStatus
from .specialist import Specialist
from .service import Service
from .event import Event
from .photo_report import PhotoReport
from .booking_request import BookingRequest
from .site_text import SiteText

__all__ = [
    "Review",
    "ReviewStatus",
    "Specialist",
    "Service",
    "Event",
    "PhotoReport",
    "BookingRequest",
    "SiteText"
]

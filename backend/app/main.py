"""
Главный файл FastAPI приложения
Сайт психологической поддержки: отзывы, мероприятия, специалисты, направления помощи
"""
import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from .admin import setup_admin
from .config import get_settings
from .database import engine, init_db
from .errors import register_error_handlers
from .logging_config import setup_logging
from .routes.admin_reviews import router as admin_reviews_router
from .routes.auth import router as auth_router
from .routes.bookings import router as bookings_router
from .routes.events import router as events_router
from .routes.pages import router as pages_router
from .routes.photo_reports import router as photo_reports_router
from .routes.reviews import router as reviews_router
from .routes.services import router as services_router
from .routes.site_texts import router as site_texts_router
from .routes.specialists import router as specialists_router
from .routes.uploads import router as uploads_router

settings = get_settings()
setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
logger = logging.getLogger(__name__)

# FastAPI приложение
app = FastAPI(
    title="Psychological Support Site API",
    description="API сайта психологической поддержки",
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.DEBUG else [settings.SITE_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Сессия администратора (API и /admin)
app.add_middleware(SessionMiddleware, secret_key=settings.SECRET_KEY)

register_error_handlers(app)

# Подключение роутеров
app.include_router(auth_router)
app.include_router(reviews_router)
app.include_router(admin_reviews_router)
app.include_router(events_router)
app.include_router(services_router)
app.include_router(specialists_router)
app.include_router(photo_reports_router)
app.include_router(site_texts_router)
app.include_router(bookings_router)
app.include_router(uploads_router)
app.include_router(pages_router)

# Админ-панель
setup_admin(app, engine)

# Загруженные изображения
upload_path = Path(settings.UPLOAD_DIR)
upload_path.mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=str(upload_path)), name="uploads")


@app.on_event("startup")
def on_startup():
    init_db()
    logger.info("Приложение запущено (%s)", settings.ENVIRONMENT)


@app.get("/health")
async def health_check():
    return {"status": "ok", "environment": settings.ENVIRONMENT}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="127.0.0.1", port=8000, reload=settings.DEBUG)

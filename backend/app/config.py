"""
Конфигурация приложения
"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from pathlib import Path
from typing import List, Optional


class Settings(BaseSettings):
    """Настройки приложения"""

    # Database
    DATABASE_URL: str = "sqlite:///./support_site.db"
    # Пул соединений (только PostgreSQL)
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_ECHO: bool = False

    # Security
    # SECRET_KEY подписывает cookie сессии и служит солью для хеша IP
    SECRET_KEY: str = "local-development-secret-key-change-in-production"

    # Администратор сайта
    ADMIN_EMAIL: str = "admin@example.com"
    # Открытый пароль или bcrypt-хеш (начинается с "$2")
    ADMIN_PASSWORD: str = "change-me"

    # Telegram (уведомления о заявках на консультацию)
    TELEGRAM_BOT_TOKEN: Optional[str] = None
    TELEGRAM_CHAT_ID: Optional[str] = None

    # Application
    SITE_URL: str = "http://localhost:8000"
    LOG_LEVEL: str = "INFO"
    # Файл лога в дополнение к консоли
    LOG_FILE: Optional[str] = None

    # Загрузка изображений
    UPLOAD_DIR: str = "uploads"
    UPLOAD_MAX_BYTES: int = 8 * 1024 * 1024  # 8 MB
    UPLOAD_ALLOWED_EXTENSIONS: List[str] = [".png", ".jpg", ".jpeg", ".webp", ".gif"]

    # Отзывы
    REVIEW_RATE_LIMIT_MAX: int = 3
    REVIEW_RATE_LIMIT_WINDOW_MINUTES: int = 10
    REVIEWS_SECTION_LIMIT: int = 6  # блок отзывов на главной
    REVIEWS_PAGE_LIMIT: int = 60  # страница /reviews

    # Development
    DEBUG: bool = True
    ENVIRONMENT: str = "development"

    class Config:
        # Путь к .env относительно каталога backend
        env_file = Path(__file__).resolve().parent.parent / ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Получить настройки приложения (с кешированием)"""
    return Settings()

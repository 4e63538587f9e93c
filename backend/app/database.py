"""
Движок SQLAlchemy, сессии и создание таблиц
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import Settings, get_settings

settings = get_settings()


def engine_options(config: Settings) -> dict:
    """Параметры create_engine для URL из настроек"""
    options = {"echo": config.DB_ECHO}
    if config.DATABASE_URL.startswith("sqlite"):
        # Сессии sqladmin и TestClient живут в других потоках
        options["connect_args"] = {"check_same_thread": False}
    else:
        options.update(
            pool_pre_ping=True,
            pool_size=config.DB_POOL_SIZE,
            max_overflow=config.DB_MAX_OVERFLOW,
        )
    return options


engine = create_engine(settings.DATABASE_URL, **engine_options(settings))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """Сессия на запрос"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Создать недостающие таблицы"""
    from . import models  # noqa: F401 - регистрация моделей в metadata

    Base.metadata.create_all(bind=engine)

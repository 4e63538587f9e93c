"""
Скрипт инициализации базы данных
Создаёт таблицы и добавляет начальные данные
"""
from app.database import SessionLocal, init_db
from app.models.service import Service
from app.models.specialist import Specialist
from app.services.content import normalize_blocks
from app.services.service_defaults import DEFAULT_SERVICES

INITIAL_SPECIALISTS = [
    {
        "slug": "anna-p",
        "name": "Анна П.",
        "role": "Психолог-консультант",
        "badge": "Опыт кризисной помощи",
        "badge_tone": "indigo",
        "excerpt": "Кризисная помощь, работа с тревогой, утратой и шоковыми состояниями.",
        "bio": (
            "Анна работает с людьми в острых жизненных ситуациях, "
            "помогает восстановить чувство опоры и безопасности."
        ),
        "is_published": True,
        "sort_order": 1
    },
]


def init_specialists(db):
    """Добавить специалистов, которых ещё нет"""
    added = 0
    for data in INITIAL_SPECIALISTS:
        if db.query(Specialist).filter(Specialist.slug == data["slug"]).first():
            continue
        db.add(Specialist(**data))
        added += 1
    db.commit()
    print(f"Специалистов добавлено: {added}")


def init_services(db):
    """Добавить направления помощи (если таблица пуста)"""
    existing = db.query(Service).count()
    if existing > 0:
        print(f"Направления уже существуют ({existing} шт.), пропускаем...")
        return

    for data in DEFAULT_SERVICES:
        db.add(Service(
            slug=data["slug"],
            title=data["title"],
            intro=data["intro"],
            blocks=normalize_blocks(data["blocks"]),
            sort_order=data["sort_order"],
            is_published=True
        ))
    db.commit()
    print(f"Добавлено {len(DEFAULT_SERVICES)} направлений!")


if __name__ == "__main__":
    print("Создание таблиц...")
    init_db()
    print("Таблицы созданы!")

    db = SessionLocal()
    try:
        init_specialists(db)
        init_services(db)
    finally:
        db.close()

    print("\nИнициализация завершена!")
    print("Теперь можно запустить сервер: python -m uvicorn app.main:app --reload")

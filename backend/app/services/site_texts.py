"""
Тексты сайта: значения по умолчанию и переопределения из админки
"""
import logging
from typing import Dict, Iterable, List, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.site_text import SiteText
from .page_cache import revalidate_path

logger = logging.getLogger(__name__)

SITE_TEXT_DEFAULTS: Dict[str, str] = {
    "home.hero.badge": "Про Семью, Про Единство",
    "home.hero.title": "Вы не одни.\nМы рядом, чтобы поддержать вас.",
    "home.hero.subtitle": "Психологическая поддержка для вас.",
    "home.hero.ctaPrimary": "Обратитесь к нам прямо сейчас",
    "home.hero.ctaSecondary": "Что мы делаем",

    "home.what.title": "Что мы делаем",
    "home.what.subtitle": "Основные направления поддержки — просто и по делу.",
    "home.what.card1.title": "Консультации психологов",
    "home.what.card1.description": (
        "Индивидуальная поддержка онлайн или в другом удобном формате. "
        "Помогаем снизить тревогу, вернуть опору и ясность."
    ),
    "home.what.card2.title": "Группы поддержки и терапии",
    "home.what.card2.description": (
        "Встречи, где можно быть услышанным и не оставаться один на один с переживаниями. "
        "Тёплая среда и понятные правила."
    ),
    "home.what.card3.title": "Информационные ресурсы и помощь близким",
    "home.what.card3.description": (
        "Рекомендации для родных и друзей, ответы на частые вопросы, аккуратные материалы о том, "
        "как поддерживать и не выгорать."
    ),

    "footer.about": (
        "Психологическая поддержка гражданам и их семьям, пережившим тяжёлые события. "
        "Бережно, конфиденциально, рядом."
    ),
    "footer.links.title": "Информация",
    "footer.help.label": "Помощь проекту",
    "footer.help.href": "/support",
    "footer.admin.label": "Админ",
    "footer.emergency": (
        "Если вы чувствуете угрозу жизни или сильный кризис — пожалуйста, "
        "обратитесь в экстренные службы вашего региона."
    ),
}

# (группа, ключ, подпись, тип поля)
SITE_TEXT_FIELDS = [
    ("Главная — первый экран", "home.hero.badge", "Бейдж над заголовком", "text"),
    ("Главная — первый экран", "home.hero.title", "Заголовок (можно перенос строки)", "textarea"),
    ("Главная — первый экран", "home.hero.subtitle", "Подзаголовок", "text"),
    ("Главная — первый экран", "home.hero.ctaPrimary", "Кнопка основная", "text"),
    ("Главная — первый экран", "home.hero.ctaSecondary", "Кнопка вторичная", "text"),

    ("Главная — «Что мы делаем»", "home.what.title", "Заголовок секции", "text"),
    ("Главная — «Что мы делаем»", "home.what.subtitle", "Подзаголовок секции", "text"),
    ("Главная — «Что мы делаем»", "home.what.card1.title", "Карточка 1: заголовок", "text"),
    ("Главная — «Что мы делаем»", "home.what.card1.description", "Карточка 1: описание", "textarea"),
    ("Главная — «Что мы делаем»", "home.what.card2.title", "Карточка 2: заголовок", "text"),
    ("Главная — «Что мы делаем»", "home.what.card2.description", "Карточка 2: описание", "textarea"),
    ("Главная — «Что мы делаем»", "home.what.card3.title", "Карточка 3: заголовок", "text"),
    ("Главная — «Что мы делаем»", "home.what.card3.description", "Карточка 3: описание", "textarea"),

    ("Футер", "footer.about", "Описание проекта", "textarea"),
    ("Футер", "footer.links.title", "Заголовок блока ссылок", "text"),
    ("Футер", "footer.help.label", "Ссылка «Помощь проекту»: текст", "text"),
    ("Футер", "footer.help.href", "Ссылка «Помощь проекту»: URL", "text"),
    ("Футер", "footer.admin.label", "Ссылка «Админ»: текст", "text"),
    ("Футер", "footer.emergency", "Текст предупреждения", "textarea"),
]


def normalize_value(value: Optional[str]) -> str:
    return str(value if value is not None else "").replace("\r\n", "\n").strip()


def clean_override(key: Optional[str], value: Optional[str]) -> str:
    """Значение переопределения для записи в базу из админ-панели.

    Пустой текст или текст по умолчанию не сохраняется - для сброса
    запись нужно удалить.
    """
    if key not in SITE_TEXT_DEFAULTS:
        raise ValueError(f"Неизвестный ключ текста: {key}")

    cleaned = normalize_value(value)
    if not cleaned:
        raise ValueError("Пустой текст не сохраняется, удалите запись")
    if cleaned == normalize_value(SITE_TEXT_DEFAULTS[key]):
        raise ValueError("Текст совпадает со значением по умолчанию")
    return cleaned


def get_site_texts(db: Session, keys: Optional[Iterable[str]] = None) -> Dict[str, str]:
    """Тексты по ключам: значение по умолчанию, поверх - сохранённое в базе.

    Неизвестные ключи пропускаются. Если база недоступна, отдаются умолчания.
    """
    requested = [k for k in (keys or SITE_TEXT_DEFAULTS) if k in SITE_TEXT_DEFAULTS]
    if not requested:
        requested = list(SITE_TEXT_DEFAULTS)

    out = {key: SITE_TEXT_DEFAULTS[key] for key in requested}

    try:
        items = db.query(SiteText).filter(SiteText.key.in_(requested)).all()
    except SQLAlchemyError:
        logger.exception("Не удалось загрузить тексты сайта, используются значения по умолчанию")
        db.rollback()
        return out

    for item in items:
        out[item.key] = item.value
    return out


def get_site_text_groups(db: Session) -> List[dict]:
    """Поля для формы админки, сгруппированные по разделам сайта"""
    values = get_site_texts(db)
    groups: Dict[str, List[dict]] = {}
    for group, key, label, field_type in SITE_TEXT_FIELDS:
        groups.setdefault(group, []).append({
            "key": key,
            "label": label,
            "type": field_type,
            "value": values[key],
            "default": SITE_TEXT_DEFAULTS[key],
        })
    return [{"group": group, "fields": fields} for group, fields in groups.items()]


def save_site_texts(db: Session, submitted: Mapping[str, Optional[str]]) -> Dict[str, str]:
    """Сохранить тексты из формы одной транзакцией.

    Пустое значение или совпадающее с умолчанием удаляет переопределение.
    """
    changed = []
    try:
        for key, raw_value in submitted.items():
            if key not in SITE_TEXT_DEFAULTS:
                continue

            value = normalize_value(raw_value)
            default = normalize_value(SITE_TEXT_DEFAULTS[key])
            existing = db.query(SiteText).filter(SiteText.key == key).first()

            if not value or value == default:
                if existing:
                    db.delete(existing)
                    changed.append(key)
                continue

            if existing:
                if existing.value != value:
                    existing.value = value
                    changed.append(key)
            else:
                db.add(SiteText(key=key, value=value))
                changed.append(key)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info("Тексты сайта сохранены, изменено ключей: %s", len(changed))
    revalidate_path("/admin/texts")
    revalidate_path("/", layout=True)
    return get_site_texts(db)

"""
Нормализация полей контента: slug, ссылки на изображения, блоки услуг
"""
import re
from datetime import datetime
from typing import Any, Iterable, List, Optional

IMAGE_URL_PREFIXES = ("http://", "https://", "/uploads/", "/images/")

_WHITESPACE_RE = re.compile(r"\s+")
_NOT_SLUG_CHARS_RE = re.compile(r"[^a-z0-9\-]")
_DASHES_RE = re.compile(r"-+")


def normalize_slug(value: Any) -> str:
    """Привести строку к виду адреса страницы: anna-p, support-groups.

    Кириллица и прочие символы вне [a-z0-9-] отбрасываются,
    поэтому результат может оказаться пустым.
    """
    slug = str(value if value is not None else "").strip().lower()
    slug = _WHITESPACE_RE.sub("-", slug)
    slug = _NOT_SLUG_CHARS_RE.sub("", slug)
    slug = _DASHES_RE.sub("-", slug)
    return slug.strip("-")


def is_valid_image_url(value: Any) -> bool:
    v = str(value if value is not None else "").strip()
    if not v:
        return False
    return v.startswith(IMAGE_URL_PREFIXES)


def normalize_image_url(value: Any) -> Optional[str]:
    """Вернуть ссылку на изображение или None, если она пустая или недопустимая"""
    v = str(value if value is not None else "").strip()
    if not v:
        return None
    return v if is_valid_image_url(v) else None


def normalize_blocks(blocks: Optional[Iterable[Any]]) -> List[dict]:
    """Обрезать пробелы в блоках услуги и убрать полностью пустые.

    Порядок блоков сохраняется.
    """
    result = []
    for block in blocks or []:
        if isinstance(block, dict):
            title, text = block.get("title"), block.get("text")
        else:
            title, text = getattr(block, "title", None), getattr(block, "text", None)
        title = str(title if title is not None else "").strip()
        text = str(text if text is not None else "").strip()
        if title or text:
            result.append({"title": title, "text": text})
    return result


def blank_to_none(value: Optional[str]) -> Optional[str]:
    v = (value or "").strip()
    return v or None


def to_local_naive(value: datetime) -> datetime:
    """Дата из формы с часовым поясом - в локальное время без пояса, как хранится в базе"""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)

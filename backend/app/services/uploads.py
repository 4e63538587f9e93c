"""
Сохранение загруженных изображений в публичную папку /uploads
"""
import logging
import os
import uuid
from pathlib import Path

from fastapi import UploadFile

from ..config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".png"


class UploadRejected(Exception):
    """Файл не прошёл проверку; code уходит клиенту как error"""

    def __init__(self, code: str):
        super().__init__(code)
        self.code = code


def pick_extension(filename: str, content_type: str) -> str:
    """Расширение из имени файла, иначе из MIME; не из списка - .png"""
    ext_from_name = os.path.splitext(filename or "")[1].lower()
    subtype = (content_type or "").split("/", 1)[1] if "/" in (content_type or "") else ""
    ext_from_mime = f".{subtype.lower()}" if subtype else ""

    candidate = ext_from_name or ext_from_mime
    allowed = {ext.lower() for ext in settings.UPLOAD_ALLOWED_EXTENSIONS}
    return candidate if candidate in allowed else DEFAULT_EXTENSION


async def save_image(file: UploadFile) -> str:
    """Проверить и сохранить изображение, вернуть публичный URL"""
    content_type = file.content_type or ""
    if not content_type.startswith("image/"):
        raise UploadRejected("INVALID_FILE_TYPE")

    # Читаем на байт больше лимита, чтобы не грузить в память огромные файлы
    data = await file.read(settings.UPLOAD_MAX_BYTES + 1)
    if len(data) > settings.UPLOAD_MAX_BYTES:
        raise UploadRejected("FILE_TOO_LARGE")

    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)

    filename = f"{uuid.uuid4().hex}{pick_extension(file.filename, content_type)}"
    (upload_dir / filename).write_bytes(data)

    logger.info("Загружено изображение %s (%s байт)", filename, len(data))
    return f"/uploads/{filename}"

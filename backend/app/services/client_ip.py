"""
Определение IP клиента и его хеширование для лимита отзывов
"""
import hashlib
from typing import Optional

from starlette.requests import Request

from ..config import get_settings

settings = get_settings()


def get_client_ip(request: Request) -> Optional[str]:
    """IP клиента: прямое соединение, затем X-Forwarded-For, X-Real-IP, CF-Connecting-IP"""
    if request.client and request.client.host:
        return request.client.host.strip()

    xff = request.headers.get("x-forwarded-for")
    if xff:
        first = xff.split(",")[0].strip()
        return first or None

    x_real_ip = request.headers.get("x-real-ip")
    if x_real_ip:
        return x_real_ip.strip()

    cf_ip = request.headers.get("cf-connecting-ip")
    if cf_ip:
        return cf_ip.strip()

    return None


def sha256_hex(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def hash_ip(ip: Optional[str]) -> Optional[str]:
    """Солёный sha256 от IP. Сам IP нигде не сохраняется."""
    value = (ip or "").strip()
    if not value:
        return None
    return sha256_hex(value + settings.SECRET_KEY)

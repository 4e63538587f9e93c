"""
Авторизация администратора через сессию

Логин и пароль берутся из .env (ADMIN_EMAIL / ADMIN_PASSWORD).
Пароль может быть задан открытым текстом или bcrypt-хешем ("$2...").
Сессия общая для API и админ-панели /admin.
"""
import hmac
import logging
from typing import Optional

import bcrypt
from fastapi import Request

from .config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

SESSION_KEY = "admin"


class AdminRequired(Exception):
    """Запрос изменяющего действия без сессии администратора"""


def verify_admin_credentials(email: Optional[str], password: Optional[str]) -> bool:
    email = (email or "").strip()
    password = password or ""
    if not email or not password:
        return False

    if email != settings.ADMIN_EMAIL:
        return False

    stored = settings.ADMIN_PASSWORD or ""
    if stored.startswith("$2"):
        try:
            return bcrypt.checkpw(password.encode("utf-8"), stored.encode("utf-8"))
        except ValueError:
            logger.error("ADMIN_PASSWORD похож на bcrypt-хеш, но не разбирается")
            return False
    return hmac.compare_digest(password.encode("utf-8"), stored.encode("utf-8"))


def login_session(request: Request, email: str) -> None:
    request.session.update({SESSION_KEY: email})


def logout_session(request: Request) -> None:
    request.session.clear()


def current_admin(request: Request) -> Optional[str]:
    return request.session.get(SESSION_KEY)


def is_admin(request: Request) -> bool:
    return bool(current_admin(request))


def require_admin(request: Request) -> str:
    """Dependency: пропускает только администратора, иначе 401"""
    email = current_admin(request)
    if not email:
        raise AdminRequired()
    return email

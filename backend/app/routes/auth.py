"""
Вход и выход администратора
"""
import logging

from fastapi import APIRouter, Request

from ..errors import ApiError
from ..schemas.auth import LoginRequest, SessionInfo
from ..security import current_admin, login_session, logout_session, verify_admin_credentials

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login")
def login(payload: LoginRequest, request: Request):
    if not verify_admin_credentials(payload.email, payload.password):
        logger.warning("Неудачная попытка входа: %s", payload.email)
        raise ApiError(401, "INVALID_CREDENTIALS")

    login_session(request, payload.email.strip())
    logger.info("Администратор вошёл: %s", payload.email)
    return {"ok": True}


@router.post("/logout")
def logout(request: Request):
    logout_session(request)
    return {"ok": True}


@router.get("/session", response_model=SessionInfo)
def session_info(request: Request):
    email = current_admin(request)
    return SessionInfo(authenticated=bool(email), email=email)

"""
Ошибки API и их преобразование в ответы {ok: false, error: CODE}
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from .security import AdminRequired

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Ожидаемая ошибка запроса с кодом для клиента"""

    def __init__(self, status_code: int, code: str):
        super().__init__(code)
        self.status_code = status_code
        self.code = code


def error_response(status_code: int, code: str) -> JSONResponse:
    return JSONResponse({"ok": False, "error": code}, status_code=status_code)


def get_or_404(db: Session, model, object_id: int):
    item = db.query(model).filter(model.id == object_id).first()
    if item is None:
        raise ApiError(404, "NOT_FOUND")
    return item


def register_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(AdminRequired)
    async def admin_required_handler(request: Request, exc: AdminRequired):
        logger.info("Отказ в доступе: %s %s", request.method, request.url.path)
        return error_response(401, "UNAUTHORIZED")

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return error_response(exc.status_code, exc.code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.debug("Ошибка валидации %s: %s", request.url.path, exc.errors())
        return error_response(400, "VALIDATION_ERROR")


def ensure_unique_slug(db: Session, model, slug: str, exclude_id: Optional[int] = None) -> None:
    """409 SLUG_TAKEN, если slug уже занят другой записью"""
    query = db.query(model.id).filter(model.slug == slug)
    if exclude_id is not None:
        query = query.filter(model.id != exclude_id)
    if query.first() is not None:
        raise ApiError(409, "SLUG_TAKEN")

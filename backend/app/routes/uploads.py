"""
Загрузка изображений из админки
"""
from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile

from ..errors import ApiError
from ..security import require_admin
from ..services.uploads import UploadRejected, save_image

router = APIRouter(prefix="/api", tags=["uploads"])


@router.post("/upload", status_code=201, dependencies=[Depends(require_admin)])
async def upload_image(request: Request):
    """multipart/form-data с полем file -> {"ok": true, "url": "/uploads/..."}"""
    form = await request.form()
    file = form.get("file")
    if not isinstance(file, UploadFile):
        raise ApiError(400, "FILE_REQUIRED")

    try:
        url = await save_image(file)
    except UploadRejected as e:
        raise ApiError(400, e.code)

    return {"ok": True, "url": url}

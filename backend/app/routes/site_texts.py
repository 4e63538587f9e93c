"""
API роутер текстов сайта
"""
from typing import Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.site_text import SiteTextGroup
from ..security import require_admin
from ..services.site_texts import get_site_text_groups, get_site_texts, save_site_texts

router = APIRouter(prefix="/api", tags=["site-texts"])


@router.get("/site-texts")
def read_site_texts(
    keys: Optional[List[str]] = Query(None),
    db: Session = Depends(get_db)
) -> Dict[str, str]:
    """Тексты по ключам (?keys=a&keys=b); без ключей - все"""
    return get_site_texts(db, keys)


@router.get(
    "/admin/site-texts",
    response_model=List[SiteTextGroup],
    dependencies=[Depends(require_admin)],
)
def read_site_text_form(db: Session = Depends(get_db)):
    return get_site_text_groups(db)


@router.put("/admin/site-texts", dependencies=[Depends(require_admin)])
def update_site_texts(
    values: Dict[str, Optional[str]] = Body(...),
    db: Session = Depends(get_db)
):
    return {"ok": True, "texts": save_site_texts(db, values)}

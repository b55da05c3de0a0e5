from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from agriscript import __version__
from agriscript.interfaces.api.deps import get_db
from agriscript.shared.config import get_settings
from agriscript.shared.logging import get_logger, log_extra


log = get_logger(__name__)
router = APIRouter()


@router.get("/health")
def health(db: Session = Depends(get_db)):
    db_status = False
    try:
        db.execute(text("SELECT 1"))
        db_status = True
    except SQLAlchemyError as exc:
        log.warning("health.db_unavailable", extra=log_extra(error=str(exc)))

    settings = get_settings()
    return {
        "status": "ok" if db_status else "error",
        "version": __version__,
        "components": {"db": db_status},
        "info": {
            "db": {
                "type": "SQLite",
                "path": str(settings.sqlite_path),
                "description": "业务数据存储（产品、风格模板、话术、素材、知识库）",
            },
            "llm": {"model": settings.llm_model},
        },
    }

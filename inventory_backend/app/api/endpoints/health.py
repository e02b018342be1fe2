from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from inventory_backend.app.api.deps import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
def health(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("Health check: database unreachable (%s)", exc.__class__.__name__)
        return JSONResponse(
            status_code=503,
            content={"status": "degraded", "db": False, "error": exc.__class__.__name__},
        )
    return {"status": "ok", "db": True}

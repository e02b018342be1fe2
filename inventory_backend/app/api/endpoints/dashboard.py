from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from inventory_backend.app.api.deps import get_db
from inventory_backend.app.core.errors import translate_db_errors
from inventory_backend.services.dashboard import build_dashboard

router = APIRouter(prefix="/dashboard")


@router.get("")
def get_dashboard(db: Session = Depends(get_db)):
    """
    Dashboard (READ ONLY)
    - every figure is an aggregate over the live tables
    - computed on one session per request
    """
    with translate_db_errors("Internal server error"):
        return build_dashboard(db)

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from inventory_backend.app.api.deps import get_db
from inventory_backend.app.core.errors import translate_db_errors
from inventory_backend.services.reports import INVENTORY_REPORT_FILENAME, inventory_report_csv

router = APIRouter(prefix="/reports")


@router.get("/inventory")
def inventory_report(db: Session = Depends(get_db)):
    with translate_db_errors("Failed to generate report"):
        csv_text = inventory_report_csv(db)
    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{INVENTORY_REPORT_FILENAME}"'},
    )

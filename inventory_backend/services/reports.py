from __future__ import annotations

import pandas as pd
from sqlalchemy import select
from sqlalchemy.orm import Session

from inventory_backend.app.db.models.models_v1 import InventoryItem

INVENTORY_REPORT_COLUMNS = ["inventory_id", "product_id", "warehouse", "quantity"]
INVENTORY_REPORT_FILENAME = "inventory_report.csv"


def inventory_report_csv(db: Session) -> str:
    """Inventory table as CSV: header row, then one line per item."""
    rows = db.execute(select(InventoryItem).order_by(InventoryItem.inventory_id)).scalars().all()
    df = pd.DataFrame(
        [{col: getattr(item, col) for col in INVENTORY_REPORT_COLUMNS} for item in rows],
        columns=INVENTORY_REPORT_COLUMNS,
    )
    return df.to_csv(index=False, lineterminator="\n")

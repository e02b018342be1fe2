from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inventory_backend.app.api.deps import get_db
from inventory_backend.app.core.errors import translate_db_errors
from inventory_backend.app.core.exceptions import ConflictError, NotFoundError
from inventory_backend.app.db.models.models_v1 import InventoryItem, Warehouse

router = APIRouter(prefix="/warehouses")


class WarehouseIn(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    location: str | None = Field(default=None, max_length=255)


def _name_taken(db: Session, name: str, exclude_id: int | None = None) -> bool:
    stmt = select(Warehouse.warehouse_id).where(Warehouse.name == name)
    if exclude_id is not None:
        stmt = stmt.where(Warehouse.warehouse_id != exclude_id)
    return db.execute(stmt).first() is not None


def _commit_unique(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError("Warehouse already exists") from exc


@router.get("")
def list_warehouses(db: Session = Depends(get_db)):
    """Warehouses as seen from stock: one row per warehouse name in inventory."""
    with translate_db_errors("Failed to fetch warehouses"):
        rows = db.execute(
            select(InventoryItem.warehouse, func.count(InventoryItem.inventory_id).label("item_count"))
            .group_by(InventoryItem.warehouse)
            .order_by(InventoryItem.warehouse)
        ).all()
    return [{"warehouse": name, "item_count": int(count)} for name, count in rows]


@router.post("")
def create_warehouse(payload: WarehouseIn, db: Session = Depends(get_db)):
    with translate_db_errors("Failed to add warehouse"):
        if _name_taken(db, payload.name):
            raise ConflictError("Warehouse already exists")

        w = Warehouse(name=payload.name, location=payload.location)
        db.add(w)
        _commit_unique(db)
        db.refresh(w)
    return {"message": "Warehouse added successfully", "warehouse_id": w.warehouse_id}


@router.put("/{warehouse_id}")
def update_warehouse(warehouse_id: int, payload: WarehouseIn, db: Session = Depends(get_db)):
    with translate_db_errors("Failed to update warehouse"):
        w = db.get(Warehouse, warehouse_id)
        if not w:
            raise NotFoundError("Warehouse")
        if _name_taken(db, payload.name, exclude_id=warehouse_id):
            raise ConflictError("Warehouse already exists")

        w.name = payload.name
        w.location = payload.location
        _commit_unique(db)
    return {"message": "Warehouse updated successfully"}

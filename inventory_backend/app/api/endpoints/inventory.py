from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import select
from sqlalchemy.orm import Session

from inventory_backend.app.api.deps import get_db
from inventory_backend.app.core.errors import translate_db_errors
from inventory_backend.app.core.exceptions import BadRequestError, NotFoundError
from inventory_backend.app.db.models.models_v1 import InventoryItem, Product

router = APIRouter(prefix="/inventory")


class InventoryCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: int = Field(alias="productId", ge=1)
    warehouse: str = Field(min_length=1, max_length=200)
    quantity: int = Field(ge=0)


class InventoryUpdate(BaseModel):
    warehouse: str = Field(min_length=1, max_length=200)
    quantity: int = Field(ge=0)


@router.get("")
def list_inventory(db: Session = Depends(get_db)):
    with translate_db_errors("Failed to fetch inventory"):
        rows = db.execute(select(InventoryItem).order_by(InventoryItem.inventory_id)).scalars().all()
    return [
        {
            "inventory_id": i.inventory_id,
            "product_id": i.product_id,
            "warehouse": i.warehouse,
            "quantity": i.quantity,
        }
        for i in rows
    ]


@router.post("")
def add_inventory(payload: InventoryCreate, db: Session = Depends(get_db)):
    with translate_db_errors("Database insertion failed"):
        if not db.get(Product, payload.product_id):
            raise BadRequestError(f"Invalid productId {payload.product_id}")

        item = InventoryItem(
            product_id=payload.product_id,
            warehouse=payload.warehouse,
            quantity=payload.quantity,
        )
        db.add(item)
        db.commit()
        db.refresh(item)
    return {"message": "Inventory added successfully", "inventory_id": item.inventory_id}


@router.put("/{inventory_id}")
def update_inventory(inventory_id: int, payload: InventoryUpdate, db: Session = Depends(get_db)):
    with translate_db_errors("Failed to update inventory"):
        item = db.get(InventoryItem, inventory_id)
        if not item:
            raise NotFoundError("Inventory item")

        item.warehouse = payload.warehouse
        item.quantity = payload.quantity
        db.commit()
    return {"message": "Inventory updated successfully"}

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inventory_backend.app.api.deps import get_db
from inventory_backend.app.core.errors import translate_db_errors
from inventory_backend.app.core.exceptions import ConflictError, NotFoundError
from inventory_backend.app.db.models.models_v1 import Supplier

router = APIRouter(prefix="/suppliers")


class SupplierCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    contact_info: str | None = Field(default=None, max_length=255)


class SupplierUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    contact_info: str = Field(min_length=1, max_length=255)


def _name_taken(db: Session, name: str, exclude_id: int | None = None) -> bool:
    stmt = select(Supplier.supplier_id).where(Supplier.name == name)
    if exclude_id is not None:
        stmt = stmt.where(Supplier.supplier_id != exclude_id)
    return db.execute(stmt).first() is not None


def _commit_unique(db: Session) -> None:
    # the name check above can lose a race; the unique index decides
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError("Supplier already exists") from exc


@router.get("")
def list_suppliers(db: Session = Depends(get_db)):
    with translate_db_errors("Failed to fetch suppliers"):
        rows = db.execute(select(Supplier).order_by(Supplier.name)).scalars().all()
    return [
        {
            "supplier_id": s.supplier_id,
            "name": s.name,
            "contact_info": s.contact_info,
        }
        for s in rows
    ]


@router.post("")
def create_supplier(payload: SupplierCreate, db: Session = Depends(get_db)):
    with translate_db_errors("Failed to add supplier"):
        if _name_taken(db, payload.name):
            raise ConflictError("Supplier already exists")

        s = Supplier(name=payload.name, contact_info=payload.contact_info)
        db.add(s)
        _commit_unique(db)
        db.refresh(s)
    return {"message": "Supplier added successfully", "supplier_id": s.supplier_id}


@router.put("/{supplier_id}")
def update_supplier(supplier_id: int, payload: SupplierUpdate, db: Session = Depends(get_db)):
    with translate_db_errors("Failed to update supplier"):
        s = db.get(Supplier, supplier_id)
        if not s:
            raise NotFoundError("Supplier")
        if _name_taken(db, payload.name, exclude_id=supplier_id):
            raise ConflictError("Supplier already exists")

        s.name = payload.name
        s.contact_info = payload.contact_info
        _commit_unique(db)
    return {"message": "Supplier updated successfully"}

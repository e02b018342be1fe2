from __future__ import annotations

from datetime import date
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.orm import Session

from inventory_backend.app.api.deps import get_db
from inventory_backend.app.core.errors import translate_db_errors
from inventory_backend.app.core.exceptions import BadRequestError, NotFoundError
from inventory_backend.app.db.models.models_v1 import Order, Shipment
from inventory_backend.app.db.models.core_types import ShipmentStatus

router = APIRouter(prefix="/shipments")


class ShipmentCreate(BaseModel):
    order_id: int | None = Field(default=None, ge=1)
    carrier: str | None = Field(default=None, max_length=128)
    tracking_number: str | None = Field(default=None, max_length=128)
    status: str = Field(default=ShipmentStatus.pending.value, min_length=1, max_length=32)
    shipped_date: date | None = None
    expected_delivery: date | None = None


class ShipmentStatusUpdate(BaseModel):
    status: str = Field(min_length=1, max_length=32)
    shipped_date: date | None = None


def _shipment_dict(s: Shipment) -> dict:
    return {
        "shipment_id": s.shipment_id,
        "order_id": s.order_id,
        "carrier": s.carrier,
        "tracking_number": s.tracking_number,
        "status": s.status,
        "shipped_date": s.shipped_date,
        "expected_delivery": s.expected_delivery,
    }


@router.get("")
def list_shipments(db: Session = Depends(get_db)):
    with translate_db_errors("Failed to fetch shipments"):
        rows = db.execute(select(Shipment).order_by(Shipment.shipment_id.desc())).scalars().all()
    return [_shipment_dict(s) for s in rows]


@router.post("")
def create_shipment(payload: ShipmentCreate, db: Session = Depends(get_db)):
    with translate_db_errors("Failed to add shipment"):
        if payload.order_id is not None and not db.get(Order, payload.order_id):
            raise BadRequestError("Invalid order_id")

        s = Shipment(
            order_id=payload.order_id,
            carrier=payload.carrier,
            tracking_number=payload.tracking_number,
            status=payload.status,
            shipped_date=payload.shipped_date,
            expected_delivery=payload.expected_delivery,
        )
        db.add(s)
        db.commit()
        db.refresh(s)
    return {"message": "Shipment added successfully", "shipment_id": s.shipment_id}


@router.put("/{shipment_id}")
def update_shipment(shipment_id: int, payload: ShipmentStatusUpdate, db: Session = Depends(get_db)):
    with translate_db_errors("Failed to update shipment"):
        s = db.get(Shipment, shipment_id)
        if not s:
            raise NotFoundError("Shipment")

        s.status = payload.status
        if payload.shipped_date is not None:
            s.shipped_date = payload.shipped_date
        db.commit()
        db.refresh(s)
    return _shipment_dict(s)

from __future__ import annotations

import logging
from decimal import Decimal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from inventory_backend.app.api.deps import get_db
from inventory_backend.app.core.config import settings
from inventory_backend.app.core.errors import translate_db_errors
from inventory_backend.app.core.exceptions import BadRequestError, PersistenceError
from inventory_backend.app.db.models.models_v1 import Product, Supplier

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products")


class ProductCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    cost_price: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    supplier_id: int | None = Field(default=None, ge=1)


@router.get("")
def list_products(db: Session = Depends(get_db)):
    with translate_db_errors("Failed to fetch products"):
        rows = db.execute(select(Product).order_by(Product.product_id)).scalars().all()
    return [
        {
            "product_id": p.product_id,
            "name": p.name,
            "description": p.description,
            "cost_price": float(p.cost_price),
            "supplier_id": p.supplier_id,
        }
        for p in rows
    ]


@router.post("")
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    if settings.REQUIRE_SUPPLIER_ID and payload.supplier_id is None:
        raise BadRequestError("supplier_id is required by server policy")

    # not translate_db_errors: the driver message is echoed as `details` outside production
    try:
        # FK check (fail fast, clear message)
        if payload.supplier_id is not None and not db.get(Supplier, payload.supplier_id):
            raise BadRequestError("Invalid supplier_id. Supplier not found.")

        p = Product(
            name=payload.name,
            description=payload.description,
            cost_price=payload.cost_price,
            supplier_id=payload.supplier_id,
        )
        db.add(p)
        db.commit()
        db.refresh(p)
    except SQLAlchemyError as exc:
        logger.exception("Failed to add product %r", payload.name)
        details = {} if settings.is_production else {"details": str(getattr(exc, "orig", None) or exc)}
        raise PersistenceError("Failed to add product", details=details) from exc

    return {"message": "Product added successfully", "product_id": p.product_id}

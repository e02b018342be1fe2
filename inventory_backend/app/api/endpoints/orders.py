from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from inventory_backend.app.api.deps import get_db
from inventory_backend.app.core.errors import translate_db_errors
from inventory_backend.app.core.exceptions import NotFoundError
from inventory_backend.app.db.models.models_v1 import Order
from inventory_backend.app.schemas.order import OrderCreate, OrderRead, OrderUpdate
from inventory_backend.services.orders import place_order

router = APIRouter(prefix="/orders")


@router.post("")
def create_order(payload: OrderCreate, db: Session = Depends(get_db)):
    order_id = place_order(db, payload)
    return {"message": "Order and details added successfully", "order_id": order_id}


@router.get("", response_model=list[OrderRead])
def list_orders(db: Session = Depends(get_db)):
    with translate_db_errors("Failed to fetch orders"):
        return db.execute(select(Order).order_by(Order.order_id)).scalars().all()


@router.get("/{order_id}")
def get_order(order_id: int, db: Session = Depends(get_db)):
    with translate_db_errors("Failed to fetch order"):
        order = db.get(Order, order_id)
        if not order:
            raise NotFoundError("Order")

        return {
            "order_id": order.order_id,
            "customer_name": order.customer_name,
            "order_date": order.order_date,
            "status": order.status,
            "products": [
                {
                    "order_detail_id": d.order_detail_id,
                    "product_id": d.product_id,
                    "quantity": d.quantity,
                }
                for d in order.details
            ],
        }


@router.put("/{order_id}")
def update_order(order_id: int, payload: OrderUpdate, db: Session = Depends(get_db)):
    with translate_db_errors("Failed to update order"):
        order = db.get(Order, order_id)
        if not order:
            raise NotFoundError("Order")

        if payload.customer_name is not None:
            order.customer_name = payload.customer_name
        if payload.status is not None:
            order.status = payload.status
        db.commit()
    return {"message": "Order updated successfully"}

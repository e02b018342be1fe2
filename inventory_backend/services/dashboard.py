from __future__ import annotations

from datetime import date
from typing import Any

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from inventory_backend.app.db.models.models_v1 import (
    InventoryItem,
    Order,
    OrderDetail,
    Product,
    Shipment,
)
from inventory_backend.app.db.models.core_types import OPEN_SHIPMENT_STATUSES

TURNOVER_MONTHS = 5
RECENT_ORDER_DAYS = 5


def _month_start(day: date, months_back: int) -> date:
    index = day.year * 12 + (day.month - 1) - months_back
    return date(index // 12, index % 12 + 1, 1)


def total_orders(db: Session) -> int:
    return int(db.execute(select(func.count(Order.order_id))).scalar_one())


def inventory_value(db: Session) -> float:
    value = db.execute(
        select(func.coalesce(func.sum(InventoryItem.quantity * Product.cost_price), 0))
        .join(Product, Product.product_id == InventoryItem.product_id)
    ).scalar_one()
    return float(value)


def pending_shipments(db: Session) -> int:
    return int(
        db.execute(
            select(func.count(Shipment.shipment_id)).where(Shipment.status.in_(OPEN_SHIPMENT_STATUSES))
        ).scalar_one()
    )


def supplier_performance(db: Session) -> list[dict[str, Any]]:
    """Units ordered per supplier (products without supplier grouped under None)."""
    rows = db.execute(
        select(Product.supplier_id, func.sum(OrderDetail.quantity).label("total_sales"))
        .join(Product, Product.product_id == OrderDetail.product_id)
        .group_by(Product.supplier_id)
        .order_by(func.sum(OrderDetail.quantity).desc())
    ).all()
    return [{"supplier_id": sid, "total_sales": int(total)} for sid, total in rows]


def top_product(db: Session) -> dict[str, Any] | None:
    row = db.execute(
        select(Product.name, func.sum(OrderDetail.quantity).label("total_sales"))
        .join(Product, Product.product_id == OrderDetail.product_id)
        .group_by(Product.name)
        .order_by(func.sum(OrderDetail.quantity).desc(), Product.name)
        .limit(1)
    ).first()
    if row is None:
        return None
    return {"name": row.name, "total_sales": int(row.total_sales)}


def inventory_turnover(db: Session, today: date | None = None) -> list[dict[str, Any]]:
    """
    Units ordered per calendar month, current month included, oldest first.
    Months without orders are omitted.
    """
    today = today or date.today()
    since = _month_start(today, TURNOVER_MONTHS - 1)

    rows = db.execute(
        select(Order.order_date, func.sum(OrderDetail.quantity))
        .join(OrderDetail, OrderDetail.order_id == Order.order_id)
        .where(Order.order_date >= since)
        .where(Order.order_date <= today)
        .group_by(Order.order_date)
        .order_by(Order.order_date)
    ).all()

    # bucketed here so the query stays dialect-neutral
    months: dict[tuple[int, int], int] = {}
    for day, qty in rows:
        key = (day.year, day.month)
        months[key] = months.get(key, 0) + int(qty)

    return [
        {"month": date(year, month, 1).strftime("%b"), "quantity": qty}
        for (year, month), qty in months.items()
    ]


def orders_vs_shipments(db: Session) -> list[dict[str, Any]]:
    order_rows = db.execute(
        select(Order.order_date, func.count(Order.order_id))
        .group_by(Order.order_date)
        .order_by(Order.order_date.desc())
        .limit(RECENT_ORDER_DAYS)
    ).all()
    if not order_rows:
        return []

    days = [day for day, _ in order_rows]
    shipped = dict(
        db.execute(
            select(Shipment.shipped_date, func.count(Shipment.shipment_id))
            .where(Shipment.shipped_date.in_(days))
            .group_by(Shipment.shipped_date)
        ).all()
    )
    return [
        {"day": day, "orders": int(count), "shipments": int(shipped.get(day, 0))}
        for day, count in order_rows
    ]


def build_dashboard(db: Session, today: date | None = None) -> dict[str, Any]:
    return {
        "totalOrders": total_orders(db),
        "inventoryValue": inventory_value(db),
        "pendingShipments": pending_shipments(db),
        "supplierPerformance": supplier_performance(db),
        "topProduct": top_product(db),
        "inventoryTurnover": inventory_turnover(db, today=today),
        "ordersVsShipments": orders_vs_shipments(db),
    }

"""
Order placement.

An order header and all of its lines are written in a single transaction:
either the commit lands every row, or the rollback leaves none. Product
references are checked inside the same transaction, before any insert.
"""

from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from inventory_backend.app.core.exceptions import MissingProductsError, OrderPlacementError
from inventory_backend.app.db.models.models_v1 import Order, OrderDetail, Product
from inventory_backend.app.schemas.order import OrderCreate

logger = logging.getLogger(__name__)


def find_missing_product_ids(db: Session, product_ids: Iterable[int]) -> list[int]:
    """
    Distinct ids from ``product_ids`` with no products row, in first-seen order.
    """
    requested = list(dict.fromkeys(int(pid) for pid in product_ids))
    if not requested:
        return []

    existing = set(
        db.execute(select(Product.product_id).where(Product.product_id.in_(requested)))
        .scalars()
        .all()
    )
    return [pid for pid in requested if pid not in existing]


def place_order(db: Session, payload: OrderCreate) -> int:
    """
    Persist an order and its lines; return the generated order_id.

    Raises:
        MissingProductsError: a referenced product does not exist (nothing written)
        OrderPlacementError: the store failed mid-transaction (rolled back)
    """
    try:
        missing = find_missing_product_ids(db, (ln.product_id for ln in payload.products))
        if missing:
            raise MissingProductsError(missing)

        order = Order(
            customer_name=payload.customer_name,
            order_date=payload.order_date,
            status=payload.status,
        )
        db.add(order)
        db.flush()  # get order.order_id
        order_id = int(order.order_id)

        # duplicates kept as separate lines
        for ln in payload.products:
            db.add(
                OrderDetail(
                    order_id=order_id,
                    product_id=ln.product_id,
                    quantity=ln.quantity,
                )
            )
        db.flush()
        db.commit()
    except MissingProductsError:
        db.rollback()
        raise
    except Exception as exc:
        db.rollback()
        logger.exception("Order placement failed for customer %r", payload.customer_name)
        raise OrderPlacementError() from exc

    logger.info("Order %s placed with %d line(s)", order_id, len(payload.products))
    return order_id

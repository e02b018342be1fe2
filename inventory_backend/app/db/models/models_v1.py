from __future__ import annotations

from datetime import datetime, date, timezone
from decimal import Decimal

from sqlalchemy import (
    String,
    Integer,
    DateTime,
    Date,
    ForeignKey,
    Numeric,
    Text,
    Index,
    CheckConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inventory_backend.app.db.base import Base
from inventory_backend.app.db.models.core_types import OrderStatus, ShipmentStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------- MASTER DATA ----------
class Supplier(Base):
    __tablename__ = "suppliers"
    supplier_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    contact_info: Mapped[str | None] = mapped_column(String(255))


class Product(Base):
    __tablename__ = "products"
    product_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    cost_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    supplier_id: Mapped[int | None] = mapped_column(
        ForeignKey("suppliers.supplier_id", ondelete="SET NULL"),
        index=True,
    )

    supplier: Mapped[Supplier | None] = relationship()

    __table_args__ = (CheckConstraint("cost_price > 0", name="ck_product_cost_price_pos"),)


class Warehouse(Base):
    __tablename__ = "warehouses"
    warehouse_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    location: Mapped[str | None] = mapped_column(String(255))


# ---------- INVENTORY ----------
class InventoryItem(Base):
    __tablename__ = "inventory"
    inventory_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.product_id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    # warehouse name, not a FK: stock can be booked before the warehouse is registered
    warehouse: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    quantity: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    product: Mapped[Product] = relationship()

    __table_args__ = (CheckConstraint("quantity >= 0", name="ck_inventory_qty_nonneg"),)


# ---------- SALES ----------
class Order(Base):
    __tablename__ = "orders"
    order_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    order_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(32), default=OrderStatus.pending.value, nullable=False)

    details: Mapped[list["OrderDetail"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderDetail.order_detail_id",
    )


class OrderDetail(Base):
    __tablename__ = "order_details"
    # surrogate key: the same product may appear twice in one order
    order_detail_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    order_id: Mapped[int] = mapped_column(
        ForeignKey("orders.order_id", ondelete="CASCADE"),
        nullable=False,
    )
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.product_id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    order: Mapped[Order] = relationship(back_populates="details")
    product: Mapped[Product] = relationship()

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_detail_qty_pos"),
        Index("ix_order_details_order", "order_id"),
    )


# ---------- OUTBOUND ----------
class Shipment(Base):
    __tablename__ = "shipments"
    shipment_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    order_id: Mapped[int | None] = mapped_column(
        ForeignKey("orders.order_id", ondelete="SET NULL"),
        index=True,
    )
    carrier: Mapped[str | None] = mapped_column(String(128))
    tracking_number: Mapped[str | None] = mapped_column(String(128), index=True)
    status: Mapped[str] = mapped_column(String(32), default=ShipmentStatus.pending.value, nullable=False)
    shipped_date: Mapped[date | None] = mapped_column(Date)
    expected_delivery: Mapped[date | None] = mapped_column(Date)

    order: Mapped[Order | None] = relationship()


# ---------- AUTH ----------
class User(Base):
    __tablename__ = "users"
    user_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)

"""initial schema

Revision ID: 4f1c2a9b7d10
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4f1c2a9b7d10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "suppliers",
        sa.Column("supplier_id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column("contact_info", sa.String(255)),
    )
    op.create_table(
        "products",
        sa.Column("product_id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("cost_price", sa.Numeric(12, 2), nullable=False),
        sa.Column(
            "supplier_id",
            sa.Integer(),
            sa.ForeignKey("suppliers.supplier_id", ondelete="SET NULL"),
        ),
        sa.CheckConstraint("cost_price > 0", name="ck_product_cost_price_pos"),
    )
    op.create_index("ix_products_supplier_id", "products", ["supplier_id"])

    op.create_table(
        "warehouses",
        sa.Column("warehouse_id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False, unique=True),
        sa.Column("location", sa.String(255)),
    )
    op.create_table(
        "inventory",
        sa.Column("inventory_id", sa.Integer(), primary_key=True),
        sa.Column(
            "product_id",
            sa.Integer(),
            sa.ForeignKey("products.product_id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("warehouse", sa.String(200), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="0"),
        sa.CheckConstraint("quantity >= 0", name="ck_inventory_qty_nonneg"),
    )
    op.create_index("ix_inventory_product_id", "inventory", ["product_id"])
    op.create_index("ix_inventory_warehouse", "inventory", ["warehouse"])

    op.create_table(
        "orders",
        sa.Column("order_id", sa.Integer(), primary_key=True),
        sa.Column("customer_name", sa.String(255), nullable=False),
        sa.Column("order_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(32), nullable=False, server_default="pending"),
    )
    op.create_index("ix_orders_order_date", "orders", ["order_date"])

    op.create_table(
        "order_details",
        sa.Column("order_detail_id", sa.Integer(), primary_key=True),
        sa.Column(
            "order_id",
            sa.Integer(),
            sa.ForeignKey("orders.order_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "product_id",
            sa.Integer(),
            sa.ForeignKey("products.product_id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.CheckConstraint("quantity > 0", name="ck_order_detail_qty_pos"),
    )
    op.create_index("ix_order_details_order", "order_details", ["order_id"])
    op.create_index("ix_order_details_product_id", "order_details", ["product_id"])

    op.create_table(
        "shipments",
        sa.Column("shipment_id", sa.Integer(), primary_key=True),
        sa.Column(
            "order_id",
            sa.Integer(),
            sa.ForeignKey("orders.order_id", ondelete="SET NULL"),
        ),
        sa.Column("carrier", sa.String(128)),
        sa.Column("tracking_number", sa.String(128)),
        sa.Column("status", sa.String(32), nullable=False, server_default="pending"),
        sa.Column("shipped_date", sa.Date()),
        sa.Column("expected_delivery", sa.Date()),
    )
    op.create_index("ix_shipments_order_id", "shipments", ["order_id"])
    op.create_index("ix_shipments_tracking_number", "shipments", ["tracking_number"])

    op.create_table(
        "users",
        sa.Column("user_id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("users")
    op.drop_index("ix_shipments_tracking_number", table_name="shipments")
    op.drop_index("ix_shipments_order_id", table_name="shipments")
    op.drop_table("shipments")
    op.drop_index("ix_order_details_product_id", table_name="order_details")
    op.drop_index("ix_order_details_order", table_name="order_details")
    op.drop_table("order_details")
    op.drop_index("ix_orders_order_date", table_name="orders")
    op.drop_table("orders")
    op.drop_index("ix_inventory_warehouse", table_name="inventory")
    op.drop_index("ix_inventory_product_id", table_name="inventory")
    op.drop_table("inventory")
    op.drop_table("warehouses")
    op.drop_index("ix_products_supplier_id", table_name="products")
    op.drop_table("products")
    op.drop_table("suppliers")

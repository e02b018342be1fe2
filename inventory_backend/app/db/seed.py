from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import select

from inventory_backend.app.core.logger import init_logging
from inventory_backend.app.db.session import SessionLocal
from inventory_backend.app.db.models.models_v1 import InventoryItem, Product, Supplier, Warehouse

logger = logging.getLogger(__name__)

DEMO_PRODUCTS = [
    ("Rice 25kg", "Long grain rice, 25kg bag", Decimal("18.50")),
    ("Flour 10kg", "Wheat flour, 10kg bag", Decimal("9.20")),
    ("Cooking Oil 5L", None, Decimal("12.00")),
]


def run_seed():
    db = SessionLocal()
    try:
        # 1) Supplier
        supplier = db.scalar(select(Supplier).where(Supplier.name == "Default Supplier"))
        if not supplier:
            supplier = Supplier(name="Default Supplier", contact_info="orders@supplier.example")
            db.add(supplier)
            db.commit()

        # 2) Warehouse
        warehouse = db.scalar(select(Warehouse).where(Warehouse.name == "Main"))
        if not warehouse:
            warehouse = Warehouse(name="Main", location="Head office")
            db.add(warehouse)
            db.commit()

        # 3) Products + opening stock, once per product name
        for name, description, cost in DEMO_PRODUCTS:
            if db.scalar(select(Product).where(Product.name == name)):
                continue
            product = Product(
                name=name,
                description=description,
                cost_price=cost,
                supplier_id=supplier.supplier_id,
            )
            db.add(product)
            db.flush()
            db.add(InventoryItem(product_id=product.product_id, warehouse=warehouse.name, quantity=100))
        db.commit()

        logger.info("Seed OK: supplier=%s warehouse=%s", supplier.name, warehouse.name)
    finally:
        db.close()


if __name__ == "__main__":
    init_logging()
    run_seed()

from fastapi import APIRouter, Depends

from inventory_backend.app.api.deps import require_user
from inventory_backend.app.api.endpoints.auth import router as auth_router
from inventory_backend.app.api.endpoints.dashboard import router as dashboard_router
from inventory_backend.app.api.endpoints.inventory import router as inventory_router
from inventory_backend.app.api.endpoints.orders import router as orders_router
from inventory_backend.app.api.endpoints.products import router as products_router
from inventory_backend.app.api.endpoints.reports import router as reports_router
from inventory_backend.app.api.endpoints.shipments import router as shipments_router
from inventory_backend.app.api.endpoints.suppliers import router as suppliers_router
from inventory_backend.app.api.endpoints.warehouses import router as warehouses_router

# Resource routes; gated by require_user when AUTH_REQUIRED is on
resources = APIRouter(dependencies=[Depends(require_user)])
resources.include_router(dashboard_router, tags=["dashboard"])
resources.include_router(inventory_router, tags=["inventory"])
resources.include_router(orders_router, tags=["orders"])
resources.include_router(products_router, tags=["products"])
resources.include_router(suppliers_router, tags=["suppliers"])
resources.include_router(warehouses_router, tags=["warehouses"])
resources.include_router(shipments_router, tags=["shipments"])
resources.include_router(reports_router, tags=["reports"])

router = APIRouter()
router.include_router(auth_router, tags=["auth"])
router.include_router(resources)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inventory_backend.app.api.endpoints.health import router as health_router
from inventory_backend.app.api.router import router as api_router
from inventory_backend.app.core.config import settings
from inventory_backend.app.core.errors import register_exception_handlers
from inventory_backend.app.core.logger import init_logging

init_logging()

app = FastAPI(title=settings.APP_NAME, version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)

app.include_router(health_router, tags=["health"])
app.include_router(api_router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)

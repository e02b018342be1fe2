from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from inventory_backend.app.core.exceptions import InventoryAPIError, PersistenceError

logger = logging.getLogger(__name__)


@contextmanager
def translate_db_errors(message: str) -> Iterator[None]:
    """Log a store failure and re-raise it as a 500 carrying ``message``."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception(message)
        raise PersistenceError(message) from exc


def _format_path(loc: Sequence[Any]) -> str:
    # ("body", "products", 0, "productId") -> "products[0].productId"
    path = ""
    for part in loc:
        if part in ("body", "query", "path") and not path:
            continue
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


def validation_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    errors = []
    for err in exc.errors():
        loc = err.get("loc", ())
        errors.append(
            {
                "type": "field",
                "msg": err.get("msg", "Invalid value"),
                "path": _format_path(loc),
                "location": loc[0] if loc else "body",
            }
        )
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(InventoryAPIError)
    async def _app_error(request: Request, exc: InventoryAPIError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"errors": validation_errors(exc)})

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

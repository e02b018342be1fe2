"""
Startup diagnostics: is the listen port free, is the database reachable.

    python -m inventory_backend.app.db.check
"""

from __future__ import annotations

import logging
import socket
import sys

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from inventory_backend.app.core.config import settings
from inventory_backend.app.core.logger import init_logging
from inventory_backend.app.db.session import engine

logger = logging.getLogger(__name__)

# (substring of the driver message, hint)
DB_HINTS = [
    ("connection refused", "Start the database server or check DB_HOST/DB_PORT"),
    ("could not translate host name", "Check DB_HOST"),
    ("password authentication failed", "Check DB_USER/DB_PASSWORD"),
    ("access denied", "Check DB_USER/DB_PASSWORD"),
    ("does not exist", f"Create the database {settings.DB_NAME!r}"),
    ("unknown database", f"Create the database {settings.DB_NAME!r}"),
]


def port_available(port: int, host: str = "0.0.0.0") -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((host, port))
        except OSError:
            return False
    return True


def hint_for(error: Exception) -> str | None:
    message = str(error).lower()
    for needle, hint in DB_HINTS:
        if needle in message:
            return hint
    return None


def check_database() -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error("Database connection failed: %s", exc.__class__.__name__)
        hint = hint_for(exc)
        if hint:
            logger.error("Hint: %s", hint)
        return False
    logger.info("Database connection OK (%s)", engine.url.render_as_string(hide_password=True))
    return True


def run_checks(port: int | None = None) -> bool:
    port = port or settings.PORT

    port_ok = port_available(port)
    if port_ok:
        logger.info("Port %s is available", port)
    else:
        logger.error("Port %s is already in use; free it or set PORT", port)

    db_ok = check_database()
    return port_ok and db_ok


if __name__ == "__main__":
    init_logging()
    sys.exit(0 if run_checks() else 1)

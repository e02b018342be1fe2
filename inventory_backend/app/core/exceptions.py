"""Application exception hierarchy.

Every error the API reports on purpose derives from ``InventoryAPIError`` and
carries its HTTP status. Handlers in ``app.core.errors`` render them as
``{"error": message, **details}``.
"""

from __future__ import annotations

from typing import Any, Iterable


class InventoryAPIError(Exception):
    status_code: int = 400

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, **self.details}


class BadRequestError(InventoryAPIError):
    status_code = 400


class NotFoundError(InventoryAPIError):
    status_code = 404

    def __init__(self, resource: str):
        super().__init__(f"{resource} not found")


class ConflictError(InventoryAPIError):
    status_code = 409


class AuthenticationError(InventoryAPIError):
    status_code = 401


class PersistenceError(InventoryAPIError):
    """The store refused or failed a statement."""

    status_code = 500


# ---------- ORDERS ----------
class OrderError(InventoryAPIError):
    pass


class MissingProductsError(OrderError):
    """Some requested productIds are not in the products table."""

    status_code = 400

    def __init__(self, missing_ids: Iterable[int]):
        self.missing_ids = list(missing_ids)
        super().__init__(
            "One or more productId do not exist",
            details={"missing_product_ids": self.missing_ids},
        )


class OrderPlacementError(OrderError):
    status_code = 500

    def __init__(self):
        super().__init__("Failed to add order")

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OrderLineCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # strict: no bool/float/str coercion
    product_id: int = Field(alias="productId", ge=1, strict=True)
    quantity: int = Field(ge=1, strict=True)


class OrderCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    customer_name: str = Field(alias="customerName", min_length=1, max_length=255)
    order_date: date = Field(alias="orderDate")
    status: str = Field(min_length=1, max_length=32)
    products: list[OrderLineCreate] = Field(min_length=1)

    @field_validator("order_date", mode="before")
    @classmethod
    def _iso_date_string(cls, value):
        """Only ISO-8601 strings; numbers and timestamps are rejected."""
        if isinstance(value, date):
            return value
        if not isinstance(value, str):
            raise ValueError("orderDate must be an ISO-8601 date string")
        try:
            return date.fromisoformat(value)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(value).date()
        except ValueError:
            raise ValueError("orderDate must be an ISO-8601 date string") from None


class OrderUpdate(BaseModel):
    customer_name: str | None = Field(default=None, min_length=1, max_length=255)
    status: str | None = Field(default=None, min_length=1, max_length=32)


class OrderRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    order_id: int
    customer_name: str
    order_date: date
    status: str

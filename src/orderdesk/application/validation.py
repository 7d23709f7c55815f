"""Request validation.

Each ``validate_*`` function takes raw, untrusted input (a decoded JSON
body or a query-string mapping) and returns a ``ValidationResult``: either
a typed value or the complete list of field-level error messages.  The
schemas are pydantic models; nothing outside this module sees a pydantic
exception.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Generic, TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator

from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.model.order import MAX_CUSTOMER_NAME_LENGTH, OrderStatus
from orderdesk.domain.model.product import MAX_DESCRIPTION_LENGTH, MAX_NAME_LENGTH

OBJECT_ID_PATTERN = r"^[0-9a-fA-F]{24}$"
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

# Decimal128 holds 34 significant digits; BSON integers are 64-bit.
# Prices stay small enough that price x quantity still fits a Decimal128.
DECIMAL128_DIGITS = 34
MAX_PRICE_DIGITS = 12
MAX_INT64 = 2**63 - 1
MAX_PAGE = MAX_INT64 // MAX_LIMIT

_OBJECT_ID = re.compile(OBJECT_ID_PATTERN)

M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class ValidationResult(Generic[M]):
    value: M | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self, message: str = "Validation failed") -> M:
        """Return the value, or raise ValidationError carrying every field error."""
        if self.errors or self.value is None:
            raise ValidationError(message, self.errors)
        return self.value


# --- Schemas --------------------------------------------------------------------


class _Schema(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)


class NewProduct(_Schema):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    description: str = Field(min_length=1, max_length=MAX_DESCRIPTION_LENGTH)
    price: Decimal = Field(
        ge=0, max_digits=MAX_PRICE_DIGITS, decimal_places=2, allow_inf_nan=False
    )
    stock_quantity: int = Field(ge=0, le=MAX_INT64)


class OrderItemRequest(_Schema):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    product_id: str = Field(pattern=OBJECT_ID_PATTERN)
    quantity: int = Field(ge=1, le=MAX_INT64)


class NewOrder(_Schema):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    customer_name: str = Field(min_length=1, max_length=MAX_CUSTOMER_NAME_LENGTH)
    products: list[OrderItemRequest] = Field(min_length=1)


class PageQuery(_Schema):
    page: int = Field(DEFAULT_PAGE, ge=1, le=MAX_PAGE)
    limit: int = Field(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


class ProductListQuery(PageQuery):
    search: str | None = None
    min_price: Decimal | None = Field(
        None, ge=0, max_digits=DECIMAL128_DIGITS, allow_inf_nan=False
    )
    max_price: Decimal | None = Field(
        None, ge=0, max_digits=DECIMAL128_DIGITS, allow_inf_nan=False
    )

    @field_validator("search")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        return value or None


class OrderListQuery(PageQuery):
    customer_name: str | None = None
    status: OrderStatus | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None

    @field_validator("customer_name")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        return value or None

    @field_validator("start_date", "end_date")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


# --- Validators -----------------------------------------------------------------


def _format_errors(exc: pydantic.ValidationError) -> list[str]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return messages


def _validate(schema: type[M], data: Any) -> ValidationResult[M]:
    if not isinstance(data, dict):
        return ValidationResult(errors=["Request body must be a JSON object"])
    try:
        return ValidationResult(value=schema.model_validate(data))
    except pydantic.ValidationError as exc:
        return ValidationResult(errors=_format_errors(exc))


def validate_product(data: Any) -> ValidationResult[NewProduct]:
    return _validate(NewProduct, data)


def validate_order(data: Any) -> ValidationResult[NewOrder]:
    return _validate(NewOrder, data)


def validate_product_query(params: Any) -> ValidationResult[ProductListQuery]:
    return _validate(ProductListQuery, params)


def validate_order_query(params: Any) -> ValidationResult[OrderListQuery]:
    return _validate(OrderListQuery, params)


def is_valid_object_id(value: str) -> bool:
    return _OBJECT_ID.match(value) is not None

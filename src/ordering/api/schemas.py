"""Pydantic request/response schemas for the Ordering API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_REQUEST_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Order Request Schemas ---


class OrderItemRequest(BaseModel):
    model_config = _REQUEST_CONFIG

    product_id: str
    quantity: int


class CreateOrderRequest(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "customerId": "cust-001",
                    "customerName": "Maria",
                    "items": [
                        {"productId": "prod-burger", "quantity": 2},
                        {"productId": "prod-fries", "quantity": 1},
                    ],
                }
            ]
        },
    )

    customer_id: str | None = None
    customer_name: str | None = Field(None, max_length=200)
    items: list[OrderItemRequest] = Field(default_factory=list)


class CancelOrderRequest(BaseModel):
    model_config = ConfigDict(json_schema_extra={"examples": [{"reason": "Customer changed their mind"}]})

    reason: str | None = Field(None, max_length=500)


# --- Error Response Schema ---


class ErrorResponse(BaseModel):
    error: dict[str, list[str]] | str
    correlation_id: str | None = None

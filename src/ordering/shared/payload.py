"""Base model for JSON payloads produced by other services.

Upstream producers disagree on key casing (``orderId``, ``OrderId``,
``order_id``), so keys are compared lower-cased and without underscores.
"""

from pydantic import BaseModel, ConfigDict, model_validator


def flatten_key(name: str) -> str:
    return name.replace("_", "").lower()


class LenientPayload(BaseModel):
    """A pydantic model whose input keys are matched case-insensitively."""

    model_config = ConfigDict(alias_generator=flatten_key, extra="ignore", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _normalize_keys(cls, data):
        if isinstance(data, dict):
            return {flatten_key(k) if isinstance(k, str) else k: v for k, v in data.items()}
        return data

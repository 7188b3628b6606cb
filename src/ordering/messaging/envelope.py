"""Decoding of inbound queue messages.

Producers publish either directly to the queue ("flat" JSON payload) or via
an SNS topic, in which case the payload arrives as a JSON string inside a
notification envelope::

    {"Type": "Notification", "MessageId": "...", "TopicArn": "...",
     "Message": "{\\"eventType\\": \\"PaymentApproved\\", \\"orderId\\": \\"...\\"}"}

Both shapes are accepted. An object is treated as an envelope when it has a
``message`` key (any casing) and none of the discriminator keys; exactly one
level is unwrapped.
"""

import json
from collections.abc import Iterable
from typing import Any

from ordering.shared.payload import flatten_key


class DecodeError(Exception):
    """The message body is not a payload this consumer can understand."""


def _load_object(raw: str, what: str) -> dict[str, Any]:
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise DecodeError(f"{what} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise DecodeError(f"{what} is not a JSON object")
    return data


def unwrap(body: str, discriminator_fields: Iterable[str] = ("event_type", "status")) -> dict[str, Any]:
    """Return the event payload carried by ``body``, unwrapping an envelope if present."""
    data = _load_object(body, "Message body")

    keys = {flatten_key(k): k for k in data if isinstance(k, str)}
    if "message" not in keys or any(flatten_key(f) in keys for f in discriminator_fields):
        return data

    inner = data[keys["message"]]
    if isinstance(inner, dict):
        return inner
    if isinstance(inner, str):
        return _load_object(inner, "Envelope message")
    raise DecodeError("Envelope message is neither a JSON string nor an object")

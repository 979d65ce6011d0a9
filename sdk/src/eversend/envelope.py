"""
Response envelope decoding shared by the token manager and every resource
operation.

Eversend wraps all replies in ``{"data": ..., "message": ...}``.  On a
success status the payload lives in ``data``; on any other status
``message`` is the only error detail.  Failure bodies are decoded on their
own terms and never through the success-shape models, so that a
``{"message": "..."}`` body always becomes an :class:`APIError` (or
:class:`AuthError`) rather than a confusing shape mismatch.
"""

from __future__ import annotations

import enum
import json
import logging
from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .errors import DecodeError
from .models import ArrayEnvelope, ErrorEnvelope, ObjectEnvelope, OptionalObjectEnvelope

logger = logging.getLogger(__name__)

SUCCESS_STATUS = 200

M = TypeVar("M", bound=BaseModel)


class Payload(enum.Enum):
    """Shape of the successful payload returned by an endpoint."""

    OBJECT = "object"
    OPTIONAL_OBJECT = "optional_object"
    ARRAY = "array"
    NESTED_ARRAY = "nested_array"
    ENVELOPE = "envelope"


def parse_json(body: bytes, status: int) -> Any:
    """Decode raw bytes into a JSON value, raising :class:`DecodeError`."""
    try:
        return json.loads(body)
    except (TypeError, ValueError) as exc:
        raise DecodeError(f"response body is not valid JSON: {exc}", status) from exc


def decode_model(model: Type[M], body: bytes, status: int) -> M:
    """Decode ``body`` into ``model``; any mismatch becomes :class:`DecodeError`."""
    document = parse_json(body, status)
    try:
        return model.model_validate(document)
    except ValidationError as exc:
        raise DecodeError(
            f"unexpected {model.__name__} shape: {exc.error_count()} validation error(s)", status
        ) from exc


def error_message(body: bytes, status: int) -> str:
    """Extract the ``message`` of a failure response.

    The body is truncated in logs to avoid leaking full responses.
    """
    text = body[:200].decode("utf-8", errors="replace") if body else ""
    logger.error("Eversend API error %s: %s", status, text)
    return decode_model(ErrorEnvelope, body, status).message


def decode_payload(payload: Payload, body: bytes, status: int, unwrap: str | None = None) -> Any:
    """Decode a success body according to the endpoint's payload shape."""
    if payload is Payload.OBJECT:
        return decode_model(ObjectEnvelope, body, status).data
    if payload is Payload.OPTIONAL_OBJECT:
        return decode_model(OptionalObjectEnvelope, body, status).data or {}
    if payload is Payload.ARRAY:
        return decode_model(ArrayEnvelope, body, status).data
    if payload is Payload.NESTED_ARRAY:
        data = decode_model(ObjectEnvelope, body, status).data
        nested = data.get(unwrap) if unwrap else None
        if not isinstance(nested, list):
            raise DecodeError(f"expected an array under data.{unwrap}", status)
        return nested
    if payload is Payload.ENVELOPE:
        document = parse_json(body, status)
        if not isinstance(document, dict):
            raise DecodeError("expected a JSON object envelope", status)
        return document
    raise ValueError(f"unknown payload shape: {payload!r}")


__all__ = [
    "SUCCESS_STATUS",
    "Payload",
    "parse_json",
    "decode_model",
    "error_message",
    "decode_payload",
]

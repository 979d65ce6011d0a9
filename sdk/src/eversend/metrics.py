"""
Prometheus metrics for the Eversend client.

Metrics
-------

* ``eversend_requests_total{operation=...,outcome=...}`` – resource
  operations by outcome (``ok``, ``api_error``, ``auth_error``,
  ``decode_error``, ``transport_error``, ``invalid_argument``).
* ``eversend_token_refreshes_total{outcome=...}`` – calls to the
  ``auth/token`` endpoint by outcome.

The library only records the counters; exposing them over HTTP (for
example with ``prometheus_client.start_http_server``) is left to the
embedding application.
"""

from __future__ import annotations

from prometheus_client import Counter

from .errors import APIError, AuthError, DecodeError, InvalidArgument, TransportError

REQUESTS = Counter(
    "eversend_requests_total",
    "Eversend API resource operations",
    labelnames=["operation", "outcome"],
)

TOKEN_REFRESHES = Counter(
    "eversend_token_refreshes_total",
    "Eversend auth token refresh calls",
    labelnames=["outcome"],
)


_OUTCOMES = (
    (APIError, "api_error"),
    (AuthError, "auth_error"),
    (DecodeError, "decode_error"),
    (TransportError, "transport_error"),
    (InvalidArgument, "invalid_argument"),
)


def outcome_of(exc: BaseException | None) -> str:
    """Map an exception (or ``None`` for success) to an ``outcome`` label."""
    if exc is None:
        return "ok"
    for kind, label in _OUTCOMES:
        if isinstance(exc, kind):
            return label
    return "error"

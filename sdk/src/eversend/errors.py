"""
Error taxonomy for the Eversend client.

Every failure surfaced by the SDK is an instance of :class:`EversendError`.
The subclasses let callers tell apart failures worth retrying (the
network hiccuped, or the server answered with something we could not
read) from permanent ones (bad credentials, a business rule rejected the
request, or a local argument check failed).  The SDK itself never retries.
"""

from __future__ import annotations

from typing import Optional


class EversendError(Exception):
    """Base class for all SDK errors."""

    retryable: bool = False

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status

    def __str__(self) -> str:
        if self.status is not None:
            return f"{self.message} (status {self.status})"
        return self.message


class TransportError(EversendError):
    """The HTTP request could not be completed."""

    retryable = True


class AuthError(EversendError):
    """The ``auth/token`` endpoint rejected the credentials."""


class APIError(EversendError):
    """A resource endpoint answered with a non-success status."""


class DecodeError(EversendError):
    """A response body did not match the expected envelope shape."""

    retryable = True


class InvalidArgument(EversendError, ValueError):
    """A caller-supplied argument failed a local precondition."""


__all__ = [
    "EversendError",
    "TransportError",
    "AuthError",
    "APIError",
    "DecodeError",
    "InvalidArgument",
]

"""
Asynchronous Python client for the Eversend API.

The package exposes :class:`EversendClient` together with the error
taxonomy.  Lower-level building blocks (token manager, transport,
endpoint table) live in their own modules for applications that need to
share or replace them.
"""

from .client import EversendClient  # noqa: F401
from .errors import (  # noqa: F401
    APIError,
    AuthError,
    DecodeError,
    EversendError,
    InvalidArgument,
    TransportError,
)
from .token_manager import TokenManager  # noqa: F401
from .transport import AiohttpTransport, Transport  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "EversendClient",
    "TokenManager",
    "Transport",
    "AiohttpTransport",
    "EversendError",
    "TransportError",
    "AuthError",
    "APIError",
    "DecodeError",
    "InvalidArgument",
]

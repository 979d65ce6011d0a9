"""
HTTP transport abstraction.

The client never talks to the network directly; it hands a fully built
request (method, URL, headers, optional body) to a :class:`Transport`
and gets back the status code and raw body.  Separating the wire from
the client lets tests substitute an in-memory fake and lets applications
share one connection pool between several clients.

:class:`AiohttpTransport` is the default implementation.  It opens its
``aiohttp.ClientSession`` lazily on the first request and must be closed
with :meth:`close` (``EversendClient`` does this for you).  No retries are
attempted; failures surface as :class:`~eversend.errors.TransportError`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional, Tuple

import aiohttp

from .errors import TransportError

logger = logging.getLogger(__name__)


class Transport:
    """Abstract base class for HTTP transports."""

    async def request(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Optional[bytes] = None,
    ) -> Tuple[int, bytes]:
        """Send a request and return ``(status, body)``.

        Implementations raise :class:`TransportError` when no response
        could be obtained.  Non-success statuses are not errors at this
        layer.
        """
        raise NotImplementedError

    async def close(self) -> None:
        """Release any pooled resources."""


class AiohttpTransport(Transport):
    """Transport backed by a lazily created ``aiohttp.ClientSession``."""

    def __init__(
        self,
        *,
        timeout: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        """
        :param timeout: Total seconds allowed per request.  ``None`` (the
            default) disables the timeout; cancel the calling task instead.
        :param session: Optional externally owned session.  It is not
            closed by :meth:`close`.
        """
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
            self._owns_session = True
        return self._session

    async def request(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Optional[bytes] = None,
    ) -> Tuple[int, bytes]:
        session = self._get_session()
        try:
            async with session.request(method, url, headers=headers, data=body) as resp:
                payload = await resp.read()
                return resp.status, payload
        except asyncio.TimeoutError as exc:
            logger.warning("%s %s timed out after %ss", method, url, self.timeout)
            raise TransportError(f"{method} {url} timed out") from exc
        except aiohttp.ClientError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise TransportError(f"{method} {url} failed: {exc}") from exc

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None


__all__ = ["Transport", "AiohttpTransport"]

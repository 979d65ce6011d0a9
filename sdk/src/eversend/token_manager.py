"""
Bearer token manager for the Eversend API.

Every authenticated call needs a short-lived bearer token obtained from
``GET auth/token`` with the long-lived client credentials.  The
:class:`TokenManager` caches that token together with its server-declared
expiry and hands it out until it expires.

Concurrency
-----------

Many operations may run concurrently on the same event loop.  The token
is the only shared mutable state and is held as an immutable
:class:`~eversend.models.Token` that is replaced wholesale, so readers
simply take a snapshot of the current reference.  When the snapshot is
stale, the first caller starts a refresh task and every caller arriving
while it runs awaits that same task, sharing its token or its error.  A
burst of callers hitting an empty or expired token therefore produces
exactly one ``auth/token`` request, whether the refresh succeeds or fails.

The manager is bound to the event loop it is first used on.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from .envelope import SUCCESS_STATUS, decode_model, error_message
from .errors import AuthError, DecodeError, EversendError
from .metrics import TOKEN_REFRESHES, outcome_of
from .models import Credentials, Token, TokenPayload
from .transport import Transport

logger = logging.getLogger(__name__)

AUTH_PATH = "auth/token"

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_expiry(value: str) -> datetime:
    """Parse an RFC 3339 timestamp; naive values are taken as UTC."""
    parsed = datetime.fromisoformat(value.strip())
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _consume_exception(task: "asyncio.Task[str]") -> None:
    # Mark the outcome as retrieved even if every waiter was cancelled.
    if not task.cancelled():
        task.exception()


class TokenManager:
    def __init__(
        self,
        credentials: Credentials,
        transport: Transport,
        base_url: str,
        *,
        clock: Optional[Clock] = None,
    ) -> None:
        """
        :param credentials: Client id and secret used to authenticate.
        :param transport: HTTP transport used for ``auth/token`` calls.
        :param base_url: API base URL ending in ``/``.
        :param clock: Returns the current aware UTC time.  Tests inject a
            fixed clock to exercise expiry boundaries.
        """
        self.credentials = credentials
        self.transport = transport
        self.base_url = base_url
        self._clock: Clock = clock or utcnow
        self._token = Token.empty()
        self._inflight: Optional["asyncio.Task[str]"] = None

    @property
    def token(self) -> Token:
        """Snapshot of the cached token (possibly empty or expired)."""
        return self._token

    def invalidate(self) -> None:
        """Forget the cached token so the next call authenticates again."""
        self._token = Token.empty()

    async def get_valid_token(self) -> str:
        """Return a currently valid bearer token, refreshing it if needed."""
        token = self._token
        if token.is_valid(self._clock()):
            return token.value
        # No await between the check and the assignment, so exactly one task
        # starts a refresh and every other caller joins it.
        refresh = self._inflight
        if refresh is None:
            refresh = asyncio.get_running_loop().create_task(self._refresh_and_store())
            refresh.add_done_callback(_consume_exception)
            self._inflight = refresh
        # A cancelled caller must not cancel the refresh the others wait on.
        return await asyncio.shield(refresh)

    async def _refresh_and_store(self) -> str:
        try:
            token = await self._refresh()
            self._token = token
            return token.value
        finally:
            self._inflight = None

    async def _refresh(self) -> Token:
        try:
            token = await self._request_token()
        except EversendError as exc:
            TOKEN_REFRESHES.labels(outcome=outcome_of(exc)).inc()
            raise
        TOKEN_REFRESHES.labels(outcome="ok").inc()
        return token

    async def _request_token(self) -> Token:
        headers = {
            "clientId": self.credentials.client_id,
            "clientSecret": self.credentials.client_secret,
        }
        status, body = await self.transport.request("GET", self.base_url + AUTH_PATH, headers)
        if status != SUCCESS_STATUS:
            raise AuthError(error_message(body, status), status)

        payload = decode_model(TokenPayload, body, status)
        if not payload.token:
            raise DecodeError("auth response carried an empty token", status)
        try:
            expires_at = parse_expiry(payload.expires)
        except ValueError as exc:
            # Keep the token for this call but force a refresh on the next one.
            logger.warning("Could not parse token expiry %r: %s", payload.expires, exc)
            expires_at = self._clock()
        logger.info("Obtained new Eversend token expiring at %s", expires_at.isoformat())
        return Token(value=payload.token, expires_at=expires_at)


__all__ = ["TokenManager", "AUTH_PATH", "parse_expiry", "utcnow"]

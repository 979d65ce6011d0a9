"""
Parameterized executor for authenticated Eversend operations.

One :meth:`Executor.call` runs any row of :data:`~eversend.endpoints.ENDPOINTS`:

1. validate the request body locally (bad arguments never reach the wire);
2. obtain a bearer token from the :class:`~eversend.token_manager.TokenManager`;
3. build and send the request through the transport;
4. decode the envelope, mapping failures to the SDK error taxonomy.

Each call issues exactly one request, plus at most one ``auth/token``
request when the cached token is stale.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

from pydantic import ValidationError

from .endpoints import ENDPOINTS, Endpoint
from .envelope import SUCCESS_STATUS, decode_payload, error_message
from .errors import APIError, EversendError, InvalidArgument
from .metrics import REQUESTS, outcome_of
from .token_manager import TokenManager
from .transport import Transport

logger = logging.getLogger(__name__)


class Executor:
    """Run endpoint table rows against the API."""

    def __init__(self, token_manager: TokenManager, transport: Transport, base_url: str) -> None:
        self.token_manager = token_manager
        self.transport = transport
        self.base_url = base_url

    def build_url(self, endpoint: Endpoint, params: Dict[str, str]) -> str:
        # Identifiers are opaque; quoting keeps each one inside a single path segment.
        quoted = {key: quote(str(value), safe="") for key, value in params.items()}
        try:
            path = endpoint.path.format(**quoted)
        except KeyError as exc:
            raise InvalidArgument(f"{endpoint.name}: missing path parameter {exc}") from exc
        return self.base_url + path

    @staticmethod
    def build_body(endpoint: Endpoint, fields: Optional[Dict[str, Any]]) -> Optional[bytes]:
        if endpoint.body is None:
            return None
        try:
            return endpoint.body.model_validate(fields or {}).to_json()
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
            )
            raise InvalidArgument(f"{endpoint.name}: {problems}") from exc

    async def call(
        self,
        name: str,
        fields: Optional[Dict[str, Any]] = None,
        **params: str,
    ) -> Any:
        """Execute the endpoint ``name``.

        Args:
            name: Key into :data:`ENDPOINTS`, e.g. ``"wallets.find"``.
            fields: Request body fields (snake_case) for bodied endpoints.
            **params: Values for the placeholders of the path template.

        Returns:
            The decoded payload: a ``dict``, a ``list`` or, for endpoints
            declared with :attr:`Payload.ENVELOPE`, the whole response body.
        """
        endpoint = ENDPOINTS[name]
        try:
            result = await self._execute(endpoint, fields, params)
        except EversendError as exc:
            REQUESTS.labels(operation=name, outcome=outcome_of(exc)).inc()
            raise
        REQUESTS.labels(operation=name, outcome="ok").inc()
        return result

    async def _execute(
        self, endpoint: Endpoint, fields: Optional[Dict[str, Any]], params: Dict[str, str]
    ) -> Any:
        url = self.build_url(endpoint, params)
        body = self.build_body(endpoint, fields)

        token = await self.token_manager.get_valid_token()
        headers = {"Authorization": f"Bearer {token}"}
        if body is not None:
            headers["Content-Type"] = "application/json"

        logger.debug("%s %s", endpoint.method, url)
        status, response = await self.transport.request(endpoint.method, url, headers, body)
        if status != SUCCESS_STATUS:
            raise APIError(error_message(response, status), status)
        return decode_payload(endpoint.payload, response, status, endpoint.unwrap)


__all__ = ["Executor"]

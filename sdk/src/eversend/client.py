"""
Eversend API client.

:class:`EversendClient` wires the pieces together: one
:class:`~eversend.token_manager.TokenManager` per client (unless one is
injected to share a token between clients), one transport, and the
resource groups ``account``, ``wallets``, ``exchange``, ``payouts``,
``beneficiaries`` and ``crypto``::

    async with EversendClient(client_id, client_secret) as client:
        wallets = await client.wallets.list()
        quote = await client.exchange.create_quotation("UGX", 1000, "USD")
        await client.exchange.create_exchange(quote["token"])
"""

from __future__ import annotations

from typing import Optional

from .executor import Executor
from .models import Credentials
from .resources import Account, Beneficiaries, Crypto, Exchange, Payouts, Wallets
from .secrets_manager import DEFAULT_BASE_URL, BaseSecretsManager, load_settings
from .token_manager import Clock, TokenManager
from .transport import AiohttpTransport, Transport


class EversendClient:
    """Asynchronous client for the Eversend REST API."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        transport: Optional[Transport] = None,
        timeout: Optional[float] = None,
        token_manager: Optional[TokenManager] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        """Construct the client.

        Args:
            client_id: Eversend client id.
            client_secret: Eversend client secret.
            base_url: API base URL; a trailing ``/`` is added if missing.
            transport: HTTP transport.  Defaults to an
                :class:`AiohttpTransport` owned (and closed) by this client.
            timeout: Per-request timeout in seconds for the default
                transport.  ``None`` means no timeout.
            token_manager: Share an existing token manager (and therefore
                its cached token) instead of creating one per client.
            clock: Time source for token expiry checks.
        """
        credentials = Credentials.create(client_id, client_secret)
        if not base_url.endswith("/"):
            base_url += "/"
        self.base_url = base_url
        self._owns_transport = transport is None
        self.transport: Transport = transport or AiohttpTransport(timeout=timeout)
        self.token_manager = token_manager or TokenManager(
            credentials, self.transport, base_url, clock=clock
        )
        self._executor = Executor(self.token_manager, self.transport, base_url)

        self.account = Account(self._executor)
        self.wallets = Wallets(self._executor)
        self.exchange = Exchange(self._executor)
        self.payouts = Payouts(self._executor)
        self.beneficiaries = Beneficiaries(self._executor)
        self.crypto = Crypto(self._executor)

    @classmethod
    def from_env(cls, secrets: Optional[BaseSecretsManager] = None, **kwargs) -> "EversendClient":
        """Create a client from ``EVERSEND_*`` environment variables or files."""
        settings = load_settings(secrets)
        kwargs.setdefault("base_url", settings.base_url)
        kwargs.setdefault("timeout", settings.timeout)
        return cls(settings.client_id, settings.client_secret, **kwargs)

    async def get_valid_token(self) -> str:
        """Return a valid bearer token, authenticating if necessary."""
        return await self.token_manager.get_valid_token()

    async def close(self) -> None:
        if self._owns_transport:
            await self.transport.close()

    async def __aenter__(self) -> "EversendClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


__all__ = ["EversendClient"]

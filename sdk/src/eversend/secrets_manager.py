"""
secrets_manager
================

Loading of Eversend credentials and client settings.

Values are read from the environment, or from a file when the
corresponding ``*_FILE`` environment variable is set.  This lets
operators mount secrets as files in containers (e.g. Kubernetes or Docker
secrets) without leaking them into the environment.  To integrate with a
real secrets backend, subclass ``BaseSecretsManager`` and override
``get_secret``.

Recognised names:

* ``EVERSEND_CLIENT_ID`` / ``EVERSEND_CLIENT_SECRET`` – required.
* ``EVERSEND_BASE_URL`` – optional API base URL override.
* ``EVERSEND_TIMEOUT`` – optional per-request timeout in seconds.

Example usage::

    from eversend.secrets_manager import EnvFileSecretsManager, load_settings

    settings = load_settings(EnvFileSecretsManager())
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .errors import InvalidArgument

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.eversend.co/v1/"


class BaseSecretsManager:
    """Source of named configuration values."""

    def get_secret(self, name: str) -> Optional[str]:  # pragma: no cover - override
        raise NotImplementedError


class EnvFileSecretsManager(BaseSecretsManager):
    """Resolve ``EVERSEND_*`` values from an environment mapping.

    ``NAME_FILE`` wins over ``NAME`` so a mounted secret overrides a stale
    variable.  Relative file paths are resolved against ``base_path``.
    Values are looked up on every call; nothing is cached, so rotating a
    mounted secret is picked up by the next ``load_settings``.
    """

    def __init__(
        self,
        base_path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.base_path = base_path
        self.environ = os.environ if environ is None else environ

    def _secret_file(self, name: str) -> Optional[Path]:
        raw = self.environ.get(f"{name}_FILE")
        if not raw:
            return None
        path = Path(raw)
        if self.base_path is not None and not path.is_absolute():
            path = self.base_path / path
        return path

    def get_secret(self, name: str) -> Optional[str]:
        path = self._secret_file(name)
        if path is None:
            return self.environ.get(name) or None
        try:
            return path.read_text(encoding="utf-8").strip() or None
        except OSError as exc:
            logger.warning("Cannot read %s from %s: %s", name, path, exc)
            return None


@dataclass(frozen=True)
class Settings:
    client_id: str
    client_secret: str
    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = None


def load_settings(secrets: Optional[BaseSecretsManager] = None) -> Settings:
    """Build :class:`Settings` from a secrets manager (environment by default).

    Raises:
        InvalidArgument: when the credentials are missing or the timeout
            is not a positive number.
    """
    secrets = secrets or EnvFileSecretsManager()
    client_id = secrets.get_secret("EVERSEND_CLIENT_ID")
    client_secret = secrets.get_secret("EVERSEND_CLIENT_SECRET")
    if not client_id or not client_secret:
        raise InvalidArgument("EVERSEND_CLIENT_ID and EVERSEND_CLIENT_SECRET must be set")

    base_url = secrets.get_secret("EVERSEND_BASE_URL") or DEFAULT_BASE_URL
    if not base_url.endswith("/"):
        base_url += "/"

    timeout: Optional[float] = None
    raw_timeout = secrets.get_secret("EVERSEND_TIMEOUT")
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise InvalidArgument(f"EVERSEND_TIMEOUT is not a number: {raw_timeout!r}") from exc
        if timeout <= 0:
            raise InvalidArgument("EVERSEND_TIMEOUT must be positive")

    return Settings(client_id=client_id, client_secret=client_secret, base_url=base_url, timeout=timeout)


__all__ = [
    "DEFAULT_BASE_URL",
    "BaseSecretsManager",
    "EnvFileSecretsManager",
    "Settings",
    "load_settings",
]

"""Pytest configuration for path setup.

The package lives under ``sdk/src``.  When the project is not installed
(``pip install -e .``), this file makes both the ``eversend`` package and
the ``tests.helpers`` modules importable during test collection.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]

for path in (ROOT, ROOT / "sdk" / "src"):
    path_str = str(path)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

from tests.helpers.fake_transport import FakeTransport, FrozenClock  # noqa: E402


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()

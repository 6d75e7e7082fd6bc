"""Shared test fixtures and configuration."""
import os

import pytest

# No simulated latency in tests, and never pick up a developer's redis setup
os.environ.setdefault("LOGIN_DELAY_SECONDS", "0")
os.environ.setdefault("SESSION_BACKEND", "memory")

from portal.config import reset_settings  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings()
    yield
    reset_settings()

"""Pytest fixtures for all tests."""

import pytest
from httpx import AsyncClient, ASGITransport

from config import CodecConfig, Config
from ui.app import create_app
from utils import timestamp

# 2025-06-15T15:06:40Z
FIXED_NOW = 1_750_000_000


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock(monkeypatch):
    """Pin the codec's wall clock; advance it by setting clock.now."""
    fake = FakeClock(FIXED_NOW)
    monkeypatch.setattr(timestamp, "now_seconds", fake)
    return fake


@pytest.fixture
def config():
    """Config with a time-based default version and a derivation secret."""
    return Config(codec=CodecConfig(default_version=1, secret="s3cret"))


@pytest.fixture
async def app(config):
    """Create test FastAPI app."""
    return create_app(config)


@pytest.fixture
async def client(app):
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

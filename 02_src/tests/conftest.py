"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest_asyncio.fixture
async def store():
    """Create in-memory timing store for testing."""
    from latency.storage import TimingStore

    st = TimingStore(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def clock():
    """Deterministic millisecond clock advancing 10ms per reading."""
    readings = iter(range(1_000, 10_000_000, 10))
    return lambda: next(readings)


@pytest.fixture
def driver(store, clock):
    """Create ChainDriver with a short chain."""
    from latency.harness import ChainDriver

    return ChainDriver(store, chain_length=5, clock=clock)


@pytest.fixture
def mock_client():
    """Mock AWS client accepting every call."""
    client = Mock()
    client.put_object = AsyncMock(return_value={"ETag": "etag"})
    client.publish = AsyncMock(return_value={"MessageId": "m1"})
    client.send_message = AsyncMock(return_value={"MessageId": "m1"})
    client.put_item = AsyncMock(return_value={})
    return client


@pytest.fixture
def loopback():
    """Create loopback transport."""
    from latency.backends import LoopbackTransport

    return LoopbackTransport()


@pytest.fixture
def settings():
    """Loopback settings with a short chain."""
    from latency.config import Settings

    return Settings(chain_length=5, transport="loopback")


@pytest_asyncio.fixture
async def application(settings):
    """Started in-memory application on the loopback transport."""
    from latency.app import Application

    app = Application(db_path=":memory:", settings=settings)
    await app.start()
    yield app
    await app.stop()

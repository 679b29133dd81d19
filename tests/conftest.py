"""
Pytest fixtures for testing.
"""
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.database import build_engine, build_session_factory, init_db
from app.services.batch_manager import BatchManager, get_batch_manager, reset_batch_manager
from app.services.history_store import HistoryStore, get_history_store, reset_history_store
from app.services.playback import PlaybackCoordinator, get_playback_coordinator, reset_playback_coordinator
from tests.fakes import FakeSynthesisClient


@pytest.fixture
def temp_db_path(tmp_path):
    """Create a temporary database path for testing."""
    return tmp_path / 'test.db'


@pytest.fixture(scope='function')
def test_db_url(temp_db_path):
    """Generate test database URL."""
    return f'sqlite+aiosqlite:///{temp_db_path}'


@pytest_asyncio.fixture(scope='function')
async def test_engine(test_db_url):
    """Create a test database engine with the history table."""
    engine = build_engine(test_db_url)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    return build_session_factory(test_engine)


@pytest.fixture
def history_store(test_session_factory):
    return HistoryStore(test_session_factory)


@pytest.fixture
def api_key(monkeypatch):
    """Configure a fake API key."""
    monkeypatch.setenv('GOOGLE_API_KEY', 'test-key')
    return 'test-key'


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.delenv('GOOGLE_API_KEY', raising=False)


@pytest.fixture
def fake_client():
    return FakeSynthesisClient()


@pytest.fixture
def fake_sleep():
    """Replacement for asyncio.sleep that returns immediately."""
    return AsyncMock(return_value=None)


@pytest.fixture
def playback():
    return PlaybackCoordinator()


@pytest.fixture
def batch_manager(history_store, playback, fake_client, fake_sleep, api_key):
    """Batch manager wired to the test database and a fake synthesis client."""
    return BatchManager(
        history_store=history_store,
        playback=playback,
        client_factory=lambda key: fake_client,
        sleep=fake_sleep,
    )


@pytest_asyncio.fixture
async def client(history_store, batch_manager, playback):
    """Create a test client with mocked dependencies."""
    # Reset singletons
    reset_batch_manager()
    reset_history_store()
    reset_playback_coordinator()

    # Import app after resetting singletons
    from server import app

    # Override dependencies
    app.dependency_overrides[get_history_store] = lambda: history_store
    app.dependency_overrides[get_batch_manager] = lambda: batch_manager
    app.dependency_overrides[get_playback_coordinator] = lambda: playback

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as client:
        yield client

    # Clean up
    await batch_manager.shutdown()
    app.dependency_overrides.clear()
    reset_batch_manager()
    reset_history_store()
    reset_playback_coordinator()

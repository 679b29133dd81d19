"""
Foundation Layer Tests

Tests for server configuration, API key handling and app wiring.
"""
import pytest


class TestServerConfiguration:
    """Tests for server configuration."""

    def test_server_binds_to_localhost_only(self):
        """Test server is configured to bind to 127.0.0.1 only."""
        from app.config import SERVER_HOST, SERVER_PORT

        assert SERVER_HOST == '127.0.0.1'
        assert SERVER_PORT == 5111

    def test_app_directories_configured(self):
        """Test application directories are configured correctly."""
        from app.config import APP_SUPPORT_DIR, DATABASE_PATH, DATABASE_URL

        assert 'Application Support' in str(APP_SUPPORT_DIR)
        assert 'Chorus' in str(APP_SUPPORT_DIR)
        assert DATABASE_PATH.name == 'history.db'
        assert DATABASE_URL.startswith('sqlite+aiosqlite:///')

    def test_batch_limits(self):
        from app.config import MAX_TEXT_BYTES, MAX_CONCURRENT_JOBS, DEFAULT_RETRY_DELAY_SECONDS

        assert MAX_TEXT_BYTES == 4000
        assert MAX_CONCURRENT_JOBS == 5
        assert DEFAULT_RETRY_DELAY_SECONDS == 10


class TestApiKey:
    """Tests for reading the API key from the environment."""

    def test_key_from_environment(self, api_key):
        from app.config import get_api_key

        assert get_api_key() == 'test-key'

    def test_key_is_trimmed(self, monkeypatch):
        from app.config import get_api_key

        monkeypatch.setenv('GOOGLE_API_KEY', '  abc  ')
        assert get_api_key() == 'abc'

    @pytest.mark.parametrize('value', [None, '', '   '])
    def test_missing_key(self, monkeypatch, value):
        from app.config import ConfigurationError, get_api_key

        if value is None:
            monkeypatch.delenv('GOOGLE_API_KEY', raising=False)
        else:
            monkeypatch.setenv('GOOGLE_API_KEY', value)

        with pytest.raises(ConfigurationError, match='API key not configured'):
            get_api_key()


class TestAppWiring:

    def test_routes_registered(self):
        from server import app

        paths = app.openapi()['paths']
        for path in (
            '/health', '/voices', '/models', '/batches', '/history', '/playback',
            '/styles/generate', '/styles/refine', '/scripts/upgrade',
        ):
            assert path in paths

    def test_app_metadata(self):
        from server import app
        from app.config import APP_NAME, APP_VERSION

        assert app.title == APP_NAME
        assert app.version == APP_VERSION

"""
Unit tests for backend/main.py

Part of RQ-112: Engine configuration
"""

import pytest
from unittest.mock import patch, MagicMock

from application.use_cases import FinishWorkoutUseCase
from backend.main import Engine, create_engine, _init_sentry
from backend.settings import Settings


@pytest.fixture
def client():
    """Supabase client stand-in; never queried while wiring."""
    return MagicMock()


@pytest.mark.unit
class TestCreateEngine:
    """Test the create_engine() factory function."""

    def test_create_engine_returns_engine(self, client):
        """create_engine() should return a wired Engine."""
        settings = Settings(environment="test", _env_file=None)
        engine = create_engine(settings=settings, client=client)
        assert isinstance(engine, Engine)
        assert isinstance(engine.finish_workout, FinishWorkoutUseCase)

    def test_create_engine_uses_default_settings_when_none_provided(self, client):
        """create_engine() should use get_settings() when no settings provided."""
        with patch("backend.main.get_settings") as mock_get_settings:
            mock_get_settings.return_value = Settings(environment="test", _env_file=None)

            engine = create_engine(settings=None, client=client)

            mock_get_settings.assert_called_once()
            assert isinstance(engine, Engine)

    def test_create_engine_loads_bundled_catalog(self, client):
        """Without a catalog path the bundled catalog is used."""
        settings = Settings(environment="test", _env_file=None)
        engine = create_engine(settings=settings, client=client)
        assert engine.catalog.resolve("Bench Press") is not None

    def test_create_engine_loads_custom_catalog(self, client, tmp_path):
        """exercise_catalog_path replaces the bundled catalog."""
        path = tmp_path / "catalog.yaml"
        path.write_text(
            "categories:\n"
            "  - name: Legs\n"
            "    exercises:\n"
            "      - {name: Sled Push, type: bodyweight}\n"
        )
        settings = Settings(environment="test", exercise_catalog_path=path, _env_file=None)

        engine = create_engine(settings=settings, client=client)

        assert len(engine.catalog) == 1
        assert engine.catalog.resolve("Bench Press") is None

    def test_create_engine_configures_rate_limiter(self, client):
        """Rate limiter comes from settings."""
        settings = Settings(
            environment="test",
            rate_limit_window_seconds=2.0,
            rate_limit_max_actions=3,
            _env_file=None,
        )
        engine = create_engine(settings=settings, client=client)
        assert engine.rate_limiter.window_seconds == 2.0
        assert engine.rate_limiter.max_actions == 3

    def test_create_engine_builds_client_from_settings(self):
        """A Supabase client is created when none is injected."""
        settings = Settings(
            environment="test",
            supabase_url="https://test.supabase.co",
            supabase_service_role_key="service-key",
            _env_file=None,
        )
        with patch("backend.main.create_client") as mock_create_client:
            create_engine(settings=settings)

            mock_create_client.assert_called_once_with(
                "https://test.supabase.co", "service-key"
            )

    def test_create_engine_requires_supabase(self, monkeypatch):
        """Without a client or Supabase settings the engine cannot be built."""
        monkeypatch.delenv("SUPABASE_URL", raising=False)
        monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
        monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)
        settings = Settings(environment="test", _env_file=None)

        with pytest.raises(RuntimeError, match="Supabase is not configured"):
            create_engine(settings=settings)

    def test_create_multiple_independent_engines(self, client):
        """Engines do not share rate limiter state."""
        settings = Settings(environment="test", _env_file=None)

        engine1 = create_engine(settings=settings, client=client)
        engine2 = create_engine(settings=settings, client=client)

        assert engine1 is not engine2
        assert engine1.rate_limiter is not engine2.rate_limiter


@pytest.mark.unit
class TestInitSentry:
    """Test Sentry initialization."""

    def test_init_sentry_skipped_when_no_dsn(self):
        """Sentry should not be initialized when DSN is not set."""
        settings = Settings(sentry_dsn=None, _env_file=None)

        with patch("backend.main.sentry_sdk.init") as mock_init:
            _init_sentry(settings)
            mock_init.assert_not_called()

    def test_init_sentry_called_when_dsn_provided(self):
        """Sentry should be initialized when DSN is provided."""
        settings = Settings(
            sentry_dsn="https://test@sentry.io/123",
            environment="test",
            _env_file=None
        )

        with patch("backend.main.sentry_sdk.init") as mock_init:
            _init_sentry(settings)
            mock_init.assert_called_once_with(
                dsn="https://test@sentry.io/123",
                environment="test",
                traces_sample_rate=0.1,
            )


@pytest.mark.integration
class TestEngineIntegration:
    """The wired engine against a stubbed Supabase client."""

    def test_progress_summary_for_new_user(self, client):
        """A user with no rows reads as level 1 with no writes."""
        query = client.table.return_value.select.return_value
        query.eq.return_value.limit.return_value.execute.return_value.data = []
        query.eq.return_value.eq.return_value.execute.return_value.data = []

        settings = Settings(environment="test", _env_file=None)
        engine = create_engine(settings=settings, client=client)

        result = engine.progress_summary.execute("user-123")

        assert result.success is True
        assert result.summary.level == 1
        assert result.summary.power.total == 70
        client.table.return_value.insert.assert_not_called()

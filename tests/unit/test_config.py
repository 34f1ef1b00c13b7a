"""
Unit tests for configuration loading
"""
import pytest

from core.config import AppConfig, CampusConfig, InfraConfig
from core.config_manager import ConfigManager

pytestmark = pytest.mark.unit


class TestCampusConfig:

    def test_defaults(self):
        config = CampusConfig()

        assert config.student_email_suffix == "@mavs.uta.edu"
        assert config.password_min_length == 6
        assert (config.min_participants, config.max_participants) == (2, 20)
        assert config.action_result_ttl_seconds == 3.0
        assert config.store_backend == "memory"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("EVENT_MAX_PARTICIPANTS", "12")
        monkeypatch.setenv("STORE_BACKEND", "POSTGRES")
        monkeypatch.setenv("OPERATION_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("EVENT_BUS_ENABLED", "true")
        monkeypatch.delenv("IDENTITY_API_KEY", raising=False)
        monkeypatch.setenv("FIREBASE_API_KEY", "web-key")

        config = CampusConfig.from_env()

        assert config.max_participants == 12
        assert config.store_backend == "postgres"
        assert config.operation_timeout_seconds == 2.5
        assert config.event_bus_enabled is True
        assert config.identity_api_key == "web-key"

    def test_invalid_numbers_fall_back(self, monkeypatch):
        monkeypatch.setenv("EVENT_MIN_PARTICIPANTS", "two")
        monkeypatch.setenv("ACTION_RESULT_TTL_SECONDS", "soon")

        config = CampusConfig.from_env()

        assert config.min_participants == 2
        assert config.action_result_ttl_seconds == 3.0


class TestInfraConfig:

    def test_dsn(self, monkeypatch):
        monkeypatch.setenv("POSTGRES_HOST", "db")
        monkeypatch.setenv("POSTGRES_USER", "campus")
        monkeypatch.setenv("POSTGRES_PASSWORD", "pw")
        monkeypatch.setenv("POSTGRES_DB", "sports")
        monkeypatch.setenv("POSTGRES_PORT", "5432")

        config = InfraConfig.from_env()

        assert config.postgres_dsn == "postgresql://campus:pw@db:5432/sports"


class TestConfigManager:

    def test_exposes_sub_configs(self):
        settings = AppConfig(environment="testing", campus=CampusConfig(max_participants=8))
        manager = ConfigManager("sports_event_service", settings=settings)

        assert manager.campus.max_participants == 8
        assert manager.environment == "testing"
        assert manager.infrastructure is settings.infrastructure

    def test_discover_service_prefers_env(self, monkeypatch):
        monkeypatch.setenv("NATS_HOST", "nats.internal")
        monkeypatch.setenv("NATS_PORT", "5222")
        manager = ConfigManager("chat_service", settings=AppConfig())

        assert manager.discover_service("nats", "localhost", 4222, "NATS_HOST", "NATS_PORT") == ("nats.internal", 5222)

    def test_discover_service_bad_port_uses_default(self, monkeypatch):
        monkeypatch.delenv("NATS_HOST", raising=False)
        monkeypatch.setenv("NATS_PORT", "not-a-port")
        manager = ConfigManager("chat_service", settings=AppConfig())

        assert manager.discover_service("nats", "localhost", 4222, "NATS_HOST", "NATS_PORT") == ("localhost", 4222)

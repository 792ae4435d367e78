"""Unit tests for the pydantic-settings configuration models."""

import pytest
from pydantic import ValidationError

from apothecary.config import get_config, reset_config
from apothecary.config.models import CORSConfig, DatabaseConfig, LoggingConfig, SecurityConfig, ServerConfig


class TestServerConfig:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("SERVER_PORT", raising=False)
        monkeypatch.delenv("SERVER_HOST", raising=False)
        config = ServerConfig()
        assert config.port == 8000
        assert config.include_error_details is False

    @pytest.mark.parametrize("port", ["80", "70000"])
    def test_port_out_of_range_is_rejected(self, monkeypatch, port):
        monkeypatch.setenv("SERVER_PORT", port)
        with pytest.raises(ValidationError):
            ServerConfig()


class TestDatabaseConfig:
    @pytest.mark.parametrize(
        "url",
        [
            "postgresql+asyncpg://user:pw@localhost:5432/apothecary",
            "postgresql://user:pw@localhost/apothecary",
            "sqlite+aiosqlite:///./apothecary.db",
        ],
    )
    def test_supported_urls(self, monkeypatch, url):
        monkeypatch.setenv("DATABASE_URL", url)
        assert DatabaseConfig().url == url

    def test_unsupported_scheme_is_rejected(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "mysql://localhost/apothecary")
        with pytest.raises(ValidationError):
            DatabaseConfig()

    def test_is_sqlite(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
        assert DatabaseConfig().is_sqlite is True

    def test_pool_values_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("DATABASE_POOL_SIZE", "0")
        with pytest.raises(ValidationError):
            DatabaseConfig()


class TestLoggingConfig:
    def test_level_is_normalized(self, monkeypatch):
        monkeypatch.setenv("LOGGING_LEVEL", "debug")
        assert LoggingConfig().level == "DEBUG"

    def test_unknown_environment_is_rejected(self, monkeypatch):
        monkeypatch.setenv("LOGGING_ENVIRONMENT", "staging")
        with pytest.raises(ValidationError):
            LoggingConfig()

    def test_unknown_format_is_rejected(self, monkeypatch):
        monkeypatch.setenv("LOGGING_FORMAT", "xml")
        with pytest.raises(ValidationError):
            LoggingConfig()

    def test_legacy_dict_shape(self):
        data = LoggingConfig().to_legacy_dict()
        assert set(data) == {"environment", "level", "format", "log_base", "rotation", "disable_logging"}
        assert set(data["rotation"]) == {"max_size", "backup_count"}


def test_identity_header_default():
    assert SecurityConfig().identity_header == "X-User-Id"


def test_identity_header_from_environment(monkeypatch):
    monkeypatch.setenv("SECURITY_IDENTITY_HEADER", "X-Forwarded-User")
    assert SecurityConfig().identity_header == "X-Forwarded-User"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("http://a.test,http://b.test", ["http://a.test", "http://b.test"]),
        ('["http://a.test", "http://b.test"]', ["http://a.test", "http://b.test"]),
        ("", []),
    ],
)
def test_cors_origins_parse_csv_and_json(monkeypatch, raw, expected):
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", raw)
    assert CORSConfig().allow_origins == expected


def test_get_config_reads_environment(monkeypatch):
    monkeypatch.setenv("SECURITY_IDENTITY_HEADER", "X-Acting-User")
    reset_config()

    config = get_config()

    assert config.security.identity_header == "X-Acting-User"
    assert config.database.url.startswith("sqlite+aiosqlite://")
    assert config.to_legacy_dict()["logging"]["environment"] == "unit_test"

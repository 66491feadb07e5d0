# tests/config/test_loader.py
"""
Тесты для модуля загрузки конфигурации.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError

from src.config.loader import (
    get_project_root,
    get_config_path,
    load_config_json,
    LoggingSettings,
    RedisSettings,
    RedisTTLSettings,
    ServerSettings,
    SystemSettings,
    TripSettings,
    Settings,
)


@pytest.fixture
def config_data() -> dict[str, Any]:
    """Мок конфигурации для тестов."""
    return {
        "PROJECT_NAME": "trip_tracking_test",
        "VERSION": "1.0.0-test",
        "LOG_LEVEL": "DEBUG",
        "LOG_FORMAT": "json",
        "SERVER_PORT": 3100,
        "REDIS_HOST": "redis.local",
        "REDIS_PORT": 6380,
        "REDIS_NAMESPACE": "tt",
        "TRIP_TTL": 120,
        "LOCATION_TTL": 30,
        "STRICT_TRANSITIONS": True,
    }


@pytest.fixture
def temp_config_file(tmp_path: Path, config_data: dict[str, Any], monkeypatch: pytest.MonkeyPatch) -> Path:
    """Создаёт временный файл конфигурации и указывает на него CONFIG_PATH."""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(config_data, ensure_ascii=False, indent=2))
    monkeypatch.setenv("CONFIG_PATH", str(config_file))
    for name in ("REDIS_HOST", "REDIS_PORT", "SERVER_PORT", "STRICT_TRANSITIONS", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    return config_file


class TestPaths:
    """Тесты путей конфигурации."""

    def test_root_contains_src_directory(self) -> None:
        assert (get_project_root() / "src").exists()

    def test_default_config_path(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("CONFIG_PATH", raising=False)
        path = get_config_path()
        assert path.name == "config.json"
        assert path.parent.name == "config"

    def test_config_path_override(self, temp_config_file: Path) -> None:
        assert get_config_path() == temp_config_file


class TestLoadConfigJson:
    """Тесты для функции load_config_json."""

    def test_project_config_has_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("CONFIG_PATH", raising=False)
        config = load_config_json()
        assert config["SERVER_PORT"] == 3000
        assert config["TRIP_TTL"] == 3600
        assert config["LOCATION_TTL"] == 300

    def test_raises_file_not_found(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CONFIG_PATH", str(tmp_path / "nonexistent.json"))
        with pytest.raises(FileNotFoundError):
            load_config_json()


class TestSections:
    """Тесты секций настроек."""

    def test_defaults(self) -> None:
        assert ServerSettings().SERVER_PORT == 3000
        assert RedisTTLSettings().TRIP_TTL == 3600
        assert RedisTTLSettings().LOCATION_TTL == 300
        assert TripSettings().STRICT_TRANSITIONS is False

    def test_redis_url_without_password(self) -> None:
        settings = RedisSettings(REDIS_HOST="localhost", REDIS_PORT=6379, REDIS_DB=0, REDIS_PASSWORD="")
        assert settings.url == "redis://localhost:6379/0"

    def test_redis_url_with_password(self) -> None:
        settings = RedisSettings(REDIS_PASSWORD="secret")
        assert settings.url == "redis://:secret@localhost:6379/0"

    def test_redis_url_quotes_password(self) -> None:
        settings = RedisSettings(REDIS_PASSWORD="p@ss:w/rd")
        assert settings.url == "redis://:p%40ss%3Aw%2Frd@localhost:6379/0"

    def test_redis_password_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REDIS_PASSWORD", "from_env")
        assert RedisSettings(REDIS_PASSWORD="").REDIS_PASSWORD == "from_env"

    def test_ttl_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            RedisTTLSettings(LOCATION_TTL=0)

    def test_unknown_log_format(self) -> None:
        with pytest.raises(ValidationError):
            LoggingSettings(LOG_FORMAT="xml")


class TestFromConfigJson:
    """Тесты сборки Settings из config.json."""

    def test_values_from_file(self, temp_config_file: Path) -> None:
        settings = Settings.from_config_json()

        assert settings.system.PROJECT_NAME == "trip_tracking_test"
        assert settings.logging.LOG_FORMAT == "json"
        assert settings.server.SERVER_PORT == 3100
        assert settings.redis.REDIS_HOST == "redis.local"
        assert settings.redis.REDIS_NAMESPACE == "tt"
        assert settings.redis_ttl.TRIP_TTL == 120
        assert settings.redis_ttl.LOCATION_TTL == 30
        assert settings.trips.STRICT_TRANSITIONS is True

    def test_log_level_only_in_logging_section(self, temp_config_file: Path) -> None:
        settings = Settings.from_config_json()

        assert settings.logging.LOG_LEVEL == "DEBUG"
        assert "LOG_LEVEL" not in SystemSettings.model_fields
        assert set(LoggingSettings.model_fields) == {
            "LOG_LEVEL", "LOG_TO_FILE", "LOG_FILE_PATH", "LOG_FORMAT", "LOG_MAX_BYTES",
        }

    def test_env_overrides(self, temp_config_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REDIS_HOST", "redis.env")
        monkeypatch.setenv("REDIS_PORT", "6390")
        monkeypatch.setenv("SERVER_PORT", "8080")
        monkeypatch.setenv("STRICT_TRANSITIONS", "false")

        settings = Settings.from_config_json()

        assert settings.redis.REDIS_HOST == "redis.env"
        assert settings.redis.REDIS_PORT == 6390
        assert settings.server.SERVER_PORT == 8080
        assert settings.trips.STRICT_TRANSITIONS is False

    def test_missing_keys_use_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "config.json"
        config_file.write_text("{}")
        monkeypatch.setenv("CONFIG_PATH", str(config_file))
        for name in ("REDIS_HOST", "REDIS_PORT", "SERVER_PORT", "STRICT_TRANSITIONS"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_config_json()

        assert settings.server.SERVER_PORT == 3000
        assert settings.redis.REDIS_NAMESPACE == ""
        assert settings.redis_ttl.TRIP_TTL == 3600
        assert settings.trips.STRICT_TRANSITIONS is False

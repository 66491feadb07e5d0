# tests/conftest.py
"""
Общие фикстуры и настройки для тестов.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Устанавливаем переменные окружения перед импортом модулей
os.environ.setdefault("REDIS_PASSWORD", "")
os.environ.setdefault("LOG_TO_FILE", "false")

from src.config.loader import (  # noqa: E402
    RedisTTLSettings,
    Settings,
    TripSettings,
)
from src.infra.redis_client import RedisClient  # noqa: E402
from src.services.trip_tracking.app import create_app  # noqa: E402
from src.services.trip_tracking.location_cache import LocationCache  # noqa: E402
from src.services.trip_tracking.registry import TripRegistry  # noqa: E402
from src.services.trip_tracking.state_machine import TripStateMachine  # noqa: E402


TRIP_TTL = 3600
LOCATION_TTL = 300


# =============================================================================
# ХРАНИЛИЩЕ В ПАМЯТИ
# =============================================================================

class InMemoryRedis(RedisClient):
    """
    Подмена Redis для тестов.
    Переопределяет только сетевые операции; сериализация моделей
    идёт через настоящие get_model/set_model. Время управляется вручную.
    """

    def __init__(self) -> None:
        super().__init__()
        self.now: float = 0.0
        self.data: dict[str, tuple[str, float | None]] = {}
        self.connected = False

    def advance(self, seconds: float) -> None:
        """Сдвигает часы хранилища."""
        self.now += seconds

    def ttl_of(self, key: str) -> float | None:
        """Оставшееся время жизни ключа или None, если ключа нет."""
        entry = self.data.get(key)
        if entry is None or entry[1] is None:
            return None
        return entry[1] - self.now

    async def connect(self) -> None:
        self.connected = True

    async def disconnect(self) -> None:
        self.connected = False

    async def get(self, key: str) -> str | None:
        entry = self.data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self.now >= expires_at:
            del self.data[key]
            return None
        return value

    async def set(self, key: str, value: str, ttl: int | None = None) -> bool:
        self.data[key] = (value, self.now + ttl if ttl else None)
        return True

    async def health_check(self) -> bool:
        return self.connected


# =============================================================================
# ФИКСТУРЫ
# =============================================================================

@pytest.fixture(scope="session")
def project_root() -> Path:
    """Корневая директория проекта."""
    return Path(__file__).parent.parent


@pytest.fixture
def store() -> InMemoryRedis:
    return InMemoryRedis()


@pytest.fixture
def registry(store: InMemoryRedis) -> TripRegistry:
    return TripRegistry(store, trip_ttl=TRIP_TTL)


@pytest.fixture
def strict_registry(store: InMemoryRedis) -> TripRegistry:
    return TripRegistry(store, trip_ttl=TRIP_TTL, state_machine=TripStateMachine(strict=True))


@pytest.fixture
def location_cache(store: InMemoryRedis) -> LocationCache:
    return LocationCache(store, location_ttl=LOCATION_TTL)


def make_settings(strict: bool = False) -> Settings:
    """Настройки приложения для тестов (без чтения config.json)."""
    return Settings(
        redis_ttl=RedisTTLSettings(TRIP_TTL=TRIP_TTL, LOCATION_TTL=LOCATION_TTL),
        trips=TripSettings(STRICT_TRANSITIONS=strict),
    )


@pytest.fixture
def app_settings() -> Settings:
    return make_settings()


@pytest.fixture
def client(store: InMemoryRedis):
    """HTTP клиент с запущенным lifespan и хранилищем в памяти."""
    app = create_app(store=store, app_settings=make_settings())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def strict_client(store: InMemoryRedis):
    app = create_app(store=store, app_settings=make_settings(strict=True))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def trip_payload() -> dict:
    """Тело запроса на создание поездки (Москва → Санкт-Петербург)."""
    return {
        "from": {"latitude": 55.75, "longitude": 37.61},
        "to": {"latitude": 59.93, "longitude": 30.33},
        "driverId": "d1",
        "customerId": "c1",
    }

# src/infra/redis_client.py
"""
Клиент Redis — единственное общее хранилище сервиса.
Поддерживает типизированные операции с Pydantic моделями и TTL.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar, Type

import redis.asyncio as redis
from pydantic import BaseModel, ValidationError
from redis.exceptions import RedisError

from src.common.exceptions import StoreUnavailable
from src.common.logger import log_error, log_info
from src.common.constants import TypeMsg

if TYPE_CHECKING:
    from src.config.loader import RedisSettings

T = TypeVar("T", bound=BaseModel)


class RedisClient:
    """
    Асинхронный клиент Redis.

    Экземпляр создаётся один раз при старте приложения и передаётся
    в компоненты явно. Жизненный цикл: connect() до приёма запросов,
    disconnect() при остановке. Пул соединений redis-py безопасен
    для конкурентного использования, дополнительная синхронизация не нужна.
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        max_connections: int = 50,
        namespace: str = "",
    ) -> None:
        self._url = url
        self._max_connections = max_connections
        self._namespace = namespace
        self._client: redis.Redis | None = None

    @classmethod
    def from_settings(cls, redis_settings: RedisSettings) -> RedisClient:
        """Создаёт клиент из секции настроек redis."""
        return cls(
            url=redis_settings.url,
            max_connections=redis_settings.REDIS_MAX_CONNECTIONS,
            namespace=redis_settings.REDIS_NAMESPACE,
        )

    @property
    def client(self) -> redis.Redis:
        """Возвращает клиент Redis."""
        if self._client is None:
            raise RuntimeError("Redis клиент не инициализирован. Вызовите connect() сначала.")
        return self._client

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    def _make_key(self, key: str) -> str:
        """Добавляет namespace к ключу (если задан)."""
        if not self._namespace:
            return key
        return f"{self._namespace}:{key}"

    async def connect(self) -> None:
        """Подключается к Redis и проверяет соединение."""
        if self._client is not None:
            return

        await log_info("Подключение к Redis...", type_msg=TypeMsg.INFO)

        self._client = redis.from_url(
            self._url,
            max_connections=self._max_connections,
            decode_responses=True,
        )

        await self._client.ping()

        await log_info("Подключение к Redis установлено", type_msg=TypeMsg.INFO)

    async def disconnect(self) -> None:
        """Закрывает соединение с Redis."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            await log_info("Соединение с Redis закрыто", type_msg=TypeMsg.INFO)

    # =========================================================================
    # БАЗОВЫЕ ОПЕРАЦИИ
    # =========================================================================

    async def get(self, key: str) -> str | None:
        """Получает значение по ключу."""
        try:
            return await self.client.get(self._make_key(key))
        except RedisError as e:
            await log_error(f"Ошибка чтения из Redis ({key}): {e}")
            raise StoreUnavailable(str(e)) from e

    async def set(
        self,
        key: str,
        value: str,
        ttl: int | None = None,
    ) -> bool:
        """
        Устанавливает значение, полностью перезаписывая предыдущее.

        Args:
            key: Ключ
            value: Значение
            ttl: Время жизни в секундах (сбрасывается при каждой записи)

        Returns:
            True если успешно
        """
        try:
            return await self.client.set(self._make_key(key), value, ex=ttl)
        except RedisError as e:
            await log_error(f"Ошибка записи в Redis ({key}): {e}")
            raise StoreUnavailable(str(e)) from e

    # =========================================================================
    # ТИПИЗИРОВАННЫЕ ОПЕРАЦИИ (PYDANTIC)
    # =========================================================================

    async def get_model(self, key: str, model_class: Type[T]) -> T | None:
        """
        Получает и десериализует Pydantic модель.

        Повреждённая запись логируется и считается отсутствующей.

        Args:
            key: Ключ
            model_class: Класс модели Pydantic

        Returns:
            Экземпляр модели или None
        """
        data = await self.get(key)
        if data is None:
            return None

        try:
            return model_class.model_validate_json(data)
        except ValidationError as e:
            await log_error(f"Ошибка десериализации модели {model_class.__name__}: {e}")
            return None

    async def set_model(
        self,
        key: str,
        model: BaseModel,
        ttl: int | None = None,
    ) -> bool:
        """
        Сериализует (camelCase, без пустых полей) и сохраняет Pydantic модель.

        Args:
            key: Ключ
            model: Экземпляр модели Pydantic
            ttl: Время жизни в секундах

        Returns:
            True если успешно
        """
        data = model.model_dump_json(by_alias=True, exclude_none=True)
        return await self.set(key, data, ttl=ttl)

    # =========================================================================
    # HEALTH CHECK
    # =========================================================================

    async def health_check(self) -> bool:
        """
        Проверяет здоровье подключения к Redis.

        Returns:
            True если подключение работает
        """
        try:
            return await self.client.ping()
        except (RedisError, RuntimeError) as e:
            await log_error(f"Health check Redis failed: {e}")
            return False

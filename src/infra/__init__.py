# src/infra/__init__.py
"""
Инфраструктурный слой.
Работа с внешними сервисами: Redis.
"""

from src.infra.redis_client import RedisClient

__all__ = [
    "RedisClient",
]

#!/usr/bin/env python3
# main.py
"""
Точка входа Trip Tracking API.
Поднимает uvicorn на SERVER_HOST:SERVER_PORT (по умолчанию 0.0.0.0:3000).

Остановка по SIGINT/SIGTERM: uvicorn завершает lifespan,
который закрывает соединение с Redis.
"""

from __future__ import annotations

import asyncio

import uvicorn

from src.config import settings
from src.common.logger import setup_logging, log_info
from src.common.constants import TypeMsg


async def main() -> None:
    """Запуск Trip Tracking API."""
    setup_logging()

    host = settings.server.SERVER_HOST
    port = settings.server.SERVER_PORT

    await log_info(
        f"Запуск Trip Tracking API на http://{host}:{port} "
        f"(Redis {settings.redis.REDIS_HOST}:{settings.redis.REDIS_PORT}/{settings.redis.REDIS_DB})",
        type_msg=TypeMsg.INFO,
    )

    config = uvicorn.Config(
        "src.services.trip_tracking.app:app",
        host=host,
        port=port,
        reload=settings.system.DEBUG,
        log_level="debug" if settings.system.DEBUG else "info",
    )

    server = uvicorn.Server(config)
    await server.serve()


if __name__ == "__main__":
    asyncio.run(main())

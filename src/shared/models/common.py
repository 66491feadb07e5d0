# src/shared/models/common.py
"""
Общие модели ответов сервиса.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Ответ с ошибкой: {"error": "..."}."""

    error: str


class SuccessResponse(BaseModel):
    """Ответ на успешную операцию без данных."""

    success: bool = True


class HealthStatus(BaseModel):
    """Статус здоровья сервиса."""

    service: str
    status: str = "healthy"  # healthy, degraded
    version: str | None = None
    uptime_seconds: float | None = None
    dependencies: dict[str, str] = Field(default_factory=dict)
    # dependencies: {"redis": "healthy"}

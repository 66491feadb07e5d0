# src/shared/models/location.py
"""
Модели геолокации: координаты точки и последний снимок позиции водителя.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class Coordinates(BaseModel):
    """Географическая точка в градусах."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class LocationUpdate(BaseModel):
    """
    Координаты, присланные приложением водителя.

    Необязательные поля получают значения по умолчанию здесь,
    а не в местах использования. Явный null трактуется как отсутствие поля.
    """

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    # Без ограничений диапазона: клиенты шлют -1, когда значение неизвестно
    bearing: float = 0.0  # градусы
    speed: float = 0.0  # м/с
    accuracy: float = 0.0  # метры

    @field_validator("bearing", "speed", "accuracy", mode="before")
    @classmethod
    def null_to_default(cls, v: float | None) -> float:
        if v is None:
            return 0.0
        return v


class LocationSnapshot(BaseModel):
    """Последняя известная позиция по поездке. Перезаписывается целиком."""

    latitude: float
    longitude: float
    bearing: float = 0.0
    speed: float = 0.0
    accuracy: float = 0.0
    timestamp: datetime

# src/shared/models/trip.py
"""
Модели поездки.
Имена полей в JSON (ответы API и записи в Redis) — camelCase.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.shared.models.enums import TripStatus
from src.shared.models.location import Coordinates


class Trip(BaseModel):
    """Запись поездки, хранится целиком под ключом trip:{tripId}."""

    model_config = ConfigDict(populate_by_name=True)

    trip_id: str = Field(alias="tripId")
    from_: Coordinates = Field(alias="from")
    to: Coordinates
    driver_id: str | None = Field(default=None, alias="driverId")
    customer_id: str | None = Field(default=None, alias="customerId")
    status: TripStatus = TripStatus.CREATED

    # Только для отменённых поездок; хранится как прислал клиент (любое JSON-значение)
    reason: Any = None

    # Временные метки (UTC), выставляются один раз при соответствующем переходе
    created_at: datetime = Field(alias="createdAt")
    started_at: datetime | None = Field(default=None, alias="startedAt")
    completed_at: datetime | None = Field(default=None, alias="completedAt")
    cancelled_at: datetime | None = Field(default=None, alias="cancelledAt")


class CreateTripRequest(BaseModel):
    """Тело POST /api/trips."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    from_: Coordinates = Field(alias="from")
    to: Coordinates
    driver_id: str = Field(alias="driverId")
    customer_id: str = Field(alias="customerId")


class CreateTripResponse(BaseModel):
    """Ответ на создание поездки."""

    model_config = ConfigDict(populate_by_name=True)

    trip_id: str = Field(alias="tripId")


class CancelTripRequest(BaseModel):
    """Тело PATCH /api/trips/{tripId}/cancel."""

    reason: Any = None

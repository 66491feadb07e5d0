# src/common/exceptions.py
"""
Исключения сервиса.
Каждое несёт HTTP статус, в который его превращает обработчик FastAPI.
"""

from __future__ import annotations


class TripTrackingError(Exception):
    """Базовое исключение сервиса."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(TripTrackingError):
    """Запись отсутствует или истёк её TTL."""

    status_code = 404


class TripNotFound(NotFoundError):
    def __init__(self, trip_id: str) -> None:
        super().__init__("Trip not found")
        self.trip_id = trip_id


class LocationNotFound(NotFoundError):
    def __init__(self, trip_id: str) -> None:
        super().__init__("Location not found")
        self.trip_id = trip_id


class InvalidTransition(TripTrackingError):
    """Переход статуса вне таблицы допустимых (только в строгом режиме)."""

    status_code = 409

    def __init__(self, trip_id: str, current: str, new: str) -> None:
        super().__init__(f"Invalid transition from {current} to {new}")
        self.trip_id = trip_id
        self.current = current
        self.new = new


class StoreUnavailable(TripTrackingError):
    """Redis недоступен или вернул ошибку."""

    status_code = 500

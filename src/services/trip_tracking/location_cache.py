# src/services/trip_tracking/location_cache.py
"""
Кэш последней позиции водителя по поездке.
"""

from __future__ import annotations

from datetime import datetime, timezone

from src.common.constants import LOCATION_KEY
from src.common.exceptions import LocationNotFound
from src.common.logger import log_info
from src.infra.redis_client import RedisClient
from src.shared.models.location import LocationSnapshot, LocationUpdate


def location_key(trip_id: str) -> str:
    return LOCATION_KEY.format(trip_id=trip_id)


class LocationCache:
    """
    Хранит один, самый свежий снимок позиции на поездку.

    - Каждое обновление полностью перезаписывает предыдущий снимок
      и сбрасывает его TTL (по умолчанию 5 минут).
    - Существование поездки не проверяется: координаты для неизвестного
      или истёкшего tripId принимаются молча.
    - TTL снимка не связан с TTL поездки. Если приложение водителя
      перестало слать координаты, снимок исчезает раньше поездки,
      и клиент получает 404 вместо устаревшей позиции.
    """

    def __init__(self, store: RedisClient, location_ttl: int = 300) -> None:
        self._store = store
        self._location_ttl = location_ttl

    async def update(self, trip_id: str, update: LocationUpdate) -> LocationSnapshot:
        """Сохраняет позицию с серверной меткой времени."""
        snapshot = LocationSnapshot(
            **update.model_dump(),
            timestamp=datetime.now(timezone.utc),
        )
        await self._store.set_model(location_key(trip_id), snapshot, ttl=self._location_ttl)

        await log_info(
            f"Location updated for {trip_id}: "
            f"lat={snapshot.latitude:.6f} lng={snapshot.longitude:.6f} "
            f"speed={snapshot.speed:.1f} m/s bearing={snapshot.bearing:.1f}°",
            extra={"trip_id": trip_id},
        )
        return snapshot

    async def get(self, trip_id: str) -> LocationSnapshot:
        """Последний снимок или LocationNotFound, если TTL истёк."""
        snapshot = await self._store.get_model(location_key(trip_id), LocationSnapshot)
        if snapshot is None:
            raise LocationNotFound(trip_id)
        return snapshot

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import uuid4

from src.common.constants import TRIP_ID_PREFIX, TRIP_KEY
from src.common.exceptions import TripNotFound
from src.common.logger import log_info
from src.infra.redis_client import RedisClient
from src.services.trip_tracking.state_machine import TripStateMachine
from src.shared.models.enums import TripStatus
from src.shared.models.location import Coordinates
from src.shared.models.trip import Trip

# Timestamp field set by the transition into each status
TIMESTAMP_FIELDS = {
    TripStatus.IN_PROGRESS: "started_at",
    TripStatus.COMPLETED: "completed_at",
    TripStatus.CANCELLED: "cancelled_at",
}


def generate_trip_id() -> str:
    """trip_<epoch ms>_<9 random hex chars>."""
    millis = int(datetime.now(timezone.utc).timestamp() * 1000)
    return f"{TRIP_ID_PREFIX}_{millis}_{uuid4().hex[:9]}"


def trip_key(trip_id: str) -> str:
    return TRIP_KEY.format(trip_id=trip_id)


class TripRegistry:
    """
    Owns the trip record and its status transitions.

    Every write stores the full record and resets its TTL to trip_ttl
    (sliding expiry). Transitions are read-modify-write without locking:
    concurrent transitions on the same trip are last-write-wins.
    """

    def __init__(
        self,
        store: RedisClient,
        trip_ttl: int = 3600,
        state_machine: Optional[TripStateMachine] = None,
    ):
        self.store = store
        self.trip_ttl = trip_ttl
        self.state_machine = state_machine or TripStateMachine()

    async def create(
        self,
        from_: Coordinates,
        to: Coordinates,
        driver_id: str,
        customer_id: str,
    ) -> str:
        trip = Trip(
            trip_id=generate_trip_id(),
            from_=from_,
            to=to,
            driver_id=driver_id,
            customer_id=customer_id,
            status=TripStatus.CREATED,
            created_at=datetime.now(timezone.utc),
        )
        await self._save(trip)

        await log_info(
            f"Trip created: {trip.trip_id} "
            f"from ({from_.latitude}, {from_.longitude}) to ({to.latitude}, {to.longitude})",
            extra={"trip_id": trip.trip_id, "driver_id": driver_id, "customer_id": customer_id},
        )
        return trip.trip_id

    async def get(self, trip_id: str) -> Trip:
        """Pure read: does not refresh the TTL."""
        trip = await self.store.get_model(trip_key(trip_id), Trip)
        if trip is None:
            raise TripNotFound(trip_id)
        return trip

    async def start(self, trip_id: str) -> Trip:
        trip = await self._transition(trip_id, TripStatus.IN_PROGRESS)
        await log_info(f"Trip started: {trip_id}", extra={"trip_id": trip_id})
        return trip

    async def complete(self, trip_id: str) -> Trip:
        trip = await self._transition(trip_id, TripStatus.COMPLETED)
        await log_info(f"Trip completed: {trip_id}", extra={"trip_id": trip_id})
        return trip

    async def cancel(self, trip_id: str, reason: Any = None) -> Trip:
        trip = await self._transition(trip_id, TripStatus.CANCELLED, reason=reason)
        await log_info(f"Trip cancelled: {trip_id} ({reason})", extra={"trip_id": trip_id, "reason": reason})
        return trip

    async def _transition(self, trip_id: str, new_status: TripStatus, **changes) -> Trip:
        trip = await self.get(trip_id)
        self.state_machine.ensure_transition(trip_id, trip.status, new_status)

        update = {
            "status": new_status,
            TIMESTAMP_FIELDS[new_status]: datetime.now(timezone.utc),
            **changes,
        }
        if new_status != TripStatus.CANCELLED:
            # reason belongs to the cancelled state only
            update["reason"] = None
        updated = trip.model_copy(update=update)
        await self._save(updated)
        return updated

    async def _save(self, trip: Trip) -> None:
        await self.store.set_model(trip_key(trip.trip_id), trip, ttl=self.trip_ttl)

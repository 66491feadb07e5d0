from typing import Optional

from fastapi import APIRouter, Body, Depends

from src.services.trip_tracking.dependencies import get_location_cache, get_trip_registry
from src.services.trip_tracking.location_cache import LocationCache
from src.services.trip_tracking.registry import TripRegistry
from src.shared.models.common import ErrorResponse, SuccessResponse
from src.shared.models.location import LocationSnapshot, LocationUpdate
from src.shared.models.trip import CancelTripRequest, CreateTripRequest, CreateTripResponse, Trip

router = APIRouter(prefix="/trips", tags=["Trips"])

NOT_FOUND = {404: {"model": ErrorResponse}}
TRANSITION_ERRORS = {404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}}


@router.post("", response_model=CreateTripResponse)
async def create_trip(
    request: CreateTripRequest,
    registry: TripRegistry = Depends(get_trip_registry),
):
    trip_id = await registry.create(
        from_=request.from_,
        to=request.to,
        driver_id=request.driver_id,
        customer_id=request.customer_id,
    )
    return CreateTripResponse(trip_id=trip_id)


@router.get(
    "/{trip_id}",
    response_model=Trip,
    response_model_exclude_none=True,
    responses=NOT_FOUND,
)
async def get_trip(
    trip_id: str,
    registry: TripRegistry = Depends(get_trip_registry),
):
    return await registry.get(trip_id)


@router.patch("/{trip_id}/start", response_model=SuccessResponse, responses=TRANSITION_ERRORS)
async def start_trip(
    trip_id: str,
    registry: TripRegistry = Depends(get_trip_registry),
):
    await registry.start(trip_id)
    return SuccessResponse()


@router.patch("/{trip_id}/complete", response_model=SuccessResponse, responses=TRANSITION_ERRORS)
async def complete_trip(
    trip_id: str,
    registry: TripRegistry = Depends(get_trip_registry),
):
    await registry.complete(trip_id)
    return SuccessResponse()


@router.patch("/{trip_id}/cancel", response_model=SuccessResponse, responses=TRANSITION_ERRORS)
async def cancel_trip(
    trip_id: str,
    request: Optional[CancelTripRequest] = Body(default=None),
    registry: TripRegistry = Depends(get_trip_registry),
):
    reason = request.reason if request else None
    await registry.cancel(trip_id, reason)
    return SuccessResponse()


@router.post("/{trip_id}/location", response_model=SuccessResponse)
async def update_location(
    trip_id: str,
    update: LocationUpdate,
    cache: LocationCache = Depends(get_location_cache),
):
    # No existence check against the trip record
    await cache.update(trip_id, update)
    return SuccessResponse()


@router.get("/{trip_id}/location", response_model=LocationSnapshot, responses=NOT_FOUND)
async def get_location(
    trip_id: str,
    cache: LocationCache = Depends(get_location_cache),
):
    return await cache.get(trip_id)

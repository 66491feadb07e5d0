from fastapi import Request
from src.services.trip_tracking.registry import TripRegistry
from src.services.trip_tracking.location_cache import LocationCache

def get_trip_registry(request: Request) -> TripRegistry:
    return request.app.state.trip_registry

def get_location_cache(request: Request) -> LocationCache:
    return request.app.state.location_cache

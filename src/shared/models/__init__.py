# src/shared/models/__init__.py
"""
Pydantic-модели поездок, геолокации и общих ответов API.
"""

from src.shared.models.enums import TripStatus
from src.shared.models.location import (
    Coordinates,
    LocationUpdate,
    LocationSnapshot,
)
from src.shared.models.trip import (
    Trip,
    CreateTripRequest,
    CreateTripResponse,
    CancelTripRequest,
)
from src.shared.models.common import (
    ErrorResponse,
    SuccessResponse,
    HealthStatus,
)

__all__ = [
    "TripStatus",
    # Location
    "Coordinates",
    "LocationUpdate",
    "LocationSnapshot",
    # Trip
    "Trip",
    "CreateTripRequest",
    "CreateTripResponse",
    "CancelTripRequest",
    # Common
    "ErrorResponse",
    "SuccessResponse",
    "HealthStatus",
]

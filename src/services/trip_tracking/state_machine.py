from src.common.exceptions import InvalidTransition
from src.shared.models.enums import TripStatus

class TripStateMachine:
    """
    Transition table for trip statuses.

    Repeating the current status is always allowed (a second Start simply
    re-stamps startedAt). In permissive mode every transition on an existing
    trip is accepted; in strict mode anything outside the table is rejected.
    """

    ALLOWED_TRANSITIONS = {
        TripStatus.CREATED: [TripStatus.IN_PROGRESS, TripStatus.CANCELLED],
        TripStatus.IN_PROGRESS: [TripStatus.COMPLETED, TripStatus.CANCELLED],
        TripStatus.COMPLETED: [],
        TripStatus.CANCELLED: [],
    }

    def __init__(self, strict: bool = False):
        self.strict = strict

    @staticmethod
    def can_transition(current_status: str, new_status: str) -> bool:
        try:
            curr = TripStatus(current_status)
            new = TripStatus(new_status)
        except ValueError:
            return False
        if curr == new:
            return True
        return new in TripStateMachine.ALLOWED_TRANSITIONS.get(curr, [])

    def ensure_transition(self, trip_id: str, current_status: str, new_status: str) -> None:
        if self.strict and not self.can_transition(current_status, new_status):
            raise InvalidTransition(trip_id, str(current_status), str(new_status))

from enum import Enum

class TripStatus(str, Enum):
    """Статусы поездки."""
    CREATED = "created"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    def __str__(self) -> str:
        return self.value

    @property
    def is_terminal(self) -> bool:
        """Завершённая или отменённая поездка."""
        return self in (TripStatus.COMPLETED, TripStatus.CANCELLED)

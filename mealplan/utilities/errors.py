"""Error taxonomy for planning requests.

EmptyPoolError is fatal for a request. GapFillerUnavailable is raised by gap
fillers and absorbed by the planning service. UnfillableSlotWarning is never
raised: instances are recorded on the returned WeeklyPlan.
"""
from typing import Optional


class PlanningError(Exception):
    """Base class for scheduler errors."""


class EmptyPoolError(PlanningError):
    def __init__(self, slot_position: str):
        self.slot_position = slot_position
        super().__init__(
            f"No candidates available for {slot_position} slots "
            f"(including wildcard alternatives); supply a broader pool"
        )


class GapFillerUnavailable(PlanningError):
    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)


class UnfillableSlotWarning(UserWarning):
    def __init__(self, day: str, slot_position: str, reason: str = "all fallback tiers exhausted"):
        self.day = day
        self.slot_position = slot_position
        self.reason = reason
        super().__init__(f"{day} {slot_position}: {reason}")

    def to_dict(self):
        return {"day": self.day, "slot_position": self.slot_position, "reason": self.reason}


__all__ = ['PlanningError', 'EmptyPoolError', 'GapFillerUnavailable', 'UnfillableSlotWarning']

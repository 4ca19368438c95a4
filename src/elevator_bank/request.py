from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from dispatch import Direction


class RequestOutcome(str, Enum):
    ACCEPTED = "accepted"
    REJECTED_INVALID_FLOOR = "rejected_invalid_floor"
    REJECTED_INVALID_DIRECTION = "rejected_invalid_direction"
    DEDUPLICATED = "deduplicated"

    @property
    def rejected(self) -> bool:
        return self in (RequestOutcome.REJECTED_INVALID_FLOOR, RequestOutcome.REJECTED_INVALID_DIRECTION)


@dataclass(frozen=True)
class PendingRequest:
    """A hall call waiting for any car to stop at its floor."""

    floor: int
    direction: Direction
    created_at: float

    def matches(self, floor: int, direction: Direction) -> bool:
        return self.floor == floor and self.direction is direction

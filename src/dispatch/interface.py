from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional, Protocol, Sequence, TypeVar


class Direction(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    IDLE = "IDLE"


class MotionState(str, Enum):
    IDLE = "IDLE"
    MOVING = "MOVING"
    LOADING = "LOADING"


class CarView(Protocol):
    """Read-only surface of a car that dispatchers are allowed to look at."""

    car_id: int
    current_floor: int
    direction: Direction
    motion_state: MotionState

    @property
    def destination_queue(self) -> Sequence[int]:
        ...

    def distance_to_floor(self, floor: int) -> int:
        ...

    def is_moving_towards(self, floor: int, requested_direction: Direction) -> bool:
        ...


CarT = TypeVar("CarT", bound=CarView)


class Dispatcher(Protocol):
    """Strategy interface for assigning a hall call to one car."""

    def score(self, car: CarView, floor: int, direction: Direction) -> float:
        """Return the cost of sending ``car`` to ``floor``; lower is better."""
        ...

    def select(self, cars: Iterable[CarT], floor: int, direction: Direction) -> Optional[CarT]:
        """
        Return the car that should serve the call, or ``None`` when there
        are no cars at all. Every car must be considered.
        """
        ...

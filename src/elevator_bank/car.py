from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from dispatch import Direction, MotionState, direction_towards, is_ahead, scan_order


class DestinationOutcome(str, Enum):
    ADDED = "added"
    IGNORED = "ignored"  # already queued, or the car is standing there
    INVALID_FLOOR = "invalid_floor"


@dataclass(frozen=True)
class CarState:
    """Point-in-time copy of a car for observers."""

    car_id: int
    current_floor: int
    direction: Direction
    motion_state: MotionState
    destination_queue: Tuple[int, ...]
    next_destination: Optional[int]


@dataclass
class Car:
    """One elevator car: position, direction, motion state and stop queue."""

    car_id: int
    total_floors: int
    current_floor: int = 1
    direction: Direction = Direction.IDLE
    motion_state: MotionState = MotionState.IDLE
    _queue: List[int] = field(default_factory=list, init=False, repr=False)
    _hold: bool = field(default=False, init=False, repr=False)

    @property
    def destination_queue(self) -> Tuple[int, ...]:
        return tuple(self._queue)

    @property
    def next_destination(self) -> Optional[int]:
        return self._queue[0] if self._queue else None

    def add_destination(self, floor: int) -> DestinationOutcome:
        if not 1 <= floor <= self.total_floors:
            return DestinationOutcome.INVALID_FLOOR
        if floor in self._queue or floor == self.current_floor:
            return DestinationOutcome.IGNORED
        self._queue.append(floor)
        self.sort_destinations()
        return DestinationOutcome.ADDED

    def sort_destinations(self) -> None:
        self._queue = scan_order(self._queue, self.current_floor, self.direction)

    def update_direction(self) -> None:
        """Point the car at its queue head, re-sorting if the heading changed."""

        target = self.next_destination
        if target is None:
            new_direction = Direction.IDLE
        else:
            new_direction = direction_towards(self.current_floor, target)
            if new_direction is Direction.IDLE:
                # Standing on the head already; keep the current heading.
                new_direction = self.direction
        if new_direction is not self.direction:
            self.direction = new_direction
            self.sort_destinations()

    def move_one_floor(self) -> bool:
        if self.motion_state is not MotionState.IDLE:
            return False

        self.update_direction()

        if self.direction is Direction.UP and self.current_floor < self.total_floors:
            self.current_floor += 1
        elif self.direction is Direction.DOWN and self.current_floor > 1:
            self.current_floor -= 1
        else:
            return False
        self.motion_state = MotionState.MOVING
        return True

    def hold_at_current_floor(self) -> None:
        """Make the next stop check fire here even though the floor is not queued."""

        self._hold = True

    def should_stop_at_current_floor(self) -> bool:
        return self._hold or self.current_floor in self._queue

    def stop_at_floor(self) -> None:
        self.motion_state = MotionState.LOADING
        self._hold = False
        self._queue = [floor for floor in self._queue if floor != self.current_floor]

    def complete_loading(self) -> None:
        self.motion_state = MotionState.IDLE
        self.update_direction()

    def complete_movement(self) -> None:
        self.motion_state = MotionState.IDLE

    def distance_to_floor(self, floor: int) -> int:
        return abs(self.current_floor - floor)

    def is_moving_towards(self, floor: int, requested_direction: Direction) -> bool:
        if self.direction is Direction.IDLE:
            return True
        return self.direction is requested_direction and is_ahead(
            self.current_floor, self.direction, floor
        )

    def snapshot(self) -> CarState:
        return CarState(
            car_id=self.car_id,
            current_floor=self.current_floor,
            direction=self.direction,
            motion_state=self.motion_state,
            destination_queue=tuple(self._queue),
            next_destination=self.next_destination,
        )

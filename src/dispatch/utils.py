from __future__ import annotations

from typing import Iterable, List

from .interface import Direction


def direction_towards(current_floor: int, target_floor: int) -> Direction:
    if target_floor > current_floor:
        return Direction.UP
    if target_floor < current_floor:
        return Direction.DOWN
    return Direction.IDLE


def is_ahead(current_floor: int, direction: Direction, floor: int) -> bool:
    """True when ``floor`` lies strictly ahead of a car heading ``direction``."""

    if direction is Direction.UP:
        return floor > current_floor
    if direction is Direction.DOWN:
        return floor < current_floor
    return False


def scan_order(floors: Iterable[int], current_floor: int, direction: Direction) -> List[int]:
    """Order stops to mirror SCAN behavior for a given direction.

    Heading up, floors at or above the car come first in ascending order,
    followed by the floors below it in descending order (the return trip).
    Heading down is the mirror image. An idle car serves the nearest floor
    first; ties keep their insertion order.
    """

    if direction is Direction.UP:
        key = lambda floor: (0, floor) if floor >= current_floor else (1, -floor)
    elif direction is Direction.DOWN:
        key = lambda floor: (0, -floor) if floor <= current_floor else (1, floor)
    else:
        key = lambda floor: abs(floor - current_floor)
    return sorted(floors, key=key)

from __future__ import annotations

from typing import Iterable, List, Optional

from .cache import ScoreCache
from .interface import CarT, CarView, Direction


class CostDispatcher:
    """Assigns a hall call to the car with the lowest estimated cost.

    Idle cars and cars already sweeping towards the call in the requested
    direction cost their distance to the floor. Any other car pays a fixed
    misalignment penalty plus a surcharge per queued stop.
    """

    MISALIGNMENT_PENALTY = 20
    QUEUE_PENALTY = 5

    def __init__(self, cache: Optional[ScoreCache] = None) -> None:
        self.cache = cache

    def score(self, car: CarView, floor: int, direction: Direction) -> float:
        if self.cache is not None:
            cached = self.cache.get(car, floor, direction)
            if cached is not None:
                return cached

        distance = car.distance_to_floor(floor)
        if car.direction is Direction.IDLE or car.is_moving_towards(floor, direction):
            score = distance
        else:
            score = (
                distance
                + self.MISALIGNMENT_PENALTY
                + self.QUEUE_PENALTY * len(car.destination_queue)
            )

        if self.cache is not None:
            self.cache.put(car, floor, direction, score)
        return score

    def select(self, cars: Iterable[CarT], floor: int, direction: Direction) -> Optional[CarT]:
        candidates: List[CarT] = sorted(cars, key=lambda car: car.car_id)
        if self.cache is not None:
            self.cache.sync(candidates)

        best: Optional[CarT] = None
        best_score = float("inf")
        for car in candidates:
            score = self.score(car, floor, direction)
            # Strict comparison keeps the lowest id on ties.
            if score < best_score:
                best, best_score = car, score
        return best

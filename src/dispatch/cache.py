from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

from .interface import CarView, Direction

Signature = Tuple[int, int, Direction, int]
CacheKey = Tuple[int, int, Direction, int, int, Direction]


def car_signature(car: CarView) -> Signature:
    return (car.car_id, car.current_floor, car.direction, len(car.destination_queue))


class ScoreCache:
    """Memoizes dispatch scores for as long as no car's signature changes.

    The signature is everything the cost heuristic reads from a car. Callers
    run ``sync`` before scoring; any difference from the last synced set of
    signatures empties the cache.
    """

    def __init__(self) -> None:
        self._scores: Dict[CacheKey, float] = {}
        self._signatures: Dict[int, Signature] = {}
        self.hits = 0
        self.misses = 0

    def sync(self, cars: Iterable[CarView]) -> None:
        signatures = {car.car_id: car_signature(car) for car in cars}
        if signatures != self._signatures:
            self._scores.clear()
            self._signatures = signatures

    def get(self, car: CarView, floor: int, direction: Direction) -> Optional[float]:
        score = self._scores.get(self._key(car, floor, direction))
        if score is None:
            self.misses += 1
        else:
            self.hits += 1
        return score

    def put(self, car: CarView, floor: int, direction: Direction, score: float) -> None:
        self._scores[self._key(car, floor, direction)] = score

    def clear(self) -> None:
        self._scores.clear()
        self._signatures = {}

    def __len__(self) -> int:
        return len(self._scores)

    @staticmethod
    def _key(car: CarView, floor: int, direction: Direction) -> CacheKey:
        return car_signature(car) + (floor, direction)

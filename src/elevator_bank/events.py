from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional


class EventKind(str, Enum):
    LOADING_COMPLETE = "loading_complete"
    TRAVEL_NOTICE = "travel_notice"


@dataclass(order=True, frozen=True)
class ScheduledEvent:
    fire_time: float
    generation: int
    car_id: int
    seq: int
    kind: EventKind = field(compare=False)


class EventQueue:
    """One-shot completions ordered by (fire_time, generation, car_id).

    Nothing fires on its own: the owner drains due events with ``pop_due``
    from the same loop that drives the simulation tick.
    """

    def __init__(self) -> None:
        self._heap: List[ScheduledEvent] = []
        self._counter = itertools.count()

    def schedule(self, fire_time: float, generation: int, car_id: int, kind: EventKind) -> ScheduledEvent:
        event = ScheduledEvent(fire_time, generation, car_id, next(self._counter), kind)
        heapq.heappush(self._heap, event)
        return event

    def pop_due(self, now: float) -> Iterator[ScheduledEvent]:
        while self._heap and self._heap[0].fire_time <= now:
            yield heapq.heappop(self._heap)

    @property
    def next_fire_time(self) -> Optional[float]:
        return self._heap[0].fire_time if self._heap else None

    def clear(self) -> None:
        self._heap.clear()

    def __len__(self) -> int:
        return len(self._heap)

from __future__ import annotations

import random
from typing import Optional, Tuple

from dispatch import Direction


class RandomCallGenerator:
    """Produces random hall calls at random intervals of virtual time."""

    def __init__(
        self,
        total_floors: int,
        min_interval: float = 5.0,
        max_interval: float = 15.0,
        random_seed: Optional[int] = None,
    ) -> None:
        if min_interval > max_interval:
            raise ValueError("min_interval cannot exceed max_interval")
        self.total_floors = total_floors
        self.min_interval = min_interval
        self.max_interval = max_interval
        self.random = random.Random(random_seed)
        self.next_call_time: Optional[float] = None

    def random_call(self) -> Tuple[int, Direction]:
        floor = self.random.randint(1, self.total_floors)
        if floor == self.total_floors:
            direction = Direction.DOWN
        elif floor == 1:
            direction = Direction.UP
        else:
            direction = Direction.UP if self.random.random() > 0.5 else Direction.DOWN
        return floor, direction

    def due(self, now: float) -> Optional[Tuple[int, Direction]]:
        """Return a call when one is due at ``now``; the first call is immediate."""

        if self.next_call_time is not None and now < self.next_call_time:
            return None
        self.next_call_time = now + self.random.uniform(self.min_interval, self.max_interval)
        return self.random_call()

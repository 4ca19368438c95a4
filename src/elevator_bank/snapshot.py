from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Tuple

from .car import CarState
from .request import PendingRequest


@dataclass(frozen=True)
class Snapshot:
    """Immutable view of the whole bank handed to observers."""

    time: float
    cars: Tuple[CarState, ...]
    pending_requests: Tuple[PendingRequest, ...]
    recent_log: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "time": self.time,
            "cars": [asdict(car) for car in self.cars],
            "pending_requests": [asdict(request) for request in self.pending_requests],
            "recent_log": list(self.recent_log),
        }

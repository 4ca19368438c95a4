from __future__ import annotations

from .cache import ScoreCache
from .cost import CostDispatcher
from .interface import CarView, Direction, Dispatcher, MotionState
from .utils import direction_towards, is_ahead, scan_order

__all__ = [
    "CarView",
    "CostDispatcher",
    "Direction",
    "Dispatcher",
    "MotionState",
    "ScoreCache",
    "direction_towards",
    "is_ahead",
    "scan_order",
]

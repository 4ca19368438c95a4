from __future__ import annotations

import logging
from collections import deque
from datetime import datetime
from typing import Any, Callable, Deque, Optional, Tuple

Clock = Callable[[], datetime]


class EventLog:
    """Bounded FIFO of human-readable entries; the oldest entry is evicted first."""

    def __init__(
        self,
        capacity: int = 100,
        clock: Optional[Clock] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.capacity = capacity
        self.clock = clock or datetime.now
        self.logger = logger or logging.getLogger(__name__)
        self._entries: Deque[str] = deque(maxlen=capacity)

    def append(self, message: str, **fields: Any) -> str:
        entry = f"[{self.clock().strftime('%H:%M:%S')}] {message}"
        self._entries.append(entry)
        self.logger.info(message, extra=fields)
        return entry

    def entries(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

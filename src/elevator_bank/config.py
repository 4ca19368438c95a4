from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict


class ConfigurationError(ValueError):
    """Raised when a car bank cannot be built from the given settings."""


@dataclass(frozen=True)
class BankConfig:
    """Fixed settings for one simulation instance.

    Latencies are in seconds of virtual time.
    """

    number_of_cars: int = 4
    total_floors: int = 10
    loading_latency: float = 10.0
    travel_latency: float = 10.0
    log_capacity: int = 100

    def __post_init__(self) -> None:
        if self.number_of_cars < 1:
            raise ConfigurationError(f"number_of_cars must be at least 1, got {self.number_of_cars}")
        if self.total_floors < 2:
            raise ConfigurationError(f"total_floors must be at least 2, got {self.total_floors}")
        if self.loading_latency < 0 or self.travel_latency < 0:
            raise ConfigurationError("latencies cannot be negative")
        if self.log_capacity < 1:
            raise ConfigurationError(f"log_capacity must be at least 1, got {self.log_capacity}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BankConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown settings: {', '.join(sorted(unknown))}")
        return cls(**data)

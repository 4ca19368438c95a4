from __future__ import annotations

from datetime import datetime

import pytest

from elevator_bank import BankConfig, Controller


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2024, 1, 1, 9, 30, 15)


@pytest.fixture
def controller(fixed_clock) -> Controller:
    config = BankConfig(number_of_cars=2, total_floors=10, loading_latency=3.0, travel_latency=1.0)
    return Controller(config, clock=fixed_clock)

from __future__ import annotations

from dispatch import Direction
from elevator_bank import RandomCallGenerator


def test_calls_stay_in_range_with_edge_directions():
    generator = RandomCallGenerator(total_floors=6, random_seed=11)
    for _ in range(200):
        floor, direction = generator.random_call()
        assert 1 <= floor <= 6
        if floor == 1:
            assert direction is Direction.UP
        elif floor == 6:
            assert direction is Direction.DOWN


def test_due_fires_immediately_then_waits_an_interval():
    generator = RandomCallGenerator(total_floors=10, min_interval=5.0, max_interval=15.0, random_seed=1)
    assert generator.due(0.0) is not None
    assert 5.0 <= generator.next_call_time <= 15.0
    assert generator.due(4.9) is None
    assert generator.due(15.0) is not None


def test_same_seed_same_calls():
    first = RandomCallGenerator(total_floors=10, random_seed=42)
    second = RandomCallGenerator(total_floors=10, random_seed=42)
    assert [first.random_call() for _ in range(20)] == [second.random_call() for _ in range(20)]

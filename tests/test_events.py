from __future__ import annotations

from elevator_bank import EventKind, EventQueue


def test_events_come_due_in_time_generation_car_order():
    queue = EventQueue()
    queue.schedule(5.0, 0, 2, EventKind.LOADING_COMPLETE)
    queue.schedule(5.0, 0, 1, EventKind.TRAVEL_NOTICE)
    queue.schedule(2.0, 1, 3, EventKind.TRAVEL_NOTICE)
    queue.schedule(9.0, 0, 1, EventKind.LOADING_COMPLETE)

    assert queue.next_fire_time == 2.0
    due = list(queue.pop_due(5.0))
    assert [(event.fire_time, event.car_id) for event in due] == [(2.0, 3), (5.0, 1), (5.0, 2)]
    assert len(queue) == 1
    assert list(queue.pop_due(8.9)) == []


def test_same_key_keeps_scheduling_order():
    queue = EventQueue()
    first = queue.schedule(1.0, 0, 1, EventKind.TRAVEL_NOTICE)
    second = queue.schedule(1.0, 0, 1, EventKind.LOADING_COMPLETE)
    assert list(queue.pop_due(1.0)) == [first, second]


def test_clear():
    queue = EventQueue()
    queue.schedule(1.0, 0, 1, EventKind.TRAVEL_NOTICE)
    queue.clear()
    assert len(queue) == 0
    assert queue.next_fire_time is None

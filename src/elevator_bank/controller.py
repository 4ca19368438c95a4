from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple, Union

from dispatch import CostDispatcher, Direction, Dispatcher, MotionState, ScoreCache

from .car import Car, CarState
from .config import BankConfig
from .event_log import Clock, EventLog
from .events import EventKind, EventQueue, ScheduledEvent
from .request import PendingRequest, RequestOutcome
from .snapshot import Snapshot

Observer = Callable[[Snapshot], None]


class Controller:
    """Tick-driven owner of every car, pending hall call and log entry.

    Time is virtual: ``advance_time`` moves the clock and fires due loading
    and travel completions, ``tick`` advances every car by one step. Both are
    meant to be called from a single driver loop.
    """

    def __init__(
        self,
        config: Optional[BankConfig] = None,
        dispatcher: Optional[Dispatcher] = None,
        observer: Optional[Observer] = None,
        logger: Optional[logging.Logger] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.config = config or BankConfig()
        self.dispatcher = dispatcher or CostDispatcher(cache=ScoreCache())
        self.logger = logger or logging.getLogger(__name__)
        self.observer = observer
        self.event_log = EventLog(self.config.log_capacity, clock=clock, logger=self.logger)
        self.events = EventQueue()
        self.current_time: float = 0.0
        self.generation = 0
        self._cars: List[Car] = self._build_cars()
        self._pending: List[PendingRequest] = []

    @property
    def total_floors(self) -> int:
        return self.config.total_floors

    def set_observer(self, observer: Optional[Observer]) -> None:
        self.observer = observer

    def request_elevator(self, floor: int, direction: Union[Direction, str]) -> RequestOutcome:
        if not 1 <= floor <= self.total_floors:
            self.logger.warning("Invalid floor request: %s", floor, extra={"event": "rejected", "floor": floor})
            return RequestOutcome.REJECTED_INVALID_FLOOR
        direction = _parse_direction(direction)
        if direction not in (Direction.UP, Direction.DOWN):
            self.logger.warning(
                "Invalid direction for floor %s request", floor, extra={"event": "rejected", "floor": floor}
            )
            return RequestOutcome.REJECTED_INVALID_DIRECTION

        if any(request.matches(floor, direction) for request in self._pending):
            return RequestOutcome.DEDUPLICATED

        self._pending.append(PendingRequest(floor, direction, self.current_time))
        self._log(f"{direction.value} request received on floor {floor}", event="request", floor=floor)
        self._assign(floor, direction)
        return RequestOutcome.ACCEPTED

    def tick(self) -> None:
        for car in self._cars:
            if car.should_stop_at_current_floor():
                self._stop(car)
            elif car.motion_state is MotionState.MOVING:
                car.complete_movement()
                self._log(
                    f"Elevator {car.car_id} arrived at floor {car.current_floor}",
                    event="arrived",
                    car_id=car.car_id,
                    floor=car.current_floor,
                )
            elif car.motion_state is MotionState.IDLE and car.next_destination is not None:
                origin = car.current_floor
                if car.move_one_floor():
                    self._log(
                        f"Elevator {car.car_id} moving {car.direction.value} from floor {origin}",
                        event="departed",
                        car_id=car.car_id,
                        floor=origin,
                    )
                    self._schedule(car, self.config.travel_latency, EventKind.TRAVEL_NOTICE)
        self._notify()

    def advance_time(self, seconds: float) -> int:
        """Move the virtual clock forward and fire every completion that falls due.

        Returns the number of events that were applied.
        """

        if seconds < 0:
            raise ValueError("cannot move the clock backwards")
        self.current_time += seconds
        fired = 0
        for event in self.events.pop_due(self.current_time):
            if self._fire(event):
                fired += 1
        return fired

    def step(self, seconds: float = 1.0) -> None:
        self.advance_time(seconds)
        self.tick()

    def run(self, ticks: int, tick_interval: float = 1.0) -> None:
        for _ in range(ticks):
            self.step(tick_interval)

    def reset(self) -> None:
        """Discard every car, call and log entry and start a fresh generation."""

        self.generation += 1
        self._cars = self._build_cars()
        self._pending = []
        self.event_log.clear()
        self._log("Simulation reset", event="reset")

    def retire(self) -> None:
        """Invalidate all outstanding completions and release loading cars."""

        self.generation += 1
        for car in self._cars:
            if car.motion_state is MotionState.LOADING:
                self._finish_loading(car)

    def get_state(self) -> Snapshot:
        return Snapshot(
            time=self.current_time,
            cars=tuple(car.snapshot() for car in self._cars),
            pending_requests=tuple(self._pending),
            recent_log=self.event_log.entries(),
        )

    def cars(self) -> Tuple[CarState, ...]:
        """Read-only per-car state, in id order."""

        return tuple(car.snapshot() for car in self._cars)

    def _assign(self, floor: int, direction: Direction) -> None:
        car = self.dispatcher.select(self._cars, floor, direction)
        if car is None:
            return
        car.add_destination(floor)
        self._log(
            f"Elevator {car.car_id} assigned to floor {floor}",
            event="assigned",
            car_id=car.car_id,
            floor=floor,
        )
        if car.current_floor != floor:
            return
        parked = car.motion_state is MotionState.IDLE and not car.destination_queue
        if car.motion_state is not MotionState.LOADING and not parked:
            # Passing through: the call stays pending until the car stops here.
            car.hold_at_current_floor()
        else:
            self._purge_requests(floor)
            self._log(
                f"Elevator {car.car_id} already at floor {floor}",
                event="served",
                car_id=car.car_id,
                floor=floor,
            )

    def _stop(self, car: Car) -> None:
        car.stop_at_floor()
        self._log(
            f"Elevator {car.car_id} stopped at floor {car.current_floor}",
            event="stopped",
            car_id=car.car_id,
            floor=car.current_floor,
        )
        self._purge_requests(car.current_floor)
        self._schedule(car, self.config.loading_latency, EventKind.LOADING_COMPLETE)

    def _purge_requests(self, floor: int) -> None:
        self._pending = [request for request in self._pending if request.floor != floor]

    def _schedule(self, car: Car, delay: float, kind: EventKind) -> ScheduledEvent:
        return self.events.schedule(self.current_time + delay, self.generation, car.car_id, kind)

    def _fire(self, event: ScheduledEvent) -> bool:
        if event.generation != self.generation:
            self.logger.debug("Dropping stale %s for car %s", event.kind.value, event.car_id)
            return False
        car = self._get_car(event.car_id)
        if car is None:
            return False
        if event.kind is EventKind.LOADING_COMPLETE:
            self._finish_loading(car)
        self._notify()
        return True

    def _finish_loading(self, car: Car) -> None:
        car.complete_loading()
        self._log(
            f"Elevator {car.car_id} ready to move from floor {car.current_floor}",
            event="ready",
            car_id=car.car_id,
            floor=car.current_floor,
        )

    def _log(self, message: str, **fields: object) -> None:
        self.event_log.append(message, **fields)
        self._notify()

    def _notify(self) -> None:
        if self.observer is not None:
            self.observer(self.get_state())

    def _build_cars(self) -> List[Car]:
        return [Car(car_id, self.config.total_floors) for car_id in range(1, self.config.number_of_cars + 1)]

    def _get_car(self, car_id: int) -> Optional[Car]:
        for car in self._cars:
            if car.car_id == car_id:
                return car
        return None


def _parse_direction(value: Union[Direction, str]) -> Optional[Direction]:
    if isinstance(value, str) and not isinstance(value, Direction):
        value = value.upper()
    try:
        return Direction(value)
    except ValueError:
        return None

"""Simulation primitives for a bank of elevator cars."""

from .car import Car, CarState, DestinationOutcome
from .config import BankConfig, ConfigurationError
from .controller import Controller
from .event_log import EventLog
from .events import EventKind, EventQueue, ScheduledEvent
from .request import PendingRequest, RequestOutcome
from .snapshot import Snapshot
from .traffic import RandomCallGenerator

__all__ = [
    "BankConfig",
    "Car",
    "CarState",
    "ConfigurationError",
    "Controller",
    "DestinationOutcome",
    "EventKind",
    "EventLog",
    "EventQueue",
    "PendingRequest",
    "RandomCallGenerator",
    "RequestOutcome",
    "ScheduledEvent",
    "Snapshot",
]

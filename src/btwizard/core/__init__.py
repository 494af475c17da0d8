from __future__ import annotations

from .interfaces import (
    EventSource,
    Navigator,
    Presenter,
    RadioAdapter,
    RemoteDevice,
    Scheduler,
    TimerHandle,
)
from .pairing import PairingCoordinator
from .registry import DeviceRegistry
from .scan import ScanController, ScanObserver
from .session import SetupSession

__all__ = [
    "DeviceRegistry",
    "EventSource",
    "Navigator",
    "PairingCoordinator",
    "Presenter",
    "RadioAdapter",
    "RemoteDevice",
    "ScanController",
    "ScanObserver",
    "Scheduler",
    "SetupSession",
    "TimerHandle",
]

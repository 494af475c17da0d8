"""Collaborators the setup core talks to.

Everything here is provided by the surrounding platform layer. The core only
calls these from its own serialized context and expects events and timer
callbacks to be delivered back onto that same context.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from btwizard.models import (
    BondState,
    ConnectionState,
    RadioEvent,
    RegistryChange,
    ResultCode,
)

EventListener = Callable[[RadioEvent], None]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Deferred callbacks. ``asyncio.AbstractEventLoop`` fits as is."""

    def call_later(
        self, delay: float, callback: Callable[[], object]
    ) -> TimerHandle: ...


class RemoteDevice(Protocol):
    """A peripheral seen by the radio, carrying its own bond control."""

    @property
    def address(self) -> str: ...

    @property
    def name(self) -> str | None: ...

    def bond_state(self) -> BondState: ...

    def create_bond(self) -> bool: ...

    def cancel_bond_process(self) -> bool: ...

    def remove_bond(self) -> bool: ...


class RadioAdapter(Protocol):
    def is_available(self) -> bool: ...

    def is_enabled(self) -> bool: ...

    def enable(self) -> None: ...

    def is_discovering(self) -> bool: ...

    def start_discovery(self) -> bool: ...

    def cancel_discovery(self) -> None: ...


class EventSource(Protocol):
    def subscribe(self, listener: EventListener) -> None: ...

    def unsubscribe(self, listener: EventListener) -> None: ...


class Navigator(Protocol):
    def proceed_next(self, result: ResultCode) -> None: ...


class Presenter(Protocol):
    def show_progress(self, shown: bool) -> None: ...

    def show_scanning_indicator(self, visible: bool) -> None: ...

    def show_rescan_indicator(self, visible: bool) -> None: ...

    def show_connection_state(self, address: str, state: ConnectionState) -> None: ...

    def devices_changed(self, change: RegistryChange) -> None: ...

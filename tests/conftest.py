from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

import pytest

from btwizard.config import get_settings
from btwizard.models import BondState, ConnectionState, RadioEvent, RegistryChange


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("BTWIZARD_CONFIG", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@dataclass(eq=False)
class FakeRemote:
    address: str
    name: str | None = None
    state: object = BondState.NONE
    accept: bool = True
    calls: list[str] = field(default_factory=list)

    def bond_state(self):
        return self.state

    def create_bond(self) -> bool:
        self.calls.append("create_bond")
        return self.accept

    def cancel_bond_process(self) -> bool:
        self.calls.append("cancel_bond_process")
        return self.accept

    def remove_bond(self) -> bool:
        self.calls.append("remove_bond")
        return self.accept


class FakeRadio:
    def __init__(self) -> None:
        self.available = True
        self.enabled = True
        self.discovering = False
        self.accept_start: list[bool] = []
        self.start_requests = 0
        self.cancel_requests = 0
        self.enable_requests = 0
        self.listeners: list[Callable[[RadioEvent], None]] = []

    def is_available(self) -> bool:
        return self.available

    def is_enabled(self) -> bool:
        return self.enabled

    def enable(self) -> None:
        self.enable_requests += 1

    def is_discovering(self) -> bool:
        return self.discovering

    def start_discovery(self) -> bool:
        self.start_requests += 1
        accepted = self.accept_start.pop(0) if self.accept_start else True
        if accepted:
            self.discovering = True
        return accepted

    def cancel_discovery(self) -> None:
        self.cancel_requests += 1
        self.discovering = False

    def subscribe(self, listener) -> None:
        self.listeners.append(listener)

    def unsubscribe(self, listener) -> None:
        self.listeners.remove(listener)

    def emit(self, event: RadioEvent) -> None:
        for listener in list(self.listeners):
            listener(event)


@dataclass
class FakeTimer:
    delay: float
    callback: Callable[[], object]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def call_later(self, delay, callback) -> FakeTimer:
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [timer for timer in self.timers if not timer.cancelled]

    def fire(self) -> None:
        """Run the oldest pending timer."""
        timer = self.pending[0]
        timer.cancelled = True
        timer.callback()


class RecordingPresenter:
    def __init__(self) -> None:
        self.progress: list[bool] = []
        self.scanning: list[bool] = []
        self.rescan: list[bool] = []
        self.connection_states: list[tuple[str, ConnectionState]] = []
        self.changes: list[RegistryChange] = []

    def show_progress(self, shown: bool) -> None:
        self.progress.append(shown)

    def show_scanning_indicator(self, visible: bool) -> None:
        self.scanning.append(visible)

    def show_rescan_indicator(self, visible: bool) -> None:
        self.rescan.append(visible)

    def show_connection_state(self, address: str, state: ConnectionState) -> None:
        self.connection_states.append((address, state))

    def devices_changed(self, change: RegistryChange) -> None:
        self.changes.append(change)


class RecordingNavigator:
    def __init__(self) -> None:
        self.results: list = []

    def proceed_next(self, result) -> None:
        self.results.append(result)


class RecordingScanObserver:
    def __init__(self) -> None:
        self.started = 0
        self.exhausted = 0

    def on_scan_started(self) -> None:
        self.started += 1

    def on_scan_exhausted(self) -> None:
        self.exhausted += 1


@pytest.fixture
def radio() -> FakeRadio:
    return FakeRadio()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def scan_observer() -> RecordingScanObserver:
    return RecordingScanObserver()


@pytest.fixture
def make_remote() -> Callable[..., FakeRemote]:
    return FakeRemote

"""Simulated radio for development and demos."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from btwizard.config import ScanningConfig, SimulationConfig
from btwizard.core import Navigator, Presenter, SetupSession
from btwizard.core.interfaces import EventListener
from btwizard.models import (
    AdapterState,
    BondState,
    Device,
    EventKind,
    RadioEvent,
    RegistryChange,
    ResultCode,
)

logger = logging.getLogger(__name__)

SAMPLE_NAMES = (
    "Pixel Buds",
    "JBL Flip 5",
    "",
    "Galaxy Watch",
    "MX Keys",
    "Bose QC35",
    "",
    "Fitbit Charge",
)


@dataclass(eq=False)
class SimulatedPeripheral:
    """Remote device whose bond requests complete after ``bond_delay``."""

    address: str
    name: str | None = None
    state: BondState = BondState.NONE
    accepts_pairing: bool = True
    radio: SimulatedRadio | None = field(default=None, repr=False)
    _pending: asyncio.TimerHandle | None = field(default=None, repr=False)

    def bond_state(self) -> BondState:
        return self.state

    def create_bond(self) -> bool:
        if self.radio is None or self.state is not BondState.NONE:
            return False
        self._move_to(BondState.BONDING)
        final = BondState.BONDED if self.accepts_pairing else BondState.NONE
        self._schedule(final)
        return True

    def cancel_bond_process(self) -> bool:
        if self.state is not BondState.BONDING:
            return False
        self._cancel_pending()
        self._move_to(BondState.NONE)
        return True

    def remove_bond(self) -> bool:
        if self.radio is None or self.state is not BondState.BONDED:
            return False
        self._schedule(BondState.NONE)
        return True

    def rename(self, name: str) -> None:
        self.name = name
        if self.radio is not None:
            self.radio.post(RadioEvent(EventKind.DEVICE_NAME_CHANGED, device=self))

    def _schedule(self, state: BondState) -> None:
        if self.radio is None:
            return
        self._cancel_pending()
        self._pending = self.radio.loop.call_later(
            self.radio.config.bond_delay, self._move_to, state
        )

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _move_to(self, state: BondState) -> None:
        self._pending = None
        if state is self.state:
            return
        logger.debug("%s bond state %s -> %s", self.address, self.state, state)
        self.state = state
        if self.radio is not None:
            self.radio.post(RadioEvent(EventKind.BOND_STATE_CHANGED, device=self))


@dataclass(eq=False)
class SimulatedRadio:
    """In-memory radio adapter and event source bound to an event loop.

    Discovery announces each peripheral ``discovery_interval`` seconds apart
    and then finishes. The first ``start_failures`` discovery requests are
    rejected.
    """

    loop: asyncio.AbstractEventLoop
    config: SimulationConfig = field(default_factory=SimulationConfig)
    peripherals: list[SimulatedPeripheral] = field(default_factory=list)
    available: bool = True
    enabled: bool = True

    _listeners: list[EventListener] = field(default_factory=list, repr=False)
    _discovering: bool = field(default=False, repr=False)
    _start_failures_left: int = field(default=0, repr=False)
    _discovery_handles: list[asyncio.TimerHandle] = field(
        default_factory=list, repr=False
    )

    def __post_init__(self) -> None:
        self._start_failures_left = self.config.start_failures
        for peripheral in self.peripherals:
            peripheral.radio = self

    def add_peripheral(self, peripheral: SimulatedPeripheral) -> None:
        peripheral.radio = self
        self.peripherals.append(peripheral)

    # EventSource

    def subscribe(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def post(self, event: RadioEvent) -> None:
        """Deliver ``event`` to listeners on the next loop iteration."""
        self.loop.call_soon(self._dispatch, event)

    def _dispatch(self, event: RadioEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    # RadioAdapter

    def is_available(self) -> bool:
        return self.available

    def is_enabled(self) -> bool:
        return self.enabled

    def enable(self) -> None:
        if self.enabled:
            return
        self.loop.call_later(self.config.discovery_interval, self._turn_on)

    def is_discovering(self) -> bool:
        return self._discovering

    def start_discovery(self) -> bool:
        if not self.enabled:
            return False
        if self._start_failures_left > 0:
            self._start_failures_left -= 1
            logger.debug(
                "Rejecting discovery start (%d left)", self._start_failures_left
            )
            return False

        self._discovering = True
        self.post(RadioEvent(EventKind.DISCOVERY_STARTED))
        interval = self.config.discovery_interval
        for index, peripheral in enumerate(list(self.peripherals), start=1):
            self._discovery_handles.append(
                self.loop.call_later(interval * index, self._announce, peripheral)
            )
        self._discovery_handles.append(
            self.loop.call_later(
                interval * (len(self.peripherals) + 1), self._finish_discovery
            )
        )
        return True

    def cancel_discovery(self) -> None:
        if not self._discovering:
            return
        for handle in self._discovery_handles:
            handle.cancel()
        self._finish_discovery()

    def _announce(self, peripheral: SimulatedPeripheral) -> None:
        self.post(RadioEvent(EventKind.DEVICE_FOUND, device=peripheral))

    def _finish_discovery(self) -> None:
        self._discovery_handles.clear()
        self._discovering = False
        self.post(RadioEvent(EventKind.DISCOVERY_FINISHED))

    def _turn_on(self) -> None:
        self.enabled = True
        logger.info("Simulated radio turned on")
        self.post(
            RadioEvent(EventKind.ADAPTER_STATE_CHANGED, adapter_state=AdapterState.ON)
        )


def sample_peripherals(count: int, bonded: int = 0) -> list[SimulatedPeripheral]:
    """Build ``count`` peripherals with made-up addresses and names.

    The first ``bonded`` of them start out already paired.
    """
    peripherals = []
    for index in range(count):
        address = f"00:1A:7D:DA:{index // 256:02X}:{index % 256:02X}"
        name = SAMPLE_NAMES[index % len(SAMPLE_NAMES)]
        state = BondState.BONDED if index < bonded else BondState.NONE
        peripherals.append(
            SimulatedPeripheral(address=address, name=name, state=state)
        )
    return peripherals


async def run_simulation(
    radio: SimulatedRadio,
    presenter: Presenter,
    navigator: Navigator,
    result: asyncio.Future[ResultCode],
    scanning: ScanningConfig | None = None,
    pair_with: str | None = None,
    timeout: float = 10.0,
) -> tuple[ResultCode, list[Device]]:
    """Run one setup session against ``radio`` until it moves on.

    ``result`` is the future ``navigator`` resolves. When ``pair_with`` is
    given, that device is selected as soon as it is first listed. Running out
    of time counts as the user backing out of the step.
    """
    session = SetupSession(radio, radio, radio.loop, presenter, navigator, scanning)

    def _select_target(change: RegistryChange) -> None:
        if change.added and change.device is not None:
            if change.device.address == pair_with:
                session.registry.unsubscribe(_select_target)
                radio.loop.call_soon(session.select_device, pair_with)

    if pair_with is not None:
        session.registry.subscribe(_select_target)

    session.start()
    try:
        code = await asyncio.wait_for(asyncio.shield(result), timeout=timeout)
    except (asyncio.TimeoutError, TimeoutError):
        logger.info("No decision after %.1fs, backing out", timeout)
        code = ResultCode.CANCELED
    finally:
        session.stop()
    return code, list(session.registry)

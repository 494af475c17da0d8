from __future__ import annotations

import logging

from btwizard.config import ScanningConfig
from btwizard.models import AdapterState, EventKind, RadioEvent, ResultCode, UserAction

from .interfaces import EventSource, Navigator, Presenter, RadioAdapter, Scheduler
from .pairing import PairingCoordinator
from .registry import DeviceRegistry
from .scan import ScanController

logger = logging.getLogger(__name__)


class SetupSession:
    """One visit to the "pair a nearby device" setup step.

    Owns the registry, scan controller and pairing coordinator, feeds them
    radio events and user actions, and reports to the presenter and
    navigator. Everything must be called from a single serialized context.
    """

    def __init__(
        self,
        radio: RadioAdapter | None,
        events: EventSource,
        scheduler: Scheduler,
        presenter: Presenter,
        navigator: Navigator,
        config: ScanningConfig | None = None,
    ) -> None:
        self._radio = radio
        self._events = events
        self._presenter = presenter
        self._navigator = navigator
        self._active = False
        self._waiting_for_adapter = False

        self.registry = DeviceRegistry()
        self.registry.subscribe(presenter.devices_changed)
        self.scan: ScanController | None = None
        self.pairing: PairingCoordinator | None = None
        if radio is not None:
            self.scan = ScanController(radio, scheduler, self, config)
            self.pairing = PairingCoordinator(
                self.registry, self.scan, presenter, navigator
            )

    @property
    def active(self) -> bool:
        return self._active

    def start(self) -> None:
        if self._radio is None or not self._radio.is_available():
            logger.warning("No radio adapter found. Skipping to next step.")
            self._navigator.proceed_next(ResultCode.SKIP)
            return
        if self._active:
            return

        self._active = True
        self._events.subscribe(self.handle_event)

        # A scan is about to start one way or another.
        self._presenter.show_progress(True)

        if self._radio.is_enabled():
            self._begin_scan_cycle()
        else:
            logger.info("Radio is off, enabling it")
            self._waiting_for_adapter = True
            self._radio.enable()

    def stop(self) -> None:
        if not self._active:
            return
        logger.debug("Stopping setup session")
        self._active = False
        self._waiting_for_adapter = False
        if self.scan is not None:
            self.scan.stop_scan()
        self._events.unsubscribe(self.handle_event)

    def handle_event(self, event: RadioEvent) -> None:
        if not self._active:
            logger.debug("Ignoring %s while stopped", event.kind)
            return
        logger.debug("Received %s for %s", event.kind, event.device)

        kind = event.kind
        if kind is EventKind.ADAPTER_STATE_CHANGED:
            if event.adapter_state is AdapterState.ON and self._waiting_for_adapter:
                self._waiting_for_adapter = False
                self._begin_scan_cycle()
        elif kind is EventKind.DISCOVERY_STARTED:
            self._presenter.show_progress(True)
            self._presenter.show_scanning_indicator(True)
            self._presenter.show_rescan_indicator(False)
            self.registry.clear()
        elif kind is EventKind.DEVICE_FOUND:
            self._presenter.show_progress(False)
            self._presenter.show_scanning_indicator(False)
            self._presenter.show_rescan_indicator(True)
            self.registry.add_or_update(event.device)
        elif kind is EventKind.DEVICE_NAME_CHANGED:
            self.registry.add_or_update(event.device)
        elif kind is EventKind.BOND_STATE_CHANGED:
            if self.pairing is not None:
                self.pairing.on_bond_state_changed(event.device)
        elif kind is EventKind.DISCOVERY_FINISHED:
            logger.info("Discovery finished with %d device(s)", self.registry.count())
        else:
            logger.warning("Unknown event received: %r", kind)

    def select_action(self, action: UserAction) -> None:
        if action is UserAction.DONT_CONNECT:
            self._navigator.proceed_next(ResultCode.SKIP)
        elif action is UserAction.RESCAN:
            if self.scan is not None:
                self.scan.stop_scan()
                self.scan.start_scan()
        else:
            logger.warning("Unknown action selected: %r", action)

    def select_device(self, address: str) -> None:
        device = self.registry.get(address)
        if device is None or device.remote is None or self.pairing is None:
            logger.warning("Selected unknown device: %s", address)
            return
        self.pairing.request_pair_toggle(device.remote)

    # ScanObserver

    def on_scan_started(self) -> None:
        logger.debug("Discovery request accepted")

    def on_scan_exhausted(self) -> None:
        logger.warning("Could not start a scan. Skipping to next step.")
        self._navigator.proceed_next(ResultCode.SKIP)

    def _begin_scan_cycle(self) -> None:
        self.registry.clear()
        if self.scan is not None:
            self.scan.start_scan()

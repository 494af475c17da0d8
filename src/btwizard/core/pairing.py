from __future__ import annotations

import logging

from btwizard.models import BondState, ConnectionState, ResultCode

from .interfaces import Navigator, Presenter, RemoteDevice
from .registry import DeviceRegistry
from .scan import ScanController

logger = logging.getLogger(__name__)


class PairingCoordinator:
    """Pairs or unpairs the device the user picked and tracks the outcome.

    Only the most recent pairing request is tracked. When that device reports
    BONDED the setup step is finished with ``ResultCode.OK``; bond changes the
    coordinator did not start only refresh the registry.
    """

    def __init__(
        self,
        registry: DeviceRegistry,
        scan: ScanController,
        presenter: Presenter,
        navigator: Navigator,
    ) -> None:
        self._registry = registry
        self._scan = scan
        self._presenter = presenter
        self._navigator = navigator
        self._pending_bond_target: str | None = None

    @property
    def pending_bond_target(self) -> str | None:
        return self._pending_bond_target

    def request_pair_toggle(self, remote: RemoteDevice) -> None:
        # Pairing is unreliable while discovery is running.
        self._scan.stop_scan()

        state = remote.bond_state()
        if state is BondState.BONDED:
            self._pending_bond_target = None
            accepted = remote.remove_bond()
            logger.debug("remove_bond() on %s accepted: %s", remote.address, accepted)
            self._report(remote.address, ConnectionState.DISCONNECTING, accepted)
        elif state is BondState.BONDING:
            self._pending_bond_target = None
            accepted = remote.cancel_bond_process()
            logger.debug(
                "cancel_bond_process() on %s accepted: %s", remote.address, accepted
            )
            self._report(remote.address, ConnectionState.CANCELLING, accepted)
        elif state is BondState.NONE:
            self._pending_bond_target = remote.address
            accepted = remote.create_bond()
            logger.debug("create_bond() on %s accepted: %s", remote.address, accepted)
            self._report(remote.address, ConnectionState.CONNECTING, accepted)
        else:
            logger.warning("Encountered unknown bond state: %r", state)

    def on_bond_state_changed(self, remote: RemoteDevice | None) -> None:
        device = self._registry.add_or_update(remote)
        if device is None:
            return

        if (
            device.address == self._pending_bond_target
            and device.bond_state is BondState.BONDED
        ):
            logger.info("Paired with %s, moving on", device.display_name)
            self._pending_bond_target = None
            self._navigator.proceed_next(ResultCode.OK)

    def _report(self, address: str, state: ConnectionState, accepted: bool) -> None:
        if not accepted:
            logger.warning("Radio rejected %s request for %s", state.value, address)

        # Shown right away; the next bond event for the device replaces it.
        device = self._registry.get(address)
        if device is not None:
            device.connection_state = state
        self._presenter.show_connection_state(address, state)

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from rich.console import Console
from rich.table import Table

from btwizard.models import (
    BondState,
    ConnectionState,
    Device,
    RegistryChange,
    ResultCode,
)
from btwizard.utils.redaction import Redactor

logger = logging.getLogger(__name__)

CONNECTION_LABELS = {
    ConnectionState.DISCONNECTING: "Disconnecting…",
    ConnectionState.CONNECTING: "Connecting…",
    ConnectionState.CANCELLING: "Cancelling…",
}

BOND_LABELS = {
    BondState.BONDED: "Connected",
    BondState.BONDING: "Connecting…",
}


def device_summary(device: Device) -> str:
    if device.connection_state is not ConnectionState.NONE:
        return CONNECTION_LABELS[device.connection_state]
    return BOND_LABELS.get(device.bond_state, "")


class ConsolePresenter:
    """Prints session updates as they happen."""

    def __init__(self, console: Console, redactor: Redactor | None = None) -> None:
        self._console = console
        self._redactor = redactor or Redactor(enabled=False)
        self.progress_shown = False
        self.scanning_visible = False
        self.rescan_visible = False

    def show_progress(self, shown: bool) -> None:
        self.progress_shown = shown

    def show_scanning_indicator(self, visible: bool) -> None:
        if visible and not self.scanning_visible:
            self._console.print("[cyan]Searching for devices…[/cyan]")
        self.scanning_visible = visible

    def show_rescan_indicator(self, visible: bool) -> None:
        self.rescan_visible = visible

    def show_connection_state(self, address: str, state: ConnectionState) -> None:
        label = CONNECTION_LABELS.get(state, state.value)
        self._console.print(f"{self._redactor.redact_mac(address)}: {label}")

    def devices_changed(self, change: RegistryChange) -> None:
        device = change.device
        if device is None:
            return
        name = self._redactor.redact_name(device.display_name, device.address)
        address = self._redactor.redact_mac(device.address)
        if change.added:
            self._console.print(f"[green]Found[/green] {name} ({address})")
        else:
            summary = device_summary(device) or "Not paired"
            self._console.print(f"{name} ({address}): {summary}")

    def render_table(self, devices: Iterable[Device]) -> Table:
        table = Table()
        table.add_column("#", justify="right")
        table.add_column("Name", style="green")
        table.add_column("Address", style="cyan")
        table.add_column("Status", style="yellow")
        for device in devices:
            table.add_row(
                str(device.handle),
                self._redactor.redact_name(device.display_name, device.address),
                self._redactor.redact_mac(device.address),
                device_summary(device),
            )
        return table


class FutureNavigator:
    """Resolves a future with the first result the session reports."""

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self.result: asyncio.Future[ResultCode] = loop.create_future()

    def proceed_next(self, result: ResultCode) -> None:
        if self.result.done():
            logger.debug("Already moved on, ignoring %s", result)
            return
        self.result.set_result(result)

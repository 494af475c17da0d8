from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

from btwizard.models import ConnectionState, Device, RegistryChange

from .interfaces import RemoteDevice

logger = logging.getLogger(__name__)

# Upper bound of the display handle space. Handles are never recycled.
MAX_HANDLE = 0x00FFFFFF

RegistryObserver = Callable[[RegistryChange], None]


class DeviceRegistry:
    """Discovered devices keyed by address, listed in first-seen order."""

    def __init__(self) -> None:
        self._devices: dict[str, Device] = {}
        self._addresses: list[str] = []
        self._observers: list[RegistryObserver] = []
        self._next_handle = 1

    def subscribe(self, observer: RegistryObserver) -> None:
        self._observers.append(observer)

    def unsubscribe(self, observer: RegistryObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def clear(self) -> None:
        self._devices.clear()
        self._addresses.clear()
        self._notify(RegistryChange())

    def add_or_update(self, remote: RemoteDevice | None) -> Device | None:
        """Record a sighting of ``remote``, creating its entry on first sight.

        Returns the (possibly pre-existing) record, or ``None`` when there
        was nothing to record.
        """
        if remote is None:
            return None

        address = remote.address
        device = self._devices.get(address)
        added = device is None
        if device is None:
            self._addresses.append(address)
            device = Device(address=address, handle=self._allocate_handle())
            self._devices[address] = device
            logger.debug("New device %s (handle %d)", address, device.handle)

        device.remote = remote
        device.name = remote.name or ""
        device.bond_state = remote.bond_state()
        device.connection_state = ConnectionState.NONE

        self._notify(RegistryChange(device=device, added=added))
        return device

    def count(self) -> int:
        return len(self._addresses)

    def at(self, index: int) -> Device:
        return self._devices[self._addresses[index]]

    def get(self, address: str) -> Device | None:
        return self._devices.get(address)

    @property
    def addresses(self) -> list[str]:
        return list(self._addresses)

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[Device]:
        return (self._devices[address] for address in list(self._addresses))

    def _allocate_handle(self) -> int:
        handle = self._next_handle
        self._next_handle += 1
        if handle >= MAX_HANDLE:
            logger.error("Ran out of display handles for discovered devices")
        return handle

    def _notify(self, change: RegistryChange) -> None:
        for observer in list(self._observers):
            observer(change)

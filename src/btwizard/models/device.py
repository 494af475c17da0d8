"""Device models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from btwizard.core.interfaces import RemoteDevice


class BondState(Enum):
    """Pairing state reported by the radio for a remote device."""

    NONE = "none"
    BONDING = "bonding"
    BONDED = "bonded"


class ConnectionState(Enum):
    """Optimistic state shown right after the user acts on a device."""

    NONE = "none"
    DISCONNECTING = "disconnecting"
    CONNECTING = "connecting"
    CANCELLING = "cancelling"


class ResultCode(Enum):
    SKIP = "skip"
    OK = "ok"
    CANCELED = "canceled"


@dataclass(eq=False)
class Device:
    """A discovered peripheral as listed on screen.

    Records are owned by the registry and updated in place on every new
    sighting, so ``handle`` stays the same for the lifetime of the session.
    """

    address: str
    handle: int
    name: str = ""
    bond_state: BondState = BondState.NONE
    connection_state: ConnectionState = ConnectionState.NONE
    remote: RemoteDevice | None = field(default=None, repr=False)

    @property
    def display_name(self) -> str:
        return self.name or self.address


@dataclass(frozen=True)
class RegistryChange:
    """Notification sent to registry observers.

    ``device`` is ``None`` for a reset, otherwise the record that was added
    or updated.
    """

    device: Device | None = None
    added: bool = False

    @property
    def is_reset(self) -> bool:
        return self.device is None

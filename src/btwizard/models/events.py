"""Radio event and user action models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from btwizard.core.interfaces import RemoteDevice


class EventKind(Enum):
    ADAPTER_STATE_CHANGED = "adapter_state_changed"
    DISCOVERY_STARTED = "discovery_started"
    DISCOVERY_FINISHED = "discovery_finished"
    DEVICE_FOUND = "device_found"
    DEVICE_NAME_CHANGED = "device_name_changed"
    BOND_STATE_CHANGED = "bond_state_changed"


class AdapterState(Enum):
    OFF = "off"
    TURNING_ON = "turning_on"
    ON = "on"
    TURNING_OFF = "turning_off"


class UserAction(Enum):
    DONT_CONNECT = "dont_connect"
    RESCAN = "rescan"


@dataclass(frozen=True)
class RadioEvent:
    kind: EventKind
    device: RemoteDevice | None = None
    adapter_state: AdapterState | None = None

"""Data models for btwizard."""

from btwizard.models.device import (
    BondState,
    ConnectionState,
    Device,
    RegistryChange,
    ResultCode,
)
from btwizard.models.events import AdapterState, EventKind, RadioEvent, UserAction

__all__ = [
    "AdapterState",
    "BondState",
    "ConnectionState",
    "Device",
    "EventKind",
    "RadioEvent",
    "RegistryChange",
    "ResultCode",
    "UserAction",
]

"""btwizard - scan, pair or skip: the Bluetooth step of a device setup flow."""

from __future__ import annotations

from importlib.metadata import version

from .config import ScanningConfig, Settings, SimulationConfig, get_settings
from .core import DeviceRegistry, PairingCoordinator, ScanController, SetupSession
from .models import BondState, ConnectionState, Device, ResultCode

__all__ = [
    "BondState",
    "ConnectionState",
    "Device",
    "DeviceRegistry",
    "PairingCoordinator",
    "ResultCode",
    "ScanController",
    "ScanningConfig",
    "Settings",
    "SetupSession",
    "SimulationConfig",
    "__version__",
    "get_settings",
]

__version__ = version("btwizard")

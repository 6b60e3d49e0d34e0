"""
Destination discovery and resolution.
"""

from .inventory import (
    DeviceInventory,
    fetch_connected_physical_devices,
    fetch_physical_devices,
    fetch_simulators,
    find_simulator,
    natural_key,
)
from .probe import ConnectivityProbe, find_device_entry, transport_type
from .resolver import TargetResolver, resolve_target

__all__ = [
    "DeviceInventory",
    "fetch_connected_physical_devices",
    "fetch_physical_devices",
    "fetch_simulators",
    "find_simulator",
    "natural_key",
    "ConnectivityProbe",
    "find_device_entry",
    "transport_type",
    "TargetResolver",
    "resolve_target",
]

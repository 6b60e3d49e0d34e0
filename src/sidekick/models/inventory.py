"""
Device inventory data models.

Structures decoded from the JSON listings of the external device-management
tools: emulated devices grouped by runtime, and physical devices.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class SimulatorDevice:
    name: str
    udid: str
    state: Optional[str] = None
    is_available: Optional[bool] = None
    availability_error: Optional[str] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "SimulatorDevice":
        return cls(
            name=data["name"],
            udid=data["udid"],
            state=data.get("state"),
            is_available=data.get("isAvailable"),
            availability_error=data.get("availabilityError"),
        )

    @property
    def usable(self) -> bool:
        return (self.is_available is None or self.is_available) and self.availability_error is None

    @property
    def is_booted(self) -> bool:
        return self.state == "Booted"


@dataclass(frozen=True)
class SimulatorRuntimeGroup:
    """All simulators that share one platform runtime."""

    runtime: str
    devices: Tuple[SimulatorDevice, ...]


@dataclass(frozen=True)
class PhysicalDevice:
    name: Optional[str] = None
    identifier: Optional[str] = None
    platform: Optional[str] = None
    os_version: Optional[str] = None
    interface: Optional[str] = None
    available: Optional[bool] = None
    simulator: Optional[bool] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "PhysicalDevice":
        return cls(
            name=data.get("name"),
            identifier=data.get("identifier"),
            platform=data.get("platform"),
            os_version=data.get("operatingSystemVersion", data.get("osVersion")),
            interface=data.get("interface"),
            available=data.get("available"),
            simulator=data.get("simulator"),
        )

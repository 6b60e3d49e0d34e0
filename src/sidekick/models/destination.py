"""
Destination data models.

This module contains the structures that describe where a build or test runs:
the platform the caller asks for, the targets saved in the project
configuration, and the resolved, immutable destination.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping, Optional


class DestinationKind(Enum):
    """Kinds of build/test destinations."""
    DEVICE = "device"
    SIMULATOR = "simulator"
    DESKTOP = "desktop"


class PlatformRequest(Enum):
    """
    The platform a command asks for.

    Values match the platform names used in saved project configuration.
    """
    SIMULATOR = "ios-sim"
    DEVICE = "ios-device"
    DESKTOP = "macos"

    @classmethod
    def parse(cls, value: str) -> "PlatformRequest":
        for member in cls:
            if member.value == value or member.name.lower() == value.lower():
                return member
        valid = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown platform '{value}'. Expected one of: {valid}")


_SDK_BY_KIND = {
    DestinationKind.DEVICE: "iphoneos",
    DestinationKind.SIMULATOR: "iphonesimulator",
    DestinationKind.DESKTOP: "macosx",
}


@dataclass(frozen=True)
class Destination:
    """
    A resolved build/test target.

    Resolved once per command and immutable afterwards.
    """

    kind: DestinationKind
    # Device or simulator identifier; None for the desktop target.
    identifier: Optional[str] = None
    name: Optional[str] = None

    @classmethod
    def desktop(cls) -> "Destination":
        return cls(kind=DestinationKind.DESKTOP)

    @property
    def is_device(self) -> bool:
        return self.kind is DestinationKind.DEVICE

    @property
    def display_name(self) -> str:
        if self.kind is DestinationKind.DESKTOP:
            return "macOS"
        label = "Device" if self.is_device else "Simulator"
        return f"{self.name} ({label})"

    @property
    def sdk(self) -> str:
        return _SDK_BY_KIND[self.kind]

    @property
    def destination_arg(self) -> str:
        """The value passed to the build tool's ``-destination`` option."""
        if self.kind is DestinationKind.DESKTOP:
            return "platform=macOS"
        if self.kind is DestinationKind.DEVICE:
            return f"platform=iOS,id={self.identifier}"
        return f"platform=iOS Simulator,id={self.identifier}"

    def destination_args(self) -> List[str]:
        return ["-sdk", self.sdk, "-destination", self.destination_arg]


def generic_destination_args(platform: PlatformRequest) -> List[str]:
    """
    Build tool arguments for a platform without a concrete destination.

    Used when a build does not need a specific device, e.g. compiling for
    "any iOS device".
    """
    if platform is PlatformRequest.DESKTOP:
        return Destination.desktop().destination_args()
    if platform is PlatformRequest.DEVICE:
        return ["-sdk", "iphoneos", "-destination", "generic/platform=iOS"]
    return ["-sdk", "iphonesimulator", "-destination", "generic/platform=iOS Simulator"]


@dataclass(frozen=True)
class SavedTargets:
    """
    The device and simulator remembered in the project configuration.

    Only the fields the resolver reads; loading and saving the configuration
    file itself belongs to the caller.
    """

    device_id: Optional[str] = None
    device_name: Optional[str] = None
    simulator_id: Optional[str] = None
    simulator_name: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "SavedTargets":
        """
        Build from a decoded project configuration.

        Accepts both the project file's camelCase keys and snake_case keys.
        """
        if not data:
            return cls()

        def pick(*keys: str) -> Optional[str]:
            for key in keys:
                value = data.get(key)
                if value is not None:
                    return str(value)
            return None

        return cls(
            device_id=pick("deviceUDID", "device_id"),
            device_name=pick("deviceName", "device_name"),
            simulator_id=pick("simulatorUDID", "simulator_id"),
            simulator_name=pick("simulatorName", "simulator_name"),
        )

    @property
    def has_device(self) -> bool:
        return bool(self.device_id) and self.device_name is not None

    @property
    def has_simulator(self) -> bool:
        return bool(self.simulator_id) and self.simulator_name is not None

"""
Device inventory.

Queries the toolchain for available simulators (``simctl list -j devices``)
and physical devices (``xcdevice list --json``) and decodes the listings.
"""

import json
import logging
import re
from typing import Any, List, Optional

from ..models.inventory import PhysicalDevice, SimulatorDevice, SimulatorRuntimeGroup
from ..system.commands import ProcessRunner, get_process_runner
from ..validation import ToolingError

logger = logging.getLogger(__name__)

DEFAULT_LOCATOR = "/usr/bin/xcrun"


def natural_key(text: str) -> List[Any]:
    """Sort key comparing digit runs numerically ("iOS-9-3" < "iOS-17-0")."""
    return [int(part) if part.isdigit() else part.lower() for part in re.split(r"(\d+)", text)]


class DeviceInventory:
    """
    Reads device listings through the toolchain locator.

    Args:
        locator: Toolchain locator executable (``xcrun``)
        runner: Process runner used for the listing commands
    """

    def __init__(self, locator: str = DEFAULT_LOCATOR, runner: Optional[ProcessRunner] = None):
        self.locator = locator
        self.runner = runner or get_process_runner()

    def _query_json(self, tool: str, args: List[str]) -> Any:
        result = self.runner.run(self.locator, args)
        if result.exit_code != 0:
            raise ToolingError(tool, "command failed", exit_code=result.exit_code, stderr=result.stderr)
        try:
            return json.loads(result.stdout)
        except ValueError as e:
            raise ToolingError(tool, f"failed to decode JSON: {e}") from e

    def fetch_simulators(self, include_unavailable: bool = False) -> List[SimulatorRuntimeGroup]:
        """
        List simulators grouped by runtime.

        Groups and devices are sorted by name; empty groups are dropped.

        Raises:
            ToolingError: If the listing fails or cannot be decoded
            SpawnFailure: If the locator cannot be started
        """
        tool = "xcrun simctl list"
        payload = self._query_json(tool, ["simctl", "list", "-j", "devices"])
        devices_by_runtime = payload.get("devices") if isinstance(payload, dict) else None
        if not isinstance(devices_by_runtime, dict):
            raise ToolingError(tool, "missing 'devices' object")

        groups = []
        for runtime, entries in devices_by_runtime.items():
            try:
                devices = [SimulatorDevice.from_json(entry) for entry in entries]
            except (KeyError, TypeError) as e:
                raise ToolingError(tool, f"malformed device entry: {e}") from e
            if not include_unavailable:
                devices = [device for device in devices if device.usable]
            if not devices:
                continue
            devices.sort(key=lambda device: device.name.lower())
            groups.append(SimulatorRuntimeGroup(runtime=runtime, devices=tuple(devices)))

        groups.sort(key=lambda group: group.runtime.lower())
        logger.debug(f"Found {sum(len(g.devices) for g in groups)} simulators in {len(groups)} runtimes")
        return groups

    def fetch_physical_devices(self) -> List[PhysicalDevice]:
        """
        List physical devices known to the toolchain, excluding simulators.

        Raises:
            ToolingError: If the listing fails or cannot be decoded
        """
        tool = "xcrun xcdevice list"
        payload = self._query_json(tool, ["xcdevice", "list", "--json"])
        if not isinstance(payload, list):
            raise ToolingError(tool, "expected a JSON array")
        devices = [
            PhysicalDevice.from_json(entry)
            for entry in payload
            if isinstance(entry, dict)
        ]
        devices = [device for device in devices if not device.simulator]
        devices.sort(key=lambda device: (device.name or "").lower())
        return devices

    def fetch_connected_physical_devices(self) -> List[PhysicalDevice]:
        return [device for device in self.fetch_physical_devices() if device.available]


def fetch_simulators(include_unavailable: bool = False) -> List[SimulatorRuntimeGroup]:
    return DeviceInventory().fetch_simulators(include_unavailable)


def fetch_physical_devices() -> List[PhysicalDevice]:
    return DeviceInventory().fetch_physical_devices()


def fetch_connected_physical_devices() -> List[PhysicalDevice]:
    return DeviceInventory().fetch_connected_physical_devices()


def find_simulator(groups: List[SimulatorRuntimeGroup], family: str) -> Optional[SimulatorDevice]:
    """
    Pick a simulator whose name contains ``family``.

    A booted match in any runtime wins; otherwise the first match in the
    newest runtime.
    """
    needle = family.lower()

    def matches(device: SimulatorDevice) -> bool:
        return needle in device.name.lower()

    for group in groups:
        booted = next((d for d in group.devices if matches(d) and d.is_booted), None)
        if booted is not None:
            return booted

    for group in sorted(groups, key=lambda g: natural_key(g.runtime), reverse=True):
        device = next((d for d in group.devices if matches(d)), None)
        if device is not None:
            return device
    return None

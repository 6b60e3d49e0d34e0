"""
Wired connectivity probe for physical devices.

A device counts as connected only when the device tool answers a lock-state
query for it within the time bound and reports a wired transport. Every
failure (timeout, unknown device, tool error, unreadable output) means "not
connected"; nothing is raised to the caller.
"""

import json
import logging
import math
import subprocess
import time
from pathlib import Path
from typing import Any, Dict, Optional

from ..system.commands import ProcessRunner, get_process_runner
from ..system.temp_files import TempResourceTracker
from ..validation import ProbeFailure, ProbeTimeout, SpawnFailure

logger = logging.getLogger(__name__)

WIRED_TRANSPORT = "wired"


def find_device_entry(payload: Any, device_id: str) -> Optional[Dict[str, Any]]:
    """Locate a device in a ``devicectl list devices`` JSON document."""
    result = payload.get("result") if isinstance(payload, dict) else None
    devices = result.get("devices") if isinstance(result, dict) else None
    if not isinstance(devices, list):
        return None
    for entry in devices:
        if not isinstance(entry, dict):
            continue
        hardware = entry.get("hardwareProperties")
        udid = hardware.get("udid") if isinstance(hardware, dict) else None
        if device_id in (entry.get("identifier"), udid):
            return entry
    return None


def transport_type(entry: Dict[str, Any]) -> Optional[str]:
    connection = entry.get("connectionProperties")
    if not isinstance(connection, dict):
        return None
    transport = connection.get("transportType")
    return transport if isinstance(transport, str) else None


class ConnectivityProbe:
    """
    Checks whether a device is reachable over a wired transport right now.

    Args:
        tracker: Owner of the JSON output files the device tool writes
        locator: Toolchain locator executable (``xcrun``)
        timeout: Upper bound in seconds for the whole probe
        runner: Process runner for the device tool
    """

    def __init__(self, tracker: TempResourceTracker, locator: str = "/usr/bin/xcrun",
                 timeout: float = 5.0, runner: Optional[ProcessRunner] = None):
        self.tracker = tracker
        self.locator = locator
        self.timeout = timeout
        self.runner = runner or get_process_runner()

    def __call__(self, device_id: str) -> bool:
        return self.is_connected(device_id)

    def is_connected(self, device_id: str) -> bool:
        try:
            self.probe(device_id)
        except ProbeFailure as e:
            logger.debug(str(e))
            return False
        logger.debug(f"Device {device_id} is connected over a wired transport")
        return True

    def probe(self, device_id: str) -> None:
        """
        Raises:
            ProbeTimeout: If the device tool did not answer in time
            ProbeFailure: For every other reason the device is not usable
        """
        deadline = time.monotonic() + self.timeout
        self._devicectl(
            device_id, deadline, "lockstate",
            ["device", "info", "lockState", "--device", device_id],
        )
        listing = self._devicectl(device_id, deadline, "devices", ["list", "devices"])
        entry = find_device_entry(listing, device_id)
        if entry is None:
            raise ProbeFailure(device_id, "device is not listed")
        transport = transport_type(entry)
        if transport != WIRED_TRANSPORT:
            raise ProbeFailure(device_id, f"transport is {transport or 'unknown'}, not wired")

    def _devicectl(self, device_id: str, deadline: float, label: str, args) -> Any:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise ProbeTimeout(device_id, self.timeout)

        output_path = self.tracker.create(f"devicectl-{label}", "json")
        command = [
            "devicectl", *args,
            "--timeout", str(max(1, math.ceil(remaining))),
            "--json-output", str(output_path),
        ]
        try:
            try:
                result = self.runner.run(self.locator, command, timeout=remaining)
            except subprocess.TimeoutExpired as e:
                raise ProbeTimeout(device_id, self.timeout) from e
            except SpawnFailure as e:
                raise ProbeFailure(device_id, str(e)) from e
            if result.exit_code != 0:
                raise ProbeFailure(device_id, f"devicectl {label} exited with {result.exit_code}")
            return self._read_json(device_id, output_path)
        finally:
            self.tracker.remove(output_path)

    @staticmethod
    def _read_json(device_id: str, path: Path) -> Any:
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ProbeFailure(device_id, f"unreadable devicectl output: {e}") from e

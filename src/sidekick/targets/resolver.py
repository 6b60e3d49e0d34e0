"""
Destination resolution.

One pass of a deterministic fallback chain per command:

- desktop requests resolve unconditionally;
- device requests use the saved device when the probe sees it wired, then
  fall back to the simulator chain;
- simulator requests use the saved simulator, then search the inventory
  for a simulator of the target family.

Identical (request, saved targets, probe result, inventory) always give
the identical destination.
"""

import logging
from typing import Any, Callable, List, Optional

from ..config import get_config
from ..models.config import EngineConfig
from ..models.destination import Destination, DestinationKind, PlatformRequest, SavedTargets
from ..models.inventory import SimulatorRuntimeGroup
from ..system.temp_files import TempResourceTracker
from ..validation import NoTargetAvailable, SpawnFailure, ToolingError
from .inventory import DeviceInventory, find_simulator
from .probe import ConnectivityProbe

logger = logging.getLogger(__name__)

Probe = Callable[[str], bool]
SimulatorSource = Callable[[], List[SimulatorRuntimeGroup]]
Progress = Callable[[str, Callable[[], Any]], Any]


def _run_quietly(message: str, operation: Callable[[], Any]) -> Any:
    return operation()


class TargetResolver:
    """
    Picks the destination for one command.

    Args:
        probe: Returns True when a device id is reachable over a wired transport
        simulators: Returns the current simulator listing
        target_family: Name fragment a fallback simulator must contain
        progress: Wraps the slow lookups as ``progress(message, operation)``,
            e.g. ``with_spinner``; the default runs them silently
    """

    def __init__(self, probe: Probe, simulators: SimulatorSource, target_family: str = "iphone",
                 progress: Optional[Progress] = None):
        self.probe = probe
        self.simulators = simulators
        self.target_family = target_family
        self.progress = progress or _run_quietly

    @classmethod
    def from_config(cls, tracker: TempResourceTracker,
                    config: Optional[EngineConfig] = None,
                    progress: Optional[Progress] = None) -> "TargetResolver":
        config = config or get_config()
        inventory = DeviceInventory(locator=config.locator)
        probe = ConnectivityProbe(tracker, locator=config.locator,
                                  timeout=config.probe_timeout_seconds)
        return cls(probe=probe, simulators=inventory.fetch_simulators,
                   target_family=config.target_family, progress=progress)

    def resolve(self, platform: PlatformRequest, saved: Optional[SavedTargets] = None) -> Destination:
        """
        Raises:
            NoTargetAvailable: If every fallback is exhausted
        """
        saved = saved or SavedTargets()

        if platform is PlatformRequest.DESKTOP:
            destination = Destination.desktop()
        elif platform is PlatformRequest.DEVICE:
            destination = self._resolve_device(saved) or self._resolve_simulator(saved, platform)
        else:
            destination = self._resolve_simulator(saved, platform)

        logger.info(f"Resolved destination: {destination.display_name}")
        return destination

    def _resolve_device(self, saved: SavedTargets) -> Optional[Destination]:
        if not saved.has_device:
            logger.info("No device configured")
            return None
        connected = self.progress(f"Checking USB connection for {saved.device_name}",
                                  lambda: self.probe(saved.device_id))
        if connected:
            return Destination(DestinationKind.DEVICE, saved.device_id, saved.device_name)
        logger.warning(
            f"Device '{saved.device_name}' is not connected via USB (or is on the local network); "
            "falling back to simulator"
        )
        return None

    def _resolve_simulator(self, saved: SavedTargets, platform: PlatformRequest) -> Destination:
        if saved.has_simulator:
            return Destination(DestinationKind.SIMULATOR, saved.simulator_id, saved.simulator_name)

        logger.info(f"No simulator configured, searching for an available '{self.target_family}' simulator")
        try:
            groups = self.progress("Searching for available simulators", self.simulators)
        except (ToolingError, SpawnFailure) as e:
            logger.warning(f"Simulator search failed: {e}")
            groups = []

        device = find_simulator(groups, self.target_family)
        if device is None:
            raise NoTargetAvailable(platform)
        return Destination(DestinationKind.SIMULATOR, device.udid, device.name)


def resolve_target(platform: PlatformRequest, saved: Optional[SavedTargets],
                   tracker: TempResourceTracker,
                   config: Optional[EngineConfig] = None,
                   progress: Optional[Progress] = None) -> Destination:
    """
    Resolve a destination with the configured probe and inventory.

    Raises:
        NoTargetAvailable: If every fallback is exhausted
    """
    return TargetResolver.from_config(tracker, config, progress).resolve(platform, saved)

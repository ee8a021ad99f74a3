import logging
import time
from typing import Optional

from hostprobe.errors import MetricError
from hostprobe.models.host import HostSnapshot
from hostprobe.services.cpu_monitor import CPUMetricsCollector
from hostprobe.services.filesystem_monitor import FilesystemMetricsCollector
from hostprobe.services.memory_monitor import MemoryMetricsCollector
from hostprobe.services.parsers import parse_uptime
from hostprobe.services.sources import HostSources

logger = logging.getLogger(__name__)


class HostSnapshotAssembler:
    """
    Build a HostSnapshot from a single pass over all sources.

    Every step is best effort. Failures are logged and replaced by defaults
    so that a snapshot is always returned:

      - boot_time falls back to the current time if the uptime is unreadable
      - hostname falls back to an empty string
      - each collector reports its own unavailable flags
    """

    def __init__(self, sources: Optional[HostSources] = None) -> None:
        self._sources = sources if sources is not None else HostSources()

    def _boot_time(self, now: float) -> int:
        try:
            uptime = parse_uptime(self._sources.read_uptime())
        except MetricError as exc:
            logger.warning("Uptime unavailable, reporting boot time as now: %s", exc)
            uptime = 0.0
        return max(0, int(now - uptime))

    def _hostname(self) -> str:
        try:
            return self._sources.hostname()
        except MetricError as exc:
            logger.warning("Hostname unavailable: %s", exc)
            return ""

    def assemble(self) -> HostSnapshot:
        return HostSnapshot(
            available=True,
            boot_time=self._boot_time(time.time()),
            hostname=self._hostname(),
            platform=self._sources.platform(),
            cpu=CPUMetricsCollector(self._sources).collect(),
            memory=MemoryMetricsCollector(self._sources).collect(),
            mountpoints=FilesystemMetricsCollector(self._sources).collect(),
        )


def get_host_snapshot() -> HostSnapshot:
    """
    Collect current host metrics and return them as a HostSnapshot.

    This function encapsulates all access to /proc, psutil and external
    commands so that the API layer only needs to return the result.
    """
    return HostSnapshotAssembler().assemble()

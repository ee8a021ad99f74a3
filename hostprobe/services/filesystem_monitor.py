import logging
from typing import Iterable, List, Optional

from hostprobe.errors import MetricError
from hostprobe.models.host import MountMetrics
from hostprobe.services.parsers import MountEntry, parse_mount_table
from hostprobe.services.sources import HostSources

logger = logging.getLogger(__name__)

BYTES_PER_MB = 1024 * 1024

EXCLUDED_MOUNTPOINT_PREFIXES = ("/snap", "/boot/efi")
EXCLUDED_DEVICE_PREFIXES = ("/dev/loop",)
EXCLUDED_FSTYPES = frozenset({"tmpfs", "devtmpfs", "proc", "sysfs"})


def is_relevant_mount(entry: MountEntry) -> bool:
    return not (
        entry.mountpoint.startswith(EXCLUDED_MOUNTPOINT_PREFIXES)
        or entry.device.startswith(EXCLUDED_DEVICE_PREFIXES)
        or entry.fstype in EXCLUDED_FSTYPES
    )


def filter_mounts(entries: Iterable[MountEntry]) -> List[MountEntry]:
    """Drop snap/EFI/loop mounts and pseudo filesystems, keeping table order."""
    return [entry for entry in entries if is_relevant_mount(entry)]


class FilesystemMetricsCollector:
    """Collect usage for every relevant mounted filesystem."""

    def __init__(self, sources: HostSources) -> None:
        self._sources = sources

    def _usage(self, entry: MountEntry) -> Optional[MountMetrics]:
        try:
            total_bytes, used_bytes = self._sources.disk_usage(entry.mountpoint)
        except MetricError as exc:
            logger.debug("Skipping mountpoint %s: %s", entry.mountpoint, exc)
            return None

        used_pct = 0
        if total_bytes > 0:
            used_pct = max(0, min(100, int(used_bytes / total_bytes * 100)))

        return MountMetrics(
            path=entry.mountpoint,
            name=entry.mountpoint,
            total_mb=total_bytes // BYTES_PER_MB,
            used_mb=max(0, used_bytes) // BYTES_PER_MB,
            used_pct=used_pct,
        )

    def collect(self) -> List[MountMetrics]:
        try:
            entries = parse_mount_table(self._sources.read_mounts())
        except MetricError as exc:
            logger.warning("Mount table unavailable: %s", exc)
            return []

        mountpoints: List[MountMetrics] = []
        for entry in filter_mounts(entries):
            metrics = self._usage(entry)
            if metrics is not None:
                mountpoints.append(metrics)
        return mountpoints

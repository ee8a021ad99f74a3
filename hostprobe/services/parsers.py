import math
import re
from typing import Dict, List, NamedTuple, Tuple

from hostprobe.errors import ParseFailure, TemperatureNotFound

# Sensor labels in order of preference:
#   CPU   - asusec board sensor
#   Tctl  - k10temp control temperature
#   Tccd1 - k10temp die temperature
SENSOR_LABELS: Tuple[str, ...] = ("CPU", "Tctl", "Tccd1")

_SENSOR_PATTERNS = [
    (label, re.compile(rf"{re.escape(label)}:\s*\+(\d+)\.\d+°C"))
    for label in SENSOR_LABELS
]

# The kernel escapes these characters in /proc/mounts fields
_MOUNT_ESCAPE = re.compile(r"\\(040|011|012|134)")


class MountEntry(NamedTuple):
    device: str
    mountpoint: str
    fstype: str


def parse_key_value_table(text: str) -> Dict[str, int]:
    """
    Parse "Key: value [unit]" lines (e.g. /proc/meminfo) into a mapping.

    Lines with fewer than two fields or a non-integer value are skipped.
    """
    table: Dict[str, int] = {}
    for line in text.splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        try:
            table[parts[0].rstrip(":")] = int(parts[1])
        except ValueError:
            continue
    return table


def _unescape_mount_field(field: str) -> str:
    return _MOUNT_ESCAPE.sub(lambda match: chr(int(match.group(1), 8)), field)


def parse_mount_table(text: str) -> List[MountEntry]:
    """
    Parse /proc/mounts style text into (device, mountpoint, fstype) entries.

    Lines with fewer than three fields are skipped. Order is preserved.
    """
    entries: List[MountEntry] = []
    for line in text.splitlines():
        parts = line.split()
        if len(parts) < 3:
            continue
        entries.append(
            MountEntry(
                device=_unescape_mount_field(parts[0]),
                mountpoint=_unescape_mount_field(parts[1]),
                fstype=parts[2],
            )
        )
    return entries


def parse_sensors_output(text: str) -> int:
    """
    Extract the CPU temperature from `sensors` output.

    Labels from SENSOR_LABELS are tried in order; each is matched as
    "<label>: +<int>.<frac>°C" and the first hit wins. The fractional part
    is truncated. Raises TemperatureNotFound if no label matches.
    """
    for _label, pattern in _SENSOR_PATTERNS:
        match = pattern.search(text)
        if match:
            return int(match.group(1))
    raise TemperatureNotFound(
        "no CPU temperature found in sensors output "
        f"(tried {', '.join(SENSOR_LABELS)})"
    )


def parse_loadavg(text: str) -> Tuple[float, float, float]:
    fields = text.split()
    if len(fields) < 3:
        raise ParseFailure(f"expected 3 load averages, got {len(fields)} fields")
    try:
        loads = (float(fields[0]), float(fields[1]), float(fields[2]))
    except ValueError as exc:
        raise ParseFailure(f"invalid load average: {exc}") from exc
    if not all(math.isfinite(load) and load >= 0 for load in loads):
        raise ParseFailure(f"load average out of range: {loads}")
    return loads


def parse_uptime(text: str) -> float:
    fields = text.split()
    if not fields:
        raise ParseFailure("uptime source is empty")
    try:
        uptime = float(fields[0])
    except ValueError as exc:
        raise ParseFailure(f"invalid uptime value {fields[0]!r}") from exc
    if not math.isfinite(uptime) or uptime < 0:
        raise ParseFailure(f"uptime out of range: {uptime}")
    return uptime

import logging
from typing import Tuple

from hostprobe.errors import MetricError
from hostprobe.models.host import CPUMetrics
from hostprobe.services.parsers import parse_loadavg, parse_sensors_output
from hostprobe.services.sources import HostSources

logger = logging.getLogger(__name__)


def load_percent(load: float, cores: int) -> int:
    """Per-core load as an integer percentage, truncated and clamped to 0..100."""
    return int(max(0.0, min(100.0, load / cores * 100)))


class CPUMetricsCollector:
    """
    Collect CPU load and temperature.

    Load average and temperature degrade independently: a missing sensors
    binary does not hide the load figures and vice versa.
    """

    def __init__(self, sources: HostSources) -> None:
        self._sources = sources

    def _read_load(self) -> Tuple[int, int, int]:
        load1, load5, load15 = parse_loadavg(self._sources.read_loadavg())
        cores = self._sources.cpu_count()
        return (
            load_percent(load1, cores),
            load_percent(load5, cores),
            load_percent(load15, cores),
        )

    def _read_temperature(self) -> int:
        return parse_sensors_output(self._sources.sensors_output())

    def collect(self) -> CPUMetrics:
        try:
            load1_pct, load5_pct, load15_pct = self._read_load()
            load_available = True
        except MetricError as exc:
            logger.warning("CPU load average unavailable: %s", exc)
            load1_pct = load5_pct = load15_pct = 0
            load_available = False

        try:
            temperature_c = self._read_temperature()
            temp_available = True
        except MetricError as exc:
            logger.warning("CPU temperature unavailable: %s", exc)
            temperature_c = 0
            temp_available = False

        return CPUMetrics(
            load_available=load_available,
            load1_pct=load1_pct,
            load5_pct=load5_pct,
            load15_pct=load15_pct,
            temp_available=temp_available,
            temperature_c=temperature_c,
        )

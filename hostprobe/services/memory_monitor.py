import logging

from hostprobe.errors import MetricError, ParseFailure
from hostprobe.models.host import MemoryMetrics
from hostprobe.services.parsers import parse_key_value_table
from hostprobe.services.sources import HostSources

logger = logging.getLogger(__name__)

KB_PER_MB = 1024


class MemoryMetricsCollector:
    """
    Collect RAM and swap usage from the memory table.

    Unlike the CPU collector there is no partial degradation: if the table
    cannot be read, or lacks MemTotal/MemAvailable, the whole record is
    reported as unavailable.
    """

    def __init__(self, sources: HostSources) -> None:
        self._sources = sources

    def _build(self) -> MemoryMetrics:
        table = parse_key_value_table(self._sources.read_meminfo())

        if "MemTotal" not in table or "MemAvailable" not in table:
            raise ParseFailure("MemTotal or MemAvailable missing from memory table")

        # Used amounts are taken in kB before converting, so e.g. 16000000 kB
        # total with 8000000 kB available is 7812 MB used at 50 %.
        total_kb = table["MemTotal"]
        total_mb = total_kb // KB_PER_MB
        if total_mb <= 0:
            raise ParseFailure(f"memory total is {total_kb} kB")
        used_kb = max(0, total_kb - table["MemAvailable"])
        used_mb = used_kb // KB_PER_MB
        used_pct = min(100, int(used_kb / total_kb * 100))

        swap_available = "SwapTotal" in table and "SwapFree" in table
        swap_total_mb = swap_used_mb = swap_used_pct = 0
        if swap_available:
            swap_total_kb = table["SwapTotal"]
            swap_used_kb = max(0, swap_total_kb - table["SwapFree"])
            swap_total_mb = swap_total_kb // KB_PER_MB
            swap_used_mb = swap_used_kb // KB_PER_MB
            if swap_total_mb > 0:
                swap_used_pct = min(100, int(swap_used_kb / swap_total_kb * 100))

        return MemoryMetrics(
            available=True,
            total_mb=total_mb,
            used_mb=used_mb,
            used_pct=used_pct,
            swap_available=swap_available,
            swap_total_mb=swap_total_mb,
            swap_used_mb=swap_used_mb,
            swap_used_pct=swap_used_pct,
        )

    def collect(self) -> MemoryMetrics:
        try:
            return self._build()
        except MetricError as exc:
            logger.warning("Memory metrics unavailable: %s", exc)
            return MemoryMetrics.unavailable()

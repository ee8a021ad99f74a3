from typing import Dict, Optional, Tuple

import pytest

from hostprobe.errors import SourceUnavailable
from hostprobe.services.sources import HostSources


class FakeSources(HostSources):
    """HostSources returning fixed data; a value of None means "unreadable"."""

    def __init__(
        self,
        loadavg: Optional[str] = "0.50 1.00 1.50 1/123 4567\n",
        cores: Optional[int] = 4,
        meminfo: Optional[str] = None,
        mounts: Optional[str] = "",
        usage: Optional[Dict[str, Tuple[int, int]]] = None,
        sensors: Optional[str] = None,
        uptime: Optional[str] = "100.00 350.00\n",
        hostname: Optional[str] = "testhost",
        platform: str = "linux",
    ) -> None:
        super().__init__(command_timeout_seconds=1.0)
        self.loadavg = loadavg
        self.cores = cores
        self.meminfo = meminfo
        self.mounts = mounts
        self.usage = usage or {}
        self.sensors = sensors
        self.uptime = uptime
        self.host = hostname
        self.platform_name = platform
        self.usage_queries = []

    @staticmethod
    def _or_fail(value, what):
        if value is None:
            raise SourceUnavailable(f"{what} unavailable in test")
        return value

    def read_loadavg(self) -> str:
        return self._or_fail(self.loadavg, "loadavg")

    def read_meminfo(self) -> str:
        return self._or_fail(self.meminfo, "meminfo")

    def read_mounts(self) -> str:
        return self._or_fail(self.mounts, "mounts")

    def read_uptime(self) -> str:
        return self._or_fail(self.uptime, "uptime")

    def cpu_count(self) -> int:
        return self._or_fail(self.cores, "cpu count")

    def disk_usage(self, path: str) -> Tuple[int, int]:
        self.usage_queries.append(path)
        return self._or_fail(self.usage.get(path), f"usage of {path}")

    def sensors_output(self) -> str:
        return self._or_fail(self.sensors, "sensors")

    def hostname(self) -> str:
        return self._or_fail(self.host, "hostname")

    def platform(self) -> str:
        return self.platform_name


@pytest.fixture
def fake_sources():
    return FakeSources

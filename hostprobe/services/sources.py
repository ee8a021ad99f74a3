import socket
import subprocess
import sys
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from pathlib import Path
from typing import Optional, Tuple

import psutil

from hostprobe.config import get_settings
from hostprobe.errors import SourceUnavailable

LOADAVG_PATH = Path("/proc/loadavg")
MEMINFO_PATH = Path("/proc/meminfo")
MOUNTS_PATH = Path("/proc/mounts")
UPTIME_PATH = Path("/proc/uptime")


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise SourceUnavailable(f"failed to read {path}: {exc}") from exc


class HostSources:
    """
    Access to every piece of raw OS data the collectors consume.

    Each method returns the raw text (or value) of one source and raises
    SourceUnavailable if it cannot be read. Collectors receive an instance
    of this class, so tests can hand them a subclass returning fixed data.
    """

    def __init__(self, command_timeout_seconds: Optional[float] = None) -> None:
        if command_timeout_seconds is None:
            command_timeout_seconds = get_settings().command_timeout_seconds
        self.command_timeout_seconds = command_timeout_seconds

    def read_loadavg(self) -> str:
        return _read_text(LOADAVG_PATH)

    def read_meminfo(self) -> str:
        return _read_text(MEMINFO_PATH)

    def read_mounts(self) -> str:
        return _read_text(MOUNTS_PATH)

    def read_uptime(self) -> str:
        return _read_text(UPTIME_PATH)

    def cpu_count(self) -> int:
        count = psutil.cpu_count(logical=True)
        if not count:
            raise SourceUnavailable("number of logical CPU cores is unknown")
        return count

    def disk_usage(self, path: str) -> Tuple[int, int]:
        """
        Return (total_bytes, used_bytes) of the filesystem mounted at path.

        statvfs on a stale network mount can block indefinitely, so the query
        runs in a worker thread and is abandoned after the command timeout.
        """
        executor = ThreadPoolExecutor(max_workers=1)
        try:
            future = executor.submit(psutil.disk_usage, path)
            usage = future.result(timeout=self.command_timeout_seconds)
        except FutureTimeoutError as exc:
            raise SourceUnavailable(
                f"usage query for {path} timed out after {self.command_timeout_seconds}s"
            ) from exc
        except OSError as exc:
            raise SourceUnavailable(f"usage query failed for {path}: {exc}") from exc
        finally:
            executor.shutdown(wait=False)
        return usage.total, usage.used

    def sensors_output(self) -> str:
        """
        Run `sensors` (lm-sensors) and return its stdout.

        Raises SourceUnavailable if the binary is missing, exits non-zero or
        does not finish within the configured timeout.
        """
        try:
            result = subprocess.run(
                ["sensors"],
                check=True,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.command_timeout_seconds,
            )
        except FileNotFoundError as exc:
            raise SourceUnavailable(
                "sensors binary not found; install lm-sensors on the host"
            ) from exc
        except OSError as exc:
            raise SourceUnavailable(f"could not run sensors: {exc}") from exc
        except subprocess.CalledProcessError as exc:
            raise SourceUnavailable(
                f"sensors command failed with return code {exc.returncode}: {exc.stderr}"
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise SourceUnavailable(
                f"sensors command timed out after {exc.timeout}s"
            ) from exc
        return result.stdout

    def hostname(self) -> str:
        try:
            return socket.gethostname()
        except OSError as exc:
            raise SourceUnavailable(f"could not resolve hostname: {exc}") from exc

    def platform(self) -> str:
        return sys.platform

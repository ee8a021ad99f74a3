from typing import List

from pydantic import BaseModel, ConfigDict, Field


class CPUMetrics(BaseModel):
    """Load average and temperature of the host CPU."""

    model_config = ConfigDict(frozen=True)

    load_available: bool = Field(
        ...,
        description="True if the load average could be read",
    )
    load1_pct: int = Field(
        ...,
        ge=0,
        le=100,
        description="1-minute load average per logical core, in percent",
    )
    load5_pct: int = Field(
        ...,
        ge=0,
        le=100,
        description="5-minute load average per logical core, in percent",
    )
    load15_pct: int = Field(
        ...,
        ge=0,
        le=100,
        description="15-minute load average per logical core, in percent",
    )
    temp_available: bool = Field(
        ...,
        description="True if a CPU temperature was found in the sensors output",
    )
    temperature_c: int = Field(
        ...,
        description="CPU temperature in whole degrees Celsius",
    )

    @classmethod
    def unavailable(cls) -> "CPUMetrics":
        return cls(
            load_available=False,
            load1_pct=0,
            load5_pct=0,
            load15_pct=0,
            temp_available=False,
            temperature_c=0,
        )


class MemoryMetrics(BaseModel):
    """RAM and swap usage, all sizes in megabytes."""

    model_config = ConfigDict(frozen=True)

    available: bool = Field(..., description="True if the memory table could be read")
    total_mb: int = Field(..., ge=0, description="Total RAM")
    used_mb: int = Field(..., ge=0, description="RAM in use (total minus available)")
    used_pct: int = Field(..., ge=0, le=100, description="RAM usage in percent")
    swap_available: bool = Field(..., description="True if swap figures are present")
    swap_total_mb: int = Field(..., ge=0, description="Total swap")
    swap_used_mb: int = Field(..., ge=0, description="Swap in use")
    swap_used_pct: int = Field(..., ge=0, le=100, description="Swap usage in percent")

    @classmethod
    def unavailable(cls) -> "MemoryMetrics":
        return cls(
            available=False,
            total_mb=0,
            used_mb=0,
            used_pct=0,
            swap_available=False,
            swap_total_mb=0,
            swap_used_mb=0,
            swap_used_pct=0,
        )


class MountMetrics(BaseModel):
    """Usage of a single mounted filesystem."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Mountpoint, e.g. /home")
    name: str = Field(..., description="Display name of the mount")
    total_mb: int = Field(..., ge=0, description="Filesystem size")
    used_mb: int = Field(..., ge=0, description="Space in use")
    used_pct: int = Field(..., ge=0, le=100, description="Usage in percent")


class HostSnapshot(BaseModel):
    """One complete set of host metrics, built fresh for every request."""

    model_config = ConfigDict(frozen=True)

    available: bool = Field(..., description="Host information could be gathered")
    boot_time: int = Field(
        ...,
        ge=0,
        description="Unix timestamp (seconds) of the last boot",
    )
    hostname: str = Field(..., description="System hostname, empty if unknown")
    platform: str = Field(..., description="Operating system identifier, e.g. linux")
    cpu: CPUMetrics
    memory: MemoryMetrics
    mountpoints: List[MountMetrics] = Field(
        default_factory=list,
        description="Usage of relevant mounted filesystems, in mount table order",
    )

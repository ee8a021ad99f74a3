import os
from functools import lru_cache

from pydantic import BaseModel, Field


class Settings(BaseModel):
    # HTTP listener
    host: str = Field(
        default="0.0.0.0",
        description="Interface the HTTP server binds to",
    )
    port: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="TCP port the HTTP server listens on",
    )
    log_level: str = Field(
        default="info",
        description="Log level for the service and uvicorn, e.g. info or debug",
    )

    # External commands (sensors)
    command_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Upper bound for a single external command invocation",
    )

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            host=os.getenv("HOSTPROBE_HOST", "0.0.0.0"),
            port=int(os.getenv("HOSTPROBE_PORT", "8080")),
            log_level=os.getenv("HOSTPROBE_LOG_LEVEL", "info").lower(),
            command_timeout_seconds=float(os.getenv("HOSTPROBE_COMMAND_TIMEOUT", "5.0")),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()

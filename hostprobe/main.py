import logging

import uvicorn
from fastapi import FastAPI

from hostprobe.api import host
from hostprobe.config import get_settings

app = FastAPI(title="Host Probe")

app.include_router(host.router, tags=["host"])


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()

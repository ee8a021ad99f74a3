from fastapi import APIRouter

from hostprobe.models.host import HostSnapshot
from hostprobe.services import host_monitor

router = APIRouter()


@router.get("/", response_model=HostSnapshot, summary="Host snapshot")
def host_snapshot() -> HostSnapshot:
    """
    Return the current host snapshot.

    All data collection is delegated to the host_monitor service. Collection
    failures only show up as *_available flags, so this endpoint always
    answers with 200. Declared as a plain function so FastAPI runs the
    blocking reads in its threadpool.
    """
    return host_monitor.get_host_snapshot()


@router.get("/health", summary="Liveness probe")
def health() -> dict:
    return {"status": "ok"}

"""Health API Blueprint."""

import threading

from fastapi import APIRouter, Request

from arrmap.constants import OUR_TIMEZONE
from arrmap.utils.health import HealthResponseModel, ThreadHealthModel
from arrmap.version import VERSION_FULL, __version__

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("/")
def health(request: Request) -> HealthResponseModel:
    """API endpoint to check the health of the service."""
    thread_list = [
        ThreadHealthModel(name=thread.name, is_alive=thread.is_alive()) for thread in threading.enumerate()
    ]

    return HealthResponseModel(
        version=__version__,
        version_full=VERSION_FULL,
        time_zone=str(OUR_TIMEZONE.tzname(None)),
        threads=thread_list,
        metadata_store_available=getattr(request.app.state, "mapping_store", None) is not None,
    )

from http import HTTPStatus
from typing import Annotated

from fastapi import Depends, HTTPException, Request

from arrmap.database.handlers import TorrentArrMappingHandler


def get_mapping_store(request: Request) -> TorrentArrMappingHandler:
    """Get the mapping store attached to the running app."""
    store = getattr(request.app.state, "mapping_store", None)
    if store is None:
        raise HTTPException(
            status_code=HTTPStatus.SERVICE_UNAVAILABLE,
            detail="Metadata store not available",
        )
    return store


MappingStoreDep = Annotated[TorrentArrMappingHandler, Depends(get_mapping_store)]

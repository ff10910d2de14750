"""Torrent to arr metadata API Blueprint."""

from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from arrmap.api.deps import MappingStoreDep
from arrmap.database.errors import MappingStoreError
from arrmap.database.models import MappingStats, TorrentArrMapping
from arrmap.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/metadata", tags=["Metadata"])


class MappingSetRequest(BaseModel):
    """Body for setting the arr of a torrent."""

    infohash: str = ""
    torrent_id: str | None = None
    torrent_name: str | None = None
    arr_name: str = ""


class MappingSetResponse(BaseModel):
    status: str = "success"


def _storage_error(e: Exception) -> HTTPException:
    return HTTPException(status_code=HTTPStatus.INTERNAL_SERVER_ERROR, detail=str(e))


# region /api/v1/metadata
@router.get("/stats")
def stats(store: MappingStoreDep) -> MappingStats:
    """API endpoint to get the mapping count, total and per arr."""
    try:
        return store.get_stats()
    except MappingStoreError as e:
        raise _storage_error(e) from e


@router.post("/set")
def set_mapping(entry: MappingSetRequest, store: MappingStoreDep) -> MappingSetResponse:
    """API endpoint to record which arr a torrent belongs to."""
    if entry.infohash == "" or entry.arr_name == "":
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail="Infohash and arr_name are required",
        )

    try:
        store.set_arr_for_torrent(
            infohash=entry.infohash,
            torrent_id=entry.torrent_id or "",
            torrent_name=entry.torrent_name or "",
            arr_name=entry.arr_name,
        )
    except SQLAlchemyError as e:
        raise _storage_error(e) from e

    return MappingSetResponse()


@router.get("/list")
def list_mappings(
    store: MappingStoreDep,
    limit: Annotated[int | None, Query(ge=1)] = None,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> list[TorrentArrMapping]:
    """API endpoint to list mappings, most recently updated first."""
    try:
        return store.list_mappings(limit=limit, offset=offset)
    except MappingStoreError as e:
        raise _storage_error(e) from e


@router.get("/{infohash}")
def get_mapping(infohash: str, store: MappingStoreDep) -> TorrentArrMapping:
    """API endpoint to get the mapping of a single torrent."""
    try:
        mapping = store.get_mapping(infohash)
    except MappingStoreError as e:
        raise _storage_error(e) from e

    if mapping is None:
        raise HTTPException(
            status_code=HTTPStatus.NOT_FOUND,
            detail=f"No mapping for infohash '{infohash}'",
        )
    return mapping


@router.delete("/{infohash}", status_code=HTTPStatus.NO_CONTENT)
def delete_mapping(infohash: str, store: MappingStoreDep) -> None:
    """API endpoint to delete a mapping, succeeds whether or not it existed."""
    try:
        store.delete_mapping(infohash)
    except SQLAlchemyError as e:
        raise _storage_error(e) from e

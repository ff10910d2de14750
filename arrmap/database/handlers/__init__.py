"""Database Handlers."""

from .base import BaseDatabaseHandler
from .torrent_arr_mapping import TorrentArrMappingHandler

__all__ = [
    "BaseDatabaseHandler",
    "TorrentArrMappingHandler",
]
